from typing import List, Optional

from hospital.db.base import Consulta as DbConsulta
from hospital.db.base import Paciente as DbPaciente
from hospital.domain.entities import Paciente as DomainPaciente
from hospital.domain.interfaces import IPacienteRepository


class PacienteRepository(IPacienteRepository):
    """Repository for patient persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_db_by_id(self, paciente_id: int) -> Optional[DbPaciente]:
        return self.db.query(DbPaciente).filter_by(id=paciente_id).first()

    def get_by_id(self, paciente_id: int) -> Optional[DomainPaciente]:
        db_paciente = self.get_db_by_id(paciente_id)
        return self._to_domain(db_paciente) if db_paciente else None

    def get_by_cpf(self, cpf: str) -> Optional[DomainPaciente]:
        db_paciente = self.db.query(DbPaciente).filter_by(cpf=cpf).first()
        return self._to_domain(db_paciente) if db_paciente else None

    def list_all(self) -> List[DomainPaciente]:
        rows = self.db.query(DbPaciente).order_by(DbPaciente.id).all()
        return [self._to_domain(row) for row in rows]

    def search_by_nome(self, nome: str) -> List[DomainPaciente]:
        rows = (
            self.db.query(DbPaciente)
            .filter(DbPaciente.nome.ilike(f"%{nome}%"))
            .order_by(DbPaciente.nome)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def has_consultas(self, paciente_id: int) -> bool:
        return (
            self.db.query(DbConsulta).filter_by(paciente_id=paciente_id).count() > 0
        )

    def create(self, paciente: DomainPaciente) -> DomainPaciente:
        db_paciente = DbPaciente()
        self._apply(db_paciente, paciente)
        self.db.add(db_paciente)
        self.db.flush()
        return self._to_domain(db_paciente)

    def update(self, paciente: DomainPaciente) -> DomainPaciente:
        if not paciente.id:
            raise ValueError("Paciente ID is required for update")

        db_paciente = self.get_db_by_id(paciente.id)
        if not db_paciente:
            raise ValueError(f"Paciente with ID {paciente.id} not found")

        self._apply(db_paciente, paciente)
        self.db.flush()
        return self._to_domain(db_paciente)

    def delete(self, paciente_id: int) -> bool:
        db_paciente = self.get_db_by_id(paciente_id)
        if not db_paciente:
            return False

        self.db.delete(db_paciente)
        self.db.flush()
        return True

    @staticmethod
    def _apply(db_paciente: DbPaciente, paciente: DomainPaciente) -> None:
        db_paciente.nome = paciente.nome
        db_paciente.cpf = paciente.cpf
        db_paciente.data_nascimento = paciente.data_nascimento
        db_paciente.email = paciente.email
        db_paciente.telefone = paciente.telefone
        db_paciente.endereco = paciente.endereco

    def _to_domain(self, db_paciente: DbPaciente) -> DomainPaciente:
        """Convert database model to domain entity."""
        return DomainPaciente(
            id=db_paciente.id,
            nome=db_paciente.nome,
            cpf=db_paciente.cpf,
            data_nascimento=db_paciente.data_nascimento,
            email=db_paciente.email,
            telefone=db_paciente.telefone,
            endereco=db_paciente.endereco,
        )
