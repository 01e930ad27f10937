from typing import List, Optional

from hospital.db.base import Consulta as DbConsulta
from hospital.db.base import Especialidade as DbEspecialidade
from hospital.db.base import Medico as DbMedico
from hospital.db.base import medico_especialidades
from hospital.domain.entities import Medico as DomainMedico
from hospital.domain.interfaces import IMedicoRepository


class MedicoRepository(IMedicoRepository):
    """Repository for doctor persistence operations.

    Specialties are stored in the ``medico_especialidades`` association
    table and exposed on the domain entity as ``especialidade_ids``.
    """

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_db_by_id(self, medico_id: int) -> Optional[DbMedico]:
        """Get doctor by ID, returning database model."""
        return self.db.query(DbMedico).filter_by(id=medico_id).first()

    def get_by_id(self, medico_id: int) -> Optional[DomainMedico]:
        db_medico = self.get_db_by_id(medico_id)
        return self._to_domain(db_medico) if db_medico else None

    def get_by_id_for_update(self, medico_id: int) -> Optional[DomainMedico]:
        """SELECT ... FOR UPDATE on the doctor row (a no-op on SQLite)."""
        db_medico = (
            self.db.query(DbMedico).filter_by(id=medico_id).with_for_update().first()
        )
        return self._to_domain(db_medico) if db_medico else None

    def get_by_crm(self, crm: str) -> Optional[DomainMedico]:
        db_medico = self.db.query(DbMedico).filter_by(crm=crm).first()
        return self._to_domain(db_medico) if db_medico else None

    def list_all(self) -> List[DomainMedico]:
        rows = self.db.query(DbMedico).order_by(DbMedico.id).all()
        return [self._to_domain(row) for row in rows]

    def search_by_nome(self, nome: str) -> List[DomainMedico]:
        rows = (
            self.db.query(DbMedico)
            .filter(DbMedico.nome.ilike(f"%{nome}%"))
            .order_by(DbMedico.nome)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def list_by_especialidade(self, especialidade_id: int) -> List[DomainMedico]:
        rows = (
            self.db.query(DbMedico)
            .join(
                medico_especialidades,
                medico_especialidades.c.medico_id == DbMedico.id,
            )
            .filter(medico_especialidades.c.especialidade_id == especialidade_id)
            .order_by(DbMedico.nome)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def has_consultas(self, medico_id: int) -> bool:
        return self.db.query(DbConsulta).filter_by(medico_id=medico_id).count() > 0

    def create(self, medico: DomainMedico) -> DomainMedico:
        db_medico = DbMedico(
            nome=medico.nome,
            crm=medico.crm,
            email=medico.email,
            telefone=medico.telefone,
        )
        db_medico.especialidades = self._load_especialidades(medico.especialidade_ids)
        self.db.add(db_medico)
        self.db.flush()
        return self._to_domain(db_medico)

    def update(self, medico: DomainMedico) -> DomainMedico:
        if not medico.id:
            raise ValueError("Medico ID is required for update")

        db_medico = self.get_db_by_id(medico.id)
        if not db_medico:
            raise ValueError(f"Medico with ID {medico.id} not found")

        db_medico.nome = medico.nome
        db_medico.crm = medico.crm
        db_medico.email = medico.email
        db_medico.telefone = medico.telefone
        db_medico.especialidades = self._load_especialidades(medico.especialidade_ids)
        self.db.flush()
        return self._to_domain(db_medico)

    def delete(self, medico_id: int) -> bool:
        db_medico = self.get_db_by_id(medico_id)
        if not db_medico:
            return False

        self.db.delete(db_medico)
        self.db.flush()
        return True

    def _load_especialidades(self, especialidade_ids: List[int]) -> List[DbEspecialidade]:
        if not especialidade_ids:
            return []
        return (
            self.db.query(DbEspecialidade)
            .filter(DbEspecialidade.id.in_(especialidade_ids))
            .all()
        )

    def _to_domain(self, db_medico: DbMedico) -> DomainMedico:
        """Convert database model to domain entity."""
        return DomainMedico(
            id=db_medico.id,
            nome=db_medico.nome,
            crm=db_medico.crm,
            email=db_medico.email,
            telefone=db_medico.telefone,
            especialidade_ids=[e.id for e in db_medico.especialidades],
        )
