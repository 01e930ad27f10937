from typing import List, Optional

from hospital.db.base import Consulta as DbConsulta
from hospital.db.base import Prontuario as DbProntuario
from hospital.domain.entities import Prontuario as DomainProntuario
from hospital.domain.interfaces import IProntuarioRepository


class ProntuarioRepository(IProntuarioRepository):
    """Repository for medical record persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_db_by_id(self, prontuario_id: int) -> Optional[DbProntuario]:
        return self.db.query(DbProntuario).filter_by(id=prontuario_id).first()

    def get_by_id(self, prontuario_id: int) -> Optional[DomainProntuario]:
        db_prontuario = self.get_db_by_id(prontuario_id)
        return self._to_domain(db_prontuario) if db_prontuario else None

    def get_by_consulta(self, consulta_id: int) -> Optional[DomainProntuario]:
        db_prontuario = (
            self.db.query(DbProntuario).filter_by(consulta_id=consulta_id).first()
        )
        return self._to_domain(db_prontuario) if db_prontuario else None

    def list_all(self) -> List[DomainProntuario]:
        rows = self.db.query(DbProntuario).order_by(DbProntuario.id).all()
        return [self._to_domain(row) for row in rows]

    def list_by_paciente(self, paciente_id: int) -> List[DomainProntuario]:
        rows = (
            self.db.query(DbProntuario)
            .join(DbConsulta, DbConsulta.id == DbProntuario.consulta_id)
            .filter(DbConsulta.paciente_id == paciente_id)
            .order_by(DbProntuario.data_criacao.desc(), DbProntuario.id.desc())
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def exists_for_consulta(self, consulta_id: int) -> bool:
        return (
            self.db.query(DbProntuario.id).filter_by(consulta_id=consulta_id).first()
            is not None
        )

    def create(self, prontuario: DomainProntuario) -> DomainProntuario:
        db_prontuario = DbProntuario(
            consulta_id=prontuario.consulta_id,
            anamnese=prontuario.anamnese,
            diagnostico=prontuario.diagnostico,
            plano_tratamento=prontuario.plano_tratamento,
            data_criacao=prontuario.data_criacao,
            data_atualizacao=prontuario.data_atualizacao,
        )
        self.db.add(db_prontuario)
        self.db.flush()
        return self._to_domain(db_prontuario)

    def update(self, prontuario: DomainProntuario) -> DomainProntuario:
        if not prontuario.id:
            raise ValueError("Prontuario ID is required for update")

        db_prontuario = self.get_db_by_id(prontuario.id)
        if not db_prontuario:
            raise ValueError(f"Prontuario with ID {prontuario.id} not found")

        db_prontuario.anamnese = prontuario.anamnese
        db_prontuario.diagnostico = prontuario.diagnostico
        db_prontuario.plano_tratamento = prontuario.plano_tratamento
        db_prontuario.data_atualizacao = prontuario.data_atualizacao
        self.db.flush()
        return self._to_domain(db_prontuario)

    def delete(self, prontuario_id: int) -> bool:
        db_prontuario = self.get_db_by_id(prontuario_id)
        if not db_prontuario:
            return False

        self.db.delete(db_prontuario)
        self.db.flush()
        return True

    def _to_domain(self, db_prontuario: DbProntuario) -> DomainProntuario:
        return DomainProntuario(
            id=db_prontuario.id,
            consulta_id=db_prontuario.consulta_id,
            anamnese=db_prontuario.anamnese,
            diagnostico=db_prontuario.diagnostico,
            plano_tratamento=db_prontuario.plano_tratamento,
            data_criacao=db_prontuario.data_criacao,
            data_atualizacao=db_prontuario.data_atualizacao,
        )
