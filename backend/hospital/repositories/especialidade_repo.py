from typing import List, Optional

from hospital.db.base import Especialidade as DbEspecialidade
from hospital.db.base import medico_especialidades
from hospital.domain.entities import Especialidade as DomainEspecialidade
from hospital.domain.interfaces import IEspecialidadeRepository


class EspecialidadeRepository(IEspecialidadeRepository):
    """Repository for specialty persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_db_by_id(self, especialidade_id: int) -> Optional[DbEspecialidade]:
        """Get specialty by ID, returning database model."""
        return self.db.query(DbEspecialidade).filter_by(id=especialidade_id).first()

    def get_by_id(self, especialidade_id: int) -> Optional[DomainEspecialidade]:
        db_especialidade = self.get_db_by_id(especialidade_id)
        return self._to_domain(db_especialidade) if db_especialidade else None

    def get_by_nome(self, nome: str) -> Optional[DomainEspecialidade]:
        db_especialidade = self.db.query(DbEspecialidade).filter_by(nome=nome).first()
        return self._to_domain(db_especialidade) if db_especialidade else None

    def list_all(self) -> List[DomainEspecialidade]:
        rows = self.db.query(DbEspecialidade).order_by(DbEspecialidade.id).all()
        return [self._to_domain(row) for row in rows]

    def list_by_medico(self, medico_id: int) -> List[DomainEspecialidade]:
        rows = (
            self.db.query(DbEspecialidade)
            .join(
                medico_especialidades,
                medico_especialidades.c.especialidade_id == DbEspecialidade.id,
            )
            .filter(medico_especialidades.c.medico_id == medico_id)
            .order_by(DbEspecialidade.nome)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def has_medicos(self, especialidade_id: int) -> bool:
        count = (
            self.db.query(medico_especialidades)
            .filter(medico_especialidades.c.especialidade_id == especialidade_id)
            .count()
        )
        return count > 0

    def create(self, especialidade: DomainEspecialidade) -> DomainEspecialidade:
        db_especialidade = DbEspecialidade(
            nome=especialidade.nome, descricao=especialidade.descricao
        )
        self.db.add(db_especialidade)
        self.db.flush()
        return self._to_domain(db_especialidade)

    def update(self, especialidade: DomainEspecialidade) -> DomainEspecialidade:
        if not especialidade.id:
            raise ValueError("Especialidade ID is required for update")

        db_especialidade = self.get_db_by_id(especialidade.id)
        if not db_especialidade:
            raise ValueError(f"Especialidade with ID {especialidade.id} not found")

        db_especialidade.nome = especialidade.nome
        db_especialidade.descricao = especialidade.descricao
        self.db.flush()
        return self._to_domain(db_especialidade)

    def delete(self, especialidade_id: int) -> bool:
        db_especialidade = self.get_db_by_id(especialidade_id)
        if not db_especialidade:
            return False

        self.db.delete(db_especialidade)
        self.db.flush()
        return True

    def _to_domain(self, db_especialidade: DbEspecialidade) -> DomainEspecialidade:
        """Convert database model to domain entity."""
        return DomainEspecialidade(
            id=db_especialidade.id,
            nome=db_especialidade.nome,
            descricao=db_especialidade.descricao,
        )
