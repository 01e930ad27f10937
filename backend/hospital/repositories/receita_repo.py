from typing import List, Optional

from hospital.db.base import Consulta as DbConsulta
from hospital.db.base import Receita as DbReceita
from hospital.domain.entities import Receita as DomainReceita
from hospital.domain.interfaces import IReceitaRepository


class ReceitaRepository(IReceitaRepository):
    """Repository for prescription persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_db_by_id(self, receita_id: int) -> Optional[DbReceita]:
        return self.db.query(DbReceita).filter_by(id=receita_id).first()

    def get_by_id(self, receita_id: int) -> Optional[DomainReceita]:
        db_receita = self.get_db_by_id(receita_id)
        return self._to_domain(db_receita) if db_receita else None

    def list_all(self) -> List[DomainReceita]:
        rows = self.db.query(DbReceita).order_by(DbReceita.id).all()
        return [self._to_domain(row) for row in rows]

    def list_by_consulta(self, consulta_id: int) -> List[DomainReceita]:
        rows = (
            self.db.query(DbReceita)
            .filter_by(consulta_id=consulta_id)
            .order_by(DbReceita.data_emissao, DbReceita.id)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def list_by_paciente(self, paciente_id: int) -> List[DomainReceita]:
        rows = (
            self.db.query(DbReceita)
            .join(DbConsulta, DbConsulta.id == DbReceita.consulta_id)
            .filter(DbConsulta.paciente_id == paciente_id)
            .order_by(DbReceita.data_emissao.desc(), DbReceita.id.desc())
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def search_by_medicamento(self, medicamento: str) -> List[DomainReceita]:
        rows = (
            self.db.query(DbReceita)
            .filter(DbReceita.medicamento.ilike(f"%{medicamento}%"))
            .order_by(DbReceita.medicamento, DbReceita.id)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def exists_for_consulta(self, consulta_id: int) -> bool:
        return (
            self.db.query(DbReceita.id).filter_by(consulta_id=consulta_id).first()
            is not None
        )

    def create(self, receita: DomainReceita) -> DomainReceita:
        db_receita = DbReceita(
            consulta_id=receita.consulta_id,
            medicamento=receita.medicamento,
            posologia=receita.posologia,
            observacoes=receita.observacoes,
            data_emissao=receita.data_emissao,
            data_validade=receita.data_validade,
        )
        self.db.add(db_receita)
        self.db.flush()
        return self._to_domain(db_receita)

    def update(self, receita: DomainReceita) -> DomainReceita:
        if not receita.id:
            raise ValueError("Receita ID is required for update")

        db_receita = self.get_db_by_id(receita.id)
        if not db_receita:
            raise ValueError(f"Receita with ID {receita.id} not found")

        db_receita.medicamento = receita.medicamento
        db_receita.posologia = receita.posologia
        db_receita.observacoes = receita.observacoes
        db_receita.data_validade = receita.data_validade
        self.db.flush()
        return self._to_domain(db_receita)

    def delete(self, receita_id: int) -> bool:
        db_receita = self.get_db_by_id(receita_id)
        if not db_receita:
            return False

        self.db.delete(db_receita)
        self.db.flush()
        return True

    def _to_domain(self, db_receita: DbReceita) -> DomainReceita:
        return DomainReceita(
            id=db_receita.id,
            consulta_id=db_receita.consulta_id,
            medicamento=db_receita.medicamento,
            posologia=db_receita.posologia,
            observacoes=db_receita.observacoes,
            data_emissao=db_receita.data_emissao,
            data_validade=db_receita.data_validade,
        )
