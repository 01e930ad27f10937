from typing import List, Optional

from hospital.db.base import Consulta as DbConsulta
from hospital.db.base import Exame as DbExame
from hospital.domain.entities import Exame as DomainExame
from hospital.domain.entities import TipoExame
from hospital.domain.interfaces import IExameRepository


class ExameRepository(IExameRepository):
    """Repository for exam persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_db_by_id(self, exame_id: int) -> Optional[DbExame]:
        return self.db.query(DbExame).filter_by(id=exame_id).first()

    def get_by_id(self, exame_id: int) -> Optional[DomainExame]:
        db_exame = self.get_db_by_id(exame_id)
        return self._to_domain(db_exame) if db_exame else None

    def list_all(self) -> List[DomainExame]:
        rows = self.db.query(DbExame).order_by(DbExame.id).all()
        return [self._to_domain(row) for row in rows]

    def list_by_consulta(self, consulta_id: int) -> List[DomainExame]:
        rows = (
            self.db.query(DbExame)
            .filter_by(consulta_id=consulta_id)
            .order_by(DbExame.data_solicitacao, DbExame.id)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def list_by_paciente(self, paciente_id: int) -> List[DomainExame]:
        rows = (
            self.db.query(DbExame)
            .join(DbConsulta, DbConsulta.id == DbExame.consulta_id)
            .filter(DbConsulta.paciente_id == paciente_id)
            .order_by(DbExame.data_solicitacao.desc(), DbExame.id.desc())
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def list_by_tipo(self, tipo: TipoExame) -> List[DomainExame]:
        rows = (
            self.db.query(DbExame)
            .filter_by(tipo=tipo)
            .order_by(DbExame.data_solicitacao, DbExame.id)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def list_pendentes(self) -> List[DomainExame]:
        rows = (
            self.db.query(DbExame)
            .filter(DbExame.resultado.is_(None))
            .order_by(DbExame.data_solicitacao, DbExame.id)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def exists_for_consulta(self, consulta_id: int) -> bool:
        return (
            self.db.query(DbExame.id).filter_by(consulta_id=consulta_id).first()
            is not None
        )

    def create(self, exame: DomainExame) -> DomainExame:
        db_exame = DbExame(consulta_id=exame.consulta_id)
        self._apply(db_exame, exame)
        db_exame.data_solicitacao = exame.data_solicitacao
        self.db.add(db_exame)
        self.db.flush()
        return self._to_domain(db_exame)

    def update(self, exame: DomainExame) -> DomainExame:
        if not exame.id:
            raise ValueError("Exame ID is required for update")

        db_exame = self.get_db_by_id(exame.id)
        if not db_exame:
            raise ValueError(f"Exame with ID {exame.id} not found")

        self._apply(db_exame, exame)
        self.db.flush()
        return self._to_domain(db_exame)

    def delete(self, exame_id: int) -> bool:
        db_exame = self.get_db_by_id(exame_id)
        if not db_exame:
            return False

        self.db.delete(db_exame)
        self.db.flush()
        return True

    @staticmethod
    def _apply(db_exame: DbExame, exame: DomainExame) -> None:
        db_exame.nome = exame.nome
        db_exame.tipo = exame.tipo
        db_exame.instrucoes = exame.instrucoes
        db_exame.resultado = exame.resultado
        db_exame.data_resultado = exame.data_resultado

    def _to_domain(self, db_exame: DbExame) -> DomainExame:
        return DomainExame(
            id=db_exame.id,
            consulta_id=db_exame.consulta_id,
            nome=db_exame.nome,
            tipo=db_exame.tipo,
            instrucoes=db_exame.instrucoes,
            data_solicitacao=db_exame.data_solicitacao,
            data_resultado=db_exame.data_resultado,
            resultado=db_exame.resultado,
        )
