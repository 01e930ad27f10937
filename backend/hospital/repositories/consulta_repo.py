"""
Appointment repository.

Every list is ordered by ``data_hora`` ascending. The overlap check treats
each appointment as the closed slot ``[data_hora, data_hora + duração]``,
so an appointment starting exactly when another ends still conflicts.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from hospital.db.base import Consulta as DbConsulta
from hospital.domain.entities import Consulta as DomainConsulta
from hospital.domain.entities import StatusConsulta
from hospital.domain.interfaces import IConsultaRepository


class ConsultaRepository(IConsultaRepository):
    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_db_by_id(self, consulta_id: int) -> Optional[DbConsulta]:
        return self.db.query(DbConsulta).filter_by(id=consulta_id).first()

    def get_by_id(self, consulta_id: int) -> Optional[DomainConsulta]:
        db_consulta = self.get_db_by_id(consulta_id)
        return self._to_domain(db_consulta) if db_consulta else None

    def list_all(self) -> List[DomainConsulta]:
        return self._ordered(self.db.query(DbConsulta))

    def list_by_medico(self, medico_id: int) -> List[DomainConsulta]:
        return self._ordered(self.db.query(DbConsulta).filter_by(medico_id=medico_id))

    def list_by_paciente(self, paciente_id: int) -> List[DomainConsulta]:
        return self._ordered(
            self.db.query(DbConsulta).filter_by(paciente_id=paciente_id)
        )

    def list_by_status(self, status: StatusConsulta) -> List[DomainConsulta]:
        return self._ordered(self.db.query(DbConsulta).filter_by(status=status))

    def list_by_periodo(self, inicio: datetime, fim: datetime) -> List[DomainConsulta]:
        return self._ordered(
            self.db.query(DbConsulta).filter(
                DbConsulta.data_hora >= inicio, DbConsulta.data_hora <= fim
            )
        )

    def has_conflict(
        self,
        medico_id: int,
        data_hora: datetime,
        duracao_minutos: int,
        exclude_id: Optional[int] = None,
    ) -> bool:
        # [a, a+d] and [b, b+d] overlap iff a-d <= b <= a+d
        duracao = timedelta(minutes=duracao_minutos)
        query = self.db.query(DbConsulta.id).filter(
            DbConsulta.medico_id == medico_id,
            DbConsulta.status != StatusConsulta.CANCELADA,
            DbConsulta.data_hora <= data_hora + duracao,
            DbConsulta.data_hora >= data_hora - duracao,
        )
        if exclude_id is not None:
            query = query.filter(DbConsulta.id != exclude_id)
        return query.first() is not None

    def create(self, consulta: DomainConsulta) -> DomainConsulta:
        db_consulta = DbConsulta(
            data_hora=consulta.data_hora,
            status=consulta.status,
            medico_id=consulta.medico_id,
            paciente_id=consulta.paciente_id,
            observacao=consulta.observacao,
        )
        self.db.add(db_consulta)
        self.db.flush()
        return self._to_domain(db_consulta)

    def update(self, consulta: DomainConsulta) -> DomainConsulta:
        if not consulta.id:
            raise ValueError("Consulta ID is required for update")

        db_consulta = self.get_db_by_id(consulta.id)
        if not db_consulta:
            raise ValueError(f"Consulta with ID {consulta.id} not found")

        db_consulta.data_hora = consulta.data_hora
        db_consulta.status = consulta.status
        db_consulta.medico_id = consulta.medico_id
        db_consulta.paciente_id = consulta.paciente_id
        db_consulta.observacao = consulta.observacao
        self.db.flush()
        return self._to_domain(db_consulta)

    def delete(self, consulta_id: int) -> bool:
        db_consulta = self.get_db_by_id(consulta_id)
        if not db_consulta:
            return False

        self.db.delete(db_consulta)
        self.db.flush()
        return True

    def _ordered(self, query) -> List[DomainConsulta]:
        rows = query.order_by(DbConsulta.data_hora, DbConsulta.id).all()
        return [self._to_domain(row) for row in rows]

    def _to_domain(self, db_consulta: DbConsulta) -> DomainConsulta:
        """Convert database model to domain entity."""
        return DomainConsulta(
            id=db_consulta.id,
            data_hora=db_consulta.data_hora,
            status=db_consulta.status,
            medico_id=db_consulta.medico_id,
            paciente_id=db_consulta.paciente_id,
            observacao=db_consulta.observacao,
        )
