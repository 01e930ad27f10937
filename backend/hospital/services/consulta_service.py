"""
Appointment service: scheduling, lifecycle and deletion rules.

Lifecycle:
    AGENDADA -> REALIZADA (terminal)
    AGENDADA -> CANCELADA (terminal)

Availability: a doctor never has two non-cancelled appointments whose
slots ``[data_hora, data_hora + duração)`` overlap. The doctor row is
locked before the overlap check so concurrent bookings for the same doctor
run one after the other.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from hospital.core.config import get_consulta_duracao_minutos, now_local
from hospital.core.exceptions import BusinessRuleError, EntityNotFoundError
from hospital.db.session import atomic
from hospital.domain.entities import Consulta, StatusConsulta
from hospital.domain.interfaces import (
    IConsultaRepository,
    IExameRepository,
    IMedicoRepository,
    IPacienteRepository,
    IProntuarioRepository,
    IReceitaRepository,
)
from hospital.schemas.dtos import ConsultaRequest, ConsultaResponse

logger = logging.getLogger(__name__)


class ConsultaService:
    """Application service for appointment use-cases.

    Business Rules:
    - Doctor and patient must exist
    - Appointments are booked strictly in the future
    - No overlapping non-cancelled appointments for the same doctor
    - REALIZADA and CANCELADA are terminal
    - An appointment with clinical records attached cannot be deleted
    """

    def __init__(
        self,
        db,
        consulta_repo: IConsultaRepository,
        medico_repo: IMedicoRepository,
        paciente_repo: IPacienteRepository,
        prontuario_repo: IProntuarioRepository,
        receita_repo: IReceitaRepository,
        exame_repo: IExameRepository,
        clock: Callable[[], datetime] = now_local,
        duracao_minutos: Optional[int] = None,
    ) -> None:
        self.db = db
        self.consulta_repo = consulta_repo
        self.medico_repo = medico_repo
        self.paciente_repo = paciente_repo
        self.prontuario_repo = prontuario_repo
        self.receita_repo = receita_repo
        self.exame_repo = exame_repo
        self.clock = clock
        self.duracao_minutos = duracao_minutos or get_consulta_duracao_minutos()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def listar_todas(self) -> List[ConsultaResponse]:
        return self._responses(self.consulta_repo.list_all())

    def buscar_por_id(self, consulta_id: int) -> ConsultaResponse:
        return ConsultaResponse.from_domain(self._get_or_raise(consulta_id))

    def listar_por_medico(self, medico_id: int) -> List[ConsultaResponse]:
        return self._responses(self.consulta_repo.list_by_medico(medico_id))

    def listar_por_paciente(self, paciente_id: int) -> List[ConsultaResponse]:
        return self._responses(self.consulta_repo.list_by_paciente(paciente_id))

    def listar_por_status(self, status: StatusConsulta) -> List[ConsultaResponse]:
        return self._responses(self.consulta_repo.list_by_status(status))

    def listar_por_periodo(
        self, inicio: datetime, fim: datetime
    ) -> List[ConsultaResponse]:
        """Appointments with ``inicio <= data_hora <= fim``."""
        return self._responses(self.consulta_repo.list_by_periodo(inicio, fim))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def criar(self, request: ConsultaRequest) -> ConsultaResponse:
        """Book an appointment. Any status sent by the client is ignored."""
        with atomic(self.db):
            self._lock_medico(request.medico_id)
            self._check_paciente(request.paciente_id)
            self._check_future(request.data_hora)
            self._check_disponibilidade(request.medico_id, request.data_hora)

            created = self.consulta_repo.create(
                Consulta(
                    data_hora=request.data_hora,
                    medico_id=request.medico_id,
                    paciente_id=request.paciente_id,
                    status=StatusConsulta.AGENDADA,
                    observacao=request.observacao,
                )
            )

        logger.info(
            "Consulta agendada",
            extra={
                "context": {
                    "consulta_id": created.id,
                    "medico_id": created.medico_id,
                    "paciente_id": created.paciente_id,
                    "data_hora": created.data_hora.isoformat(),
                }
            },
        )
        return ConsultaResponse.from_domain(created)

    def atualizar(self, consulta_id: int, request: ConsultaRequest) -> ConsultaResponse:
        """Update an appointment that has not happened yet.

        Doctor and patient are re-resolved only when they change; the date
        is re-validated when it changes, and availability is re-checked when
        either the date or the doctor changes.
        """
        with atomic(self.db):
            consulta = self._get_or_raise(consulta_id)
            if consulta.realizada:
                raise BusinessRuleError(
                    "Não é possível alterar uma consulta que já foi realizada"
                )

            novo_status = request.status or consulta.status
            if consulta.cancelada and novo_status != StatusConsulta.CANCELADA:
                raise BusinessRuleError(
                    "Não é possível reativar uma consulta que já foi cancelada"
                )

            medico_mudou = request.medico_id != consulta.medico_id
            data_mudou = request.data_hora != consulta.data_hora

            if medico_mudou or data_mudou:
                self._lock_medico(request.medico_id)
            if request.paciente_id != consulta.paciente_id:
                self._check_paciente(request.paciente_id)
            if data_mudou:
                self._check_future(request.data_hora)
            if (medico_mudou or data_mudou) and novo_status != StatusConsulta.CANCELADA:
                self._check_disponibilidade(
                    request.medico_id, request.data_hora, exclude_id=consulta_id
                )

            consulta.data_hora = request.data_hora
            consulta.medico_id = request.medico_id
            consulta.paciente_id = request.paciente_id
            consulta.observacao = request.observacao
            consulta.status = novo_status
            updated = self.consulta_repo.update(consulta)

        logger.info(
            "Consulta atualizada",
            extra={
                "context": {
                    "consulta_id": consulta_id,
                    "status": updated.status.name,
                    "medico_alterado": medico_mudou,
                    "data_alterada": data_mudou,
                }
            },
        )
        return ConsultaResponse.from_domain(updated)

    def cancelar(self, consulta_id: int) -> ConsultaResponse:
        with atomic(self.db):
            consulta = self._get_or_raise(consulta_id)
            if consulta.realizada:
                raise BusinessRuleError(
                    "Não é possível cancelar uma consulta que já foi realizada"
                )
            if consulta.cancelada:
                raise BusinessRuleError("Esta consulta já está cancelada")

            consulta.status = StatusConsulta.CANCELADA
            updated = self.consulta_repo.update(consulta)

        logger.info("Consulta cancelada", extra={"context": {"consulta_id": consulta_id}})
        return ConsultaResponse.from_domain(updated)

    def realizar(self, consulta_id: int) -> ConsultaResponse:
        with atomic(self.db):
            consulta = self._get_or_raise(consulta_id)
            if consulta.cancelada:
                raise BusinessRuleError("Não é possível realizar uma consulta cancelada")
            if consulta.realizada:
                raise BusinessRuleError("Esta consulta já foi realizada")

            consulta.status = StatusConsulta.REALIZADA
            updated = self.consulta_repo.update(consulta)

        logger.info("Consulta realizada", extra={"context": {"consulta_id": consulta_id}})
        return ConsultaResponse.from_domain(updated)

    def excluir(self, consulta_id: int) -> None:
        with atomic(self.db):
            consulta = self._get_or_raise(consulta_id)
            if consulta.realizada:
                raise BusinessRuleError(
                    "Não é possível excluir uma consulta que já foi realizada"
                )
            if self.prontuario_repo.exists_for_consulta(consulta_id):
                raise BusinessRuleError(
                    "Não é possível excluir a consulta pois ela possui um prontuário associado"
                )
            if self.receita_repo.exists_for_consulta(consulta_id):
                raise BusinessRuleError(
                    "Não é possível excluir a consulta pois ela possui receitas associadas"
                )
            if self.exame_repo.exists_for_consulta(consulta_id):
                raise BusinessRuleError(
                    "Não é possível excluir a consulta pois ela possui exames associados"
                )
            self.consulta_repo.delete(consulta_id)

        logger.info("Consulta excluída", extra={"context": {"consulta_id": consulta_id}})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_or_raise(self, consulta_id: int) -> Consulta:
        consulta = self.consulta_repo.get_by_id(consulta_id)
        if consulta is None:
            raise EntityNotFoundError("Consulta", consulta_id)
        return consulta

    def _lock_medico(self, medico_id: int) -> None:
        if self.medico_repo.get_by_id_for_update(medico_id) is None:
            raise EntityNotFoundError("Médico", medico_id)

    def _check_paciente(self, paciente_id: int) -> None:
        if self.paciente_repo.get_by_id(paciente_id) is None:
            raise EntityNotFoundError("Paciente", paciente_id)

    def _check_future(self, data_hora: datetime) -> None:
        if data_hora <= self.clock():
            raise BusinessRuleError("A data da consulta não pode ser no passado")

    def _check_disponibilidade(
        self, medico_id: int, data_hora: datetime, exclude_id: Optional[int] = None
    ) -> None:
        if self.consulta_repo.has_conflict(
            medico_id, data_hora, self.duracao_minutos, exclude_id=exclude_id
        ):
            logger.warning(
                "Conflito de horário",
                extra={
                    "context": {
                        "medico_id": medico_id,
                        "data_hora": data_hora.isoformat(),
                    }
                },
            )
            raise BusinessRuleError(
                "O médico já possui uma consulta agendada neste horário"
            )

    @staticmethod
    def _responses(consultas: List[Consulta]) -> List[ConsultaResponse]:
        return [ConsultaResponse.from_domain(c) for c in consultas]
