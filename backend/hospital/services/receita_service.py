"""
Prescription service.
"""

import logging
from datetime import datetime
from typing import Callable, List

from hospital.core.config import now_local
from hospital.core.exceptions import BusinessRuleError, EntityNotFoundError
from hospital.db.session import atomic
from hospital.domain.entities import Receita
from hospital.domain.interfaces import IConsultaRepository, IReceitaRepository
from hospital.schemas.dtos import ReceitaRequest, ReceitaResponse

logger = logging.getLogger(__name__)


class ReceitaService:
    """Application service for prescriptions.

    Prescriptions are issued only for REALIZADA appointments and stay tied
    to the appointment they were issued for.
    """

    def __init__(
        self,
        db,
        receita_repo: IReceitaRepository,
        consulta_repo: IConsultaRepository,
        clock: Callable[[], datetime] = now_local,
    ) -> None:
        self.db = db
        self.receita_repo = receita_repo
        self.consulta_repo = consulta_repo
        self.clock = clock

    def listar_todas(self) -> List[ReceitaResponse]:
        return [ReceitaResponse.from_domain(r) for r in self.receita_repo.list_all()]

    def buscar_por_id(self, receita_id: int) -> ReceitaResponse:
        return ReceitaResponse.from_domain(self._get_or_raise(receita_id))

    def listar_por_consulta(self, consulta_id: int) -> List[ReceitaResponse]:
        return [
            ReceitaResponse.from_domain(r)
            for r in self.receita_repo.list_by_consulta(consulta_id)
        ]

    def listar_por_paciente(self, paciente_id: int) -> List[ReceitaResponse]:
        return [
            ReceitaResponse.from_domain(r)
            for r in self.receita_repo.list_by_paciente(paciente_id)
        ]

    def listar_por_medicamento(self, medicamento: str) -> List[ReceitaResponse]:
        return [
            ReceitaResponse.from_domain(r)
            for r in self.receita_repo.search_by_medicamento(medicamento)
        ]

    def criar(self, request: ReceitaRequest) -> ReceitaResponse:
        with atomic(self.db):
            consulta = self.consulta_repo.get_by_id(request.consulta_id)
            if consulta is None:
                raise EntityNotFoundError("Consulta", request.consulta_id)
            if not consulta.realizada:
                raise BusinessRuleError(
                    "Não é possível criar uma receita para uma consulta não realizada"
                )

            created = self.receita_repo.create(
                Receita(
                    consulta_id=request.consulta_id,
                    medicamento=request.medicamento,
                    posologia=request.posologia,
                    observacoes=request.observacoes,
                    data_emissao=self.clock(),
                    data_validade=request.data_validade,
                )
            )

        logger.info(
            "Receita emitida",
            extra={
                "context": {
                    "receita_id": created.id,
                    "consulta_id": created.consulta_id,
                    "medicamento": created.medicamento,
                }
            },
        )
        return ReceitaResponse.from_domain(created)

    def atualizar(self, receita_id: int, request: ReceitaRequest) -> ReceitaResponse:
        with atomic(self.db):
            receita = self._get_or_raise(receita_id)
            if request.consulta_id != receita.consulta_id:
                raise BusinessRuleError(
                    "Não é possível alterar a consulta associada à receita"
                )

            receita.medicamento = request.medicamento
            receita.posologia = request.posologia
            receita.observacoes = request.observacoes
            receita.data_validade = request.data_validade
            updated = self.receita_repo.update(receita)

        logger.info("Receita atualizada", extra={"context": {"receita_id": receita_id}})
        return ReceitaResponse.from_domain(updated)

    def excluir(self, receita_id: int) -> None:
        with atomic(self.db):
            self._get_or_raise(receita_id)
            self.receita_repo.delete(receita_id)

        logger.info("Receita excluída", extra={"context": {"receita_id": receita_id}})

    def _get_or_raise(self, receita_id: int) -> Receita:
        receita = self.receita_repo.get_by_id(receita_id)
        if receita is None:
            raise EntityNotFoundError("Receita", receita_id)
        return receita
