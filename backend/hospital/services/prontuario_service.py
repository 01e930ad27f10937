"""
Medical record service.
"""

import logging
from datetime import datetime
from typing import Callable, List

from hospital.core.config import now_local
from hospital.core.exceptions import BusinessRuleError, EntityNotFoundError
from hospital.db.session import atomic
from hospital.domain.entities import Prontuario
from hospital.domain.interfaces import IConsultaRepository, IProntuarioRepository
from hospital.schemas.dtos import ProntuarioRequest, ProntuarioResponse

logger = logging.getLogger(__name__)


class ProntuarioService:
    """Application service for medical records.

    Business Rules:
    - Only a REALIZADA appointment can receive a record
    - At most one record per appointment
    - A record never moves to a different appointment
    """

    def __init__(
        self,
        db,
        prontuario_repo: IProntuarioRepository,
        consulta_repo: IConsultaRepository,
        clock: Callable[[], datetime] = now_local,
    ) -> None:
        self.db = db
        self.prontuario_repo = prontuario_repo
        self.consulta_repo = consulta_repo
        self.clock = clock

    def listar_todos(self) -> List[ProntuarioResponse]:
        return [
            ProntuarioResponse.from_domain(p) for p in self.prontuario_repo.list_all()
        ]

    def buscar_por_id(self, prontuario_id: int) -> ProntuarioResponse:
        return ProntuarioResponse.from_domain(self._get_or_raise(prontuario_id))

    def buscar_por_consulta(self, consulta_id: int) -> ProntuarioResponse:
        prontuario = self.prontuario_repo.get_by_consulta(consulta_id)
        if prontuario is None:
            raise EntityNotFoundError(
                f"Prontuário não encontrado para a consulta com ID: {consulta_id}"
            )
        return ProntuarioResponse.from_domain(prontuario)

    def listar_por_paciente(self, paciente_id: int) -> List[ProntuarioResponse]:
        """Records of a patient, newest first."""
        return [
            ProntuarioResponse.from_domain(p)
            for p in self.prontuario_repo.list_by_paciente(paciente_id)
        ]

    def criar(self, request: ProntuarioRequest) -> ProntuarioResponse:
        with atomic(self.db):
            consulta = self.consulta_repo.get_by_id(request.consulta_id)
            if consulta is None:
                raise EntityNotFoundError("Consulta", request.consulta_id)
            if not consulta.realizada:
                raise BusinessRuleError(
                    "Não é possível criar um prontuário para uma consulta não realizada"
                )
            if self.prontuario_repo.exists_for_consulta(request.consulta_id):
                raise BusinessRuleError("Já existe um prontuário para esta consulta")

            created = self.prontuario_repo.create(
                Prontuario(
                    consulta_id=request.consulta_id,
                    anamnese=request.anamnese,
                    diagnostico=request.diagnostico,
                    plano_tratamento=request.plano_tratamento,
                    data_criacao=self.clock(),
                )
            )

        logger.info(
            "Prontuário criado",
            extra={
                "context": {
                    "prontuario_id": created.id,
                    "consulta_id": created.consulta_id,
                }
            },
        )
        return ProntuarioResponse.from_domain(created)

    def atualizar(
        self, prontuario_id: int, request: ProntuarioRequest
    ) -> ProntuarioResponse:
        with atomic(self.db):
            prontuario = self._get_or_raise(prontuario_id)
            if request.consulta_id != prontuario.consulta_id:
                raise BusinessRuleError(
                    "Não é possível alterar a consulta associada ao prontuário"
                )

            prontuario.anamnese = request.anamnese
            prontuario.diagnostico = request.diagnostico
            prontuario.plano_tratamento = request.plano_tratamento
            prontuario.data_atualizacao = self.clock()
            updated = self.prontuario_repo.update(prontuario)

        logger.info(
            "Prontuário atualizado", extra={"context": {"prontuario_id": prontuario_id}}
        )
        return ProntuarioResponse.from_domain(updated)

    def excluir(self, prontuario_id: int) -> None:
        with atomic(self.db):
            self._get_or_raise(prontuario_id)
            self.prontuario_repo.delete(prontuario_id)

        logger.info(
            "Prontuário excluído", extra={"context": {"prontuario_id": prontuario_id}}
        )

    def _get_or_raise(self, prontuario_id: int) -> Prontuario:
        prontuario = self.prontuario_repo.get_by_id(prontuario_id)
        if prontuario is None:
            raise EntityNotFoundError("Prontuário", prontuario_id)
        return prontuario
