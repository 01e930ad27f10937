"""
Exam service: orders, results and pending-exam queries.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from hospital.core.config import now_local
from hospital.core.exceptions import BusinessRuleError, EntityNotFoundError
from hospital.db.session import atomic
from hospital.domain.entities import Exame, TipoExame
from hospital.domain.interfaces import IConsultaRepository, IExameRepository
from hospital.schemas.dtos import ExameRequest, ExameResponse

logger = logging.getLogger(__name__)


class ExameService:
    """Application service for exams.

    Business Rules:
    - Exams are ordered only for REALIZADA appointments
    - An exam never moves to a different appointment
    - A recorded result is never blank; ``data_resultado`` tracks when it arrived
    """

    def __init__(
        self,
        db,
        exame_repo: IExameRepository,
        consulta_repo: IConsultaRepository,
        clock: Callable[[], datetime] = now_local,
    ) -> None:
        self.db = db
        self.exame_repo = exame_repo
        self.consulta_repo = consulta_repo
        self.clock = clock

    def listar_todos(self) -> List[ExameResponse]:
        return self._responses(self.exame_repo.list_all())

    def buscar_por_id(self, exame_id: int) -> ExameResponse:
        return ExameResponse.from_domain(self._get_or_raise(exame_id))

    def listar_por_consulta(self, consulta_id: int) -> List[ExameResponse]:
        return self._responses(self.exame_repo.list_by_consulta(consulta_id))

    def listar_por_paciente(self, paciente_id: int) -> List[ExameResponse]:
        return self._responses(self.exame_repo.list_by_paciente(paciente_id))

    def listar_por_tipo(self, tipo: TipoExame) -> List[ExameResponse]:
        return self._responses(self.exame_repo.list_by_tipo(tipo))

    def listar_pendentes(self) -> List[ExameResponse]:
        return self._responses(self.exame_repo.list_pendentes())

    def criar(self, request: ExameRequest) -> ExameResponse:
        with atomic(self.db):
            consulta = self.consulta_repo.get_by_id(request.consulta_id)
            if consulta is None:
                raise EntityNotFoundError("Consulta", request.consulta_id)
            if not consulta.realizada:
                raise BusinessRuleError(
                    "Não é possível solicitar exame para uma consulta não realizada"
                )

            agora = self.clock()
            exame = Exame(
                consulta_id=request.consulta_id,
                nome=request.nome,
                tipo=request.tipo,
                instrucoes=request.instrucoes,
                data_solicitacao=agora,
            )
            if not _is_blank(request.resultado):
                exame.registrar_resultado(request.resultado, agora)
            created = self.exame_repo.create(exame)

        logger.info(
            "Exame solicitado",
            extra={
                "context": {
                    "exame_id": created.id,
                    "consulta_id": created.consulta_id,
                    "tipo": created.tipo.name,
                }
            },
        )
        return ExameResponse.from_domain(created)

    def atualizar(self, exame_id: int, request: ExameRequest) -> ExameResponse:
        with atomic(self.db):
            exame = self._get_or_raise(exame_id)
            if request.consulta_id != exame.consulta_id:
                raise BusinessRuleError(
                    "Não é possível alterar a consulta associada ao exame"
                )

            exame.nome = request.nome
            exame.tipo = request.tipo
            exame.instrucoes = request.instrucoes
            if not _is_blank(request.resultado):
                exame.resultado = request.resultado
                if exame.data_resultado is None:
                    exame.data_resultado = self.clock()
            updated = self.exame_repo.update(exame)

        logger.info("Exame atualizado", extra={"context": {"exame_id": exame_id}})
        return ExameResponse.from_domain(updated)

    def registrar_resultado(self, exame_id: int, resultado: Optional[str]) -> ExameResponse:
        """Record (or overwrite) the result, stamping ``data_resultado`` with now."""
        with atomic(self.db):
            exame = self._get_or_raise(exame_id)
            if _is_blank(resultado):
                raise BusinessRuleError("O resultado do exame não pode estar vazio")

            exame.registrar_resultado(resultado.strip(), self.clock())
            updated = self.exame_repo.update(exame)

        logger.info(
            "Resultado de exame registrado", extra={"context": {"exame_id": exame_id}}
        )
        return ExameResponse.from_domain(updated)

    def excluir(self, exame_id: int) -> None:
        with atomic(self.db):
            self._get_or_raise(exame_id)
            self.exame_repo.delete(exame_id)

        logger.info("Exame excluído", extra={"context": {"exame_id": exame_id}})

    def _get_or_raise(self, exame_id: int) -> Exame:
        exame = self.exame_repo.get_by_id(exame_id)
        if exame is None:
            raise EntityNotFoundError("Exame", exame_id)
        return exame

    @staticmethod
    def _responses(exames: List[Exame]) -> List[ExameResponse]:
        return [ExameResponse.from_domain(e) for e in exames]


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()
