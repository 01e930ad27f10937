"""
Specialty service.
"""

import logging
from typing import List

from hospital.core.exceptions import BusinessRuleError, EntityNotFoundError
from hospital.db.session import atomic
from hospital.domain.entities import Especialidade
from hospital.domain.interfaces import IEspecialidadeRepository
from hospital.schemas.dtos import EspecialidadeRequest, EspecialidadeResponse

logger = logging.getLogger(__name__)


class EspecialidadeService:
    """Application service for specialty use-cases.

    Business Rules:
    - Specialty names are unique
    - A specialty cannot be deleted while doctors hold it
    """

    def __init__(self, db, especialidade_repo: IEspecialidadeRepository) -> None:
        self.db = db
        self.especialidade_repo = especialidade_repo

    def listar_todas(self) -> List[EspecialidadeResponse]:
        return [
            EspecialidadeResponse.from_domain(e)
            for e in self.especialidade_repo.list_all()
        ]

    def buscar_por_id(self, especialidade_id: int) -> EspecialidadeResponse:
        return EspecialidadeResponse.from_domain(self._get_or_raise(especialidade_id))

    def buscar_por_nome(self, nome: str) -> EspecialidadeResponse:
        especialidade = self.especialidade_repo.get_by_nome(nome)
        if especialidade is None:
            raise EntityNotFoundError(f"Especialidade não encontrada com nome: {nome}")
        return EspecialidadeResponse.from_domain(especialidade)

    def listar_por_medico(self, medico_id: int) -> List[EspecialidadeResponse]:
        return [
            EspecialidadeResponse.from_domain(e)
            for e in self.especialidade_repo.list_by_medico(medico_id)
        ]

    def criar(self, request: EspecialidadeRequest) -> EspecialidadeResponse:
        with atomic(self.db):
            if self.especialidade_repo.get_by_nome(request.nome) is not None:
                raise BusinessRuleError(
                    f"Já existe uma especialidade cadastrada com o nome: {request.nome}"
                )
            created = self.especialidade_repo.create(
                Especialidade(nome=request.nome, descricao=request.descricao)
            )

        logger.info(
            "Especialidade criada",
            extra={"context": {"especialidade_id": created.id, "nome": created.nome}},
        )
        return EspecialidadeResponse.from_domain(created)

    def atualizar(
        self, especialidade_id: int, request: EspecialidadeRequest
    ) -> EspecialidadeResponse:
        with atomic(self.db):
            especialidade = self._get_or_raise(especialidade_id)
            if (
                request.nome != especialidade.nome
                and self.especialidade_repo.get_by_nome(request.nome) is not None
            ):
                raise BusinessRuleError(
                    f"Já existe uma especialidade cadastrada com o nome: {request.nome}"
                )
            especialidade.nome = request.nome
            especialidade.descricao = request.descricao
            updated = self.especialidade_repo.update(especialidade)

        logger.info(
            "Especialidade atualizada",
            extra={"context": {"especialidade_id": especialidade_id}},
        )
        return EspecialidadeResponse.from_domain(updated)

    def excluir(self, especialidade_id: int) -> None:
        with atomic(self.db):
            self._get_or_raise(especialidade_id)
            if self.especialidade_repo.has_medicos(especialidade_id):
                raise BusinessRuleError(
                    "Não é possível excluir a especialidade pois ela está associada a médicos"
                )
            self.especialidade_repo.delete(especialidade_id)

        logger.info(
            "Especialidade excluída",
            extra={"context": {"especialidade_id": especialidade_id}},
        )

    def _get_or_raise(self, especialidade_id: int) -> Especialidade:
        especialidade = self.especialidade_repo.get_by_id(especialidade_id)
        if especialidade is None:
            raise EntityNotFoundError("Especialidade", especialidade_id)
        return especialidade
