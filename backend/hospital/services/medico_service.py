"""
Doctor service.
"""

import logging
from typing import List

from hospital.core.exceptions import BusinessRuleError, EntityNotFoundError
from hospital.db.session import atomic
from hospital.domain.entities import Medico
from hospital.domain.interfaces import IEspecialidadeRepository, IMedicoRepository
from hospital.schemas.dtos import MedicoRequest, MedicoResponse

logger = logging.getLogger(__name__)


class MedicoService:
    """Application service for doctor use-cases.

    Business Rules:
    - CRM is unique (checked here; email uniqueness is left to the database)
    - Every specialty id must exist
    - A doctor with appointments cannot be deleted
    """

    def __init__(
        self,
        db,
        medico_repo: IMedicoRepository,
        especialidade_repo: IEspecialidadeRepository,
    ) -> None:
        self.db = db
        self.medico_repo = medico_repo
        self.especialidade_repo = especialidade_repo

    def listar_todos(self) -> List[MedicoResponse]:
        return [MedicoResponse.from_domain(m) for m in self.medico_repo.list_all()]

    def buscar_por_id(self, medico_id: int) -> MedicoResponse:
        return MedicoResponse.from_domain(self._get_or_raise(medico_id))

    def buscar_por_nome(self, nome: str) -> List[MedicoResponse]:
        return [
            MedicoResponse.from_domain(m) for m in self.medico_repo.search_by_nome(nome)
        ]

    def listar_por_especialidade(self, especialidade_id: int) -> List[MedicoResponse]:
        return [
            MedicoResponse.from_domain(m)
            for m in self.medico_repo.list_by_especialidade(especialidade_id)
        ]

    def criar(self, request: MedicoRequest) -> MedicoResponse:
        with atomic(self.db):
            if self.medico_repo.get_by_crm(request.crm) is not None:
                raise BusinessRuleError(f"Médico já cadastrado com o CRM: {request.crm}")
            self._check_especialidades(request.especialidade_ids)
            created = self.medico_repo.create(
                Medico(
                    nome=request.nome,
                    crm=request.crm,
                    email=request.email,
                    telefone=request.telefone,
                    especialidade_ids=request.especialidade_ids,
                )
            )

        logger.info(
            "Médico criado",
            extra={"context": {"medico_id": created.id, "crm": created.crm}},
        )
        return MedicoResponse.from_domain(created)

    def atualizar(self, medico_id: int, request: MedicoRequest) -> MedicoResponse:
        with atomic(self.db):
            medico = self._get_or_raise(medico_id)
            if (
                request.crm != medico.crm
                and self.medico_repo.get_by_crm(request.crm) is not None
            ):
                raise BusinessRuleError(
                    f"Já existe um médico cadastrado com o CRM: {request.crm}"
                )
            self._check_especialidades(request.especialidade_ids)

            medico.nome = request.nome
            medico.crm = request.crm
            medico.email = request.email
            medico.telefone = request.telefone
            medico.especialidade_ids = list(request.especialidade_ids)
            updated = self.medico_repo.update(medico)

        logger.info("Médico atualizado", extra={"context": {"medico_id": medico_id}})
        return MedicoResponse.from_domain(updated)

    def excluir(self, medico_id: int) -> None:
        with atomic(self.db):
            self._get_or_raise(medico_id)
            if self.medico_repo.has_consultas(medico_id):
                raise BusinessRuleError(
                    "Não é possível excluir o médico pois ele possui consultas associadas"
                )
            self.medico_repo.delete(medico_id)

        logger.info("Médico excluído", extra={"context": {"medico_id": medico_id}})

    def _check_especialidades(self, especialidade_ids: List[int]) -> None:
        for especialidade_id in especialidade_ids:
            if self.especialidade_repo.get_by_id(especialidade_id) is None:
                raise EntityNotFoundError("Especialidade", especialidade_id)

    def _get_or_raise(self, medico_id: int) -> Medico:
        medico = self.medico_repo.get_by_id(medico_id)
        if medico is None:
            raise EntityNotFoundError("Médico", medico_id)
        return medico
