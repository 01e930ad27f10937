"""
Patient service.
"""

import logging
from typing import List

from hospital.core.exceptions import BusinessRuleError, EntityNotFoundError
from hospital.db.session import atomic
from hospital.domain.entities import Paciente
from hospital.domain.interfaces import IPacienteRepository
from hospital.schemas.dtos import PacienteRequest, PacienteResponse

logger = logging.getLogger(__name__)


class PacienteService:
    """Application service for patient use-cases.

    Business Rules:
    - CPF is unique; a duplicate on creation is a business-rule failure
    - A patient with appointments cannot be deleted
    """

    def __init__(self, db, paciente_repo: IPacienteRepository) -> None:
        self.db = db
        self.paciente_repo = paciente_repo

    def listar_todos(self) -> List[PacienteResponse]:
        return [PacienteResponse.from_domain(p) for p in self.paciente_repo.list_all()]

    def buscar_por_id(self, paciente_id: int) -> PacienteResponse:
        return PacienteResponse.from_domain(self._get_or_raise(paciente_id))

    def buscar_por_nome(self, nome: str) -> List[PacienteResponse]:
        return [
            PacienteResponse.from_domain(p)
            for p in self.paciente_repo.search_by_nome(nome)
        ]

    def buscar_por_cpf(self, cpf: str) -> PacienteResponse:
        paciente = self.paciente_repo.get_by_cpf(cpf)
        if paciente is None:
            raise EntityNotFoundError(f"Paciente não encontrado com CPF: {cpf}")
        return PacienteResponse.from_domain(paciente)

    def criar(self, request: PacienteRequest) -> PacienteResponse:
        with atomic(self.db):
            if self.paciente_repo.get_by_cpf(request.cpf) is not None:
                raise BusinessRuleError(f"Paciente já cadastrado com o CPF: {request.cpf}")
            created = self.paciente_repo.create(
                Paciente(
                    nome=request.nome,
                    cpf=request.cpf,
                    data_nascimento=request.data_nascimento,
                    email=request.email,
                    telefone=request.telefone,
                    endereco=request.endereco,
                )
            )

        # CPF stays out of the logs
        logger.info("Paciente criado", extra={"context": {"paciente_id": created.id}})
        return PacienteResponse.from_domain(created)

    def atualizar(self, paciente_id: int, request: PacienteRequest) -> PacienteResponse:
        with atomic(self.db):
            paciente = self._get_or_raise(paciente_id)
            if (
                request.cpf != paciente.cpf
                and self.paciente_repo.get_by_cpf(request.cpf) is not None
            ):
                raise BusinessRuleError(
                    f"Já existe um paciente cadastrado com o CPF: {request.cpf}"
                )

            paciente.nome = request.nome
            paciente.cpf = request.cpf
            paciente.data_nascimento = request.data_nascimento
            paciente.email = request.email
            paciente.telefone = request.telefone
            paciente.endereco = request.endereco
            updated = self.paciente_repo.update(paciente)

        logger.info("Paciente atualizado", extra={"context": {"paciente_id": paciente_id}})
        return PacienteResponse.from_domain(updated)

    def excluir(self, paciente_id: int) -> None:
        with atomic(self.db):
            self._get_or_raise(paciente_id)
            if self.paciente_repo.has_consultas(paciente_id):
                raise BusinessRuleError(
                    "Não é possível excluir o paciente pois ele possui consultas associadas"
                )
            self.paciente_repo.delete(paciente_id)

        logger.info("Paciente excluído", extra={"context": {"paciente_id": paciente_id}})

    def _get_or_raise(self, paciente_id: int) -> Paciente:
        paciente = self.paciente_repo.get_by_id(paciente_id)
        if paciente is None:
            raise EntityNotFoundError("Paciente", paciente_id)
        return paciente
