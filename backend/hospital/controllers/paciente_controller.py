"""
Patient controller: HTTP endpoints under /api/v1/pacientes.
"""

from flask import Blueprint, request, url_for

from hospital.core.api_utils import (
    created_response,
    get_db_session,
    json_item,
    json_list,
    no_content,
    require_query_param,
)
from hospital.repositories.paciente_repo import PacienteRepository
from hospital.schemas.dtos import PacienteRequest
from hospital.services.paciente_service import PacienteService

paciente_bp = Blueprint("pacientes", __name__, url_prefix="/api/v1/pacientes")


class PacienteController:
    def __init__(self, paciente_service: PacienteService):
        self.paciente_service = paciente_service

    def listar(self):
        return json_list(self.paciente_service.listar_todos())

    def buscar(self, paciente_id: int):
        return json_item(self.paciente_service.buscar_por_id(paciente_id))

    def buscar_por_nome(self):
        nome = require_query_param(request.args, "nome")
        return json_list(self.paciente_service.buscar_por_nome(nome))

    def buscar_por_cpf(self, cpf: str):
        return json_item(self.paciente_service.buscar_por_cpf(cpf))

    def criar(self):
        dto = PacienteRequest.from_json(request.get_json(silent=True))
        created = self.paciente_service.criar(dto)
        return created_response(
            created, url_for("pacientes.buscar_paciente", paciente_id=created.id)
        )

    def atualizar(self, paciente_id: int):
        dto = PacienteRequest.from_json(request.get_json(silent=True))
        return json_item(self.paciente_service.atualizar(paciente_id, dto))

    def excluir(self, paciente_id: int):
        self.paciente_service.excluir(paciente_id)
        return no_content()


def _get_controller() -> PacienteController:
    db = get_db_session()
    return PacienteController(PacienteService(db, PacienteRepository(db)))


@paciente_bp.route("/", methods=["GET"], strict_slashes=False)
def listar_pacientes():
    return _get_controller().listar()


@paciente_bp.route("/<int:paciente_id>", methods=["GET"])
def buscar_paciente(paciente_id: int):
    return _get_controller().buscar(paciente_id)


@paciente_bp.route("/busca", methods=["GET"])
def buscar_pacientes_por_nome():
    return _get_controller().buscar_por_nome()


@paciente_bp.route("/cpf/<cpf>", methods=["GET"])
def buscar_paciente_por_cpf(cpf: str):
    return _get_controller().buscar_por_cpf(cpf)


@paciente_bp.route("/", methods=["POST"], strict_slashes=False)
def criar_paciente():
    return _get_controller().criar()


@paciente_bp.route("/<int:paciente_id>", methods=["PUT"])
def atualizar_paciente(paciente_id: int):
    return _get_controller().atualizar(paciente_id)


@paciente_bp.route("/<int:paciente_id>", methods=["DELETE"])
def excluir_paciente(paciente_id: int):
    return _get_controller().excluir(paciente_id)
