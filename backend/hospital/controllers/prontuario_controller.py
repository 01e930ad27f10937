"""
Medical record controller: HTTP endpoints under /api/v1/prontuarios.
"""

from flask import Blueprint, request, url_for

from hospital.core.api_utils import (
    created_response,
    get_db_session,
    json_item,
    json_list,
    no_content,
)
from hospital.repositories.consulta_repo import ConsultaRepository
from hospital.repositories.prontuario_repo import ProntuarioRepository
from hospital.schemas.dtos import ProntuarioRequest
from hospital.services.prontuario_service import ProntuarioService

prontuario_bp = Blueprint("prontuarios", __name__, url_prefix="/api/v1/prontuarios")


class ProntuarioController:
    def __init__(self, prontuario_service: ProntuarioService):
        self.prontuario_service = prontuario_service

    def listar(self):
        return json_list(self.prontuario_service.listar_todos())

    def buscar(self, prontuario_id: int):
        return json_item(self.prontuario_service.buscar_por_id(prontuario_id))

    def buscar_por_consulta(self, consulta_id: int):
        return json_item(self.prontuario_service.buscar_por_consulta(consulta_id))

    def listar_por_paciente(self, paciente_id: int):
        return json_list(self.prontuario_service.listar_por_paciente(paciente_id))

    def criar(self):
        dto = ProntuarioRequest.from_json(request.get_json(silent=True))
        created = self.prontuario_service.criar(dto)
        return created_response(
            created, url_for("prontuarios.buscar_prontuario", prontuario_id=created.id)
        )

    def atualizar(self, prontuario_id: int):
        dto = ProntuarioRequest.from_json(request.get_json(silent=True))
        return json_item(self.prontuario_service.atualizar(prontuario_id, dto))

    def excluir(self, prontuario_id: int):
        self.prontuario_service.excluir(prontuario_id)
        return no_content()


def _get_controller() -> ProntuarioController:
    db = get_db_session()
    return ProntuarioController(
        ProntuarioService(db, ProntuarioRepository(db), ConsultaRepository(db))
    )


@prontuario_bp.route("/", methods=["GET"], strict_slashes=False)
def listar_prontuarios():
    return _get_controller().listar()


@prontuario_bp.route("/<int:prontuario_id>", methods=["GET"])
def buscar_prontuario(prontuario_id: int):
    return _get_controller().buscar(prontuario_id)


@prontuario_bp.route("/consulta/<int:consulta_id>", methods=["GET"])
def buscar_prontuario_por_consulta(consulta_id: int):
    return _get_controller().buscar_por_consulta(consulta_id)


@prontuario_bp.route("/paciente/<int:paciente_id>", methods=["GET"])
def listar_prontuarios_por_paciente(paciente_id: int):
    return _get_controller().listar_por_paciente(paciente_id)


@prontuario_bp.route("/", methods=["POST"], strict_slashes=False)
def criar_prontuario():
    return _get_controller().criar()


@prontuario_bp.route("/<int:prontuario_id>", methods=["PUT"])
def atualizar_prontuario(prontuario_id: int):
    return _get_controller().atualizar(prontuario_id)


@prontuario_bp.route("/<int:prontuario_id>", methods=["DELETE"])
def excluir_prontuario(prontuario_id: int):
    return _get_controller().excluir(prontuario_id)
