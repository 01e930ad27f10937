"""
Doctor controller: HTTP endpoints under /api/v1/medicos.
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
from hospital.repositories.especialidade_repo import EspecialidadeRepository
from hospital.repositories.medico_repo import MedicoRepository
from hospital.schemas.dtos import MedicoRequest
from hospital.services.medico_service import MedicoService

medico_bp = Blueprint("medicos", __name__, url_prefix="/api/v1/medicos")


class MedicoController:
    def __init__(self, medico_service: MedicoService):
        self.medico_service = medico_service

    def listar(self):
        return json_list(self.medico_service.listar_todos())

    def buscar(self, medico_id: int):
        return json_item(self.medico_service.buscar_por_id(medico_id))

    def buscar_por_nome(self):
        nome = require_query_param(request.args, "nome")
        return json_list(self.medico_service.buscar_por_nome(nome))

    def listar_por_especialidade(self, especialidade_id: int):
        return json_list(self.medico_service.listar_por_especialidade(especialidade_id))

    def criar(self):
        dto = MedicoRequest.from_json(request.get_json(silent=True))
        created = self.medico_service.criar(dto)
        return created_response(
            created, url_for("medicos.buscar_medico", medico_id=created.id)
        )

    def atualizar(self, medico_id: int):
        dto = MedicoRequest.from_json(request.get_json(silent=True))
        return json_item(self.medico_service.atualizar(medico_id, dto))

    def excluir(self, medico_id: int):
        self.medico_service.excluir(medico_id)
        return no_content()


def _get_controller() -> MedicoController:
    db = get_db_session()
    return MedicoController(
        MedicoService(db, MedicoRepository(db), EspecialidadeRepository(db))
    )


@medico_bp.route("/", methods=["GET"], strict_slashes=False)
def listar_medicos():
    return _get_controller().listar()


@medico_bp.route("/<int:medico_id>", methods=["GET"])
def buscar_medico(medico_id: int):
    return _get_controller().buscar(medico_id)


@medico_bp.route("/busca", methods=["GET"])
def buscar_medicos_por_nome():
    return _get_controller().buscar_por_nome()


@medico_bp.route("/especialidade/<int:especialidade_id>", methods=["GET"])
def listar_medicos_por_especialidade(especialidade_id: int):
    return _get_controller().listar_por_especialidade(especialidade_id)


@medico_bp.route("/", methods=["POST"], strict_slashes=False)
def criar_medico():
    return _get_controller().criar()


@medico_bp.route("/<int:medico_id>", methods=["PUT"])
def atualizar_medico(medico_id: int):
    return _get_controller().atualizar(medico_id)


@medico_bp.route("/<int:medico_id>", methods=["DELETE"])
def excluir_medico(medico_id: int):
    return _get_controller().excluir(medico_id)
