"""
Specialty controller: HTTP endpoints under /api/v1/especialidades.
"""

from flask import Blueprint, request, url_for

from hospital.core.api_utils import (
    created_response,
    get_db_session,
    json_item,
    json_list,
    no_content,
)
from hospital.repositories.especialidade_repo import EspecialidadeRepository
from hospital.schemas.dtos import EspecialidadeRequest
from hospital.services.especialidade_service import EspecialidadeService

especialidade_bp = Blueprint(
    "especialidades", __name__, url_prefix="/api/v1/especialidades"
)


class EspecialidadeController:
    """Controller for specialty endpoints. Errors propagate to the app's error handlers."""

    def __init__(self, especialidade_service: EspecialidadeService):
        self.especialidade_service = especialidade_service

    def listar(self):
        return json_list(self.especialidade_service.listar_todas())

    def buscar(self, especialidade_id: int):
        return json_item(self.especialidade_service.buscar_por_id(especialidade_id))

    def buscar_por_nome(self, nome: str):
        return json_item(self.especialidade_service.buscar_por_nome(nome))

    def listar_por_medico(self, medico_id: int):
        return json_list(self.especialidade_service.listar_por_medico(medico_id))

    def criar(self):
        dto = EspecialidadeRequest.from_json(request.get_json(silent=True))
        created = self.especialidade_service.criar(dto)
        return created_response(
            created,
            url_for("especialidades.buscar_especialidade", especialidade_id=created.id),
        )

    def atualizar(self, especialidade_id: int):
        dto = EspecialidadeRequest.from_json(request.get_json(silent=True))
        return json_item(self.especialidade_service.atualizar(especialidade_id, dto))

    def excluir(self, especialidade_id: int):
        self.especialidade_service.excluir(especialidade_id)
        return no_content()


def _get_controller() -> EspecialidadeController:
    db = get_db_session()
    return EspecialidadeController(
        EspecialidadeService(db, EspecialidadeRepository(db))
    )


@especialidade_bp.route("/", methods=["GET"], strict_slashes=False)
def listar_especialidades():
    return _get_controller().listar()


@especialidade_bp.route("/<int:especialidade_id>", methods=["GET"])
def buscar_especialidade(especialidade_id: int):
    return _get_controller().buscar(especialidade_id)


@especialidade_bp.route("/nome/<nome>", methods=["GET"])
def buscar_especialidade_por_nome(nome: str):
    return _get_controller().buscar_por_nome(nome)


@especialidade_bp.route("/medico/<int:medico_id>", methods=["GET"])
def listar_especialidades_por_medico(medico_id: int):
    return _get_controller().listar_por_medico(medico_id)


@especialidade_bp.route("/", methods=["POST"], strict_slashes=False)
def criar_especialidade():
    return _get_controller().criar()


@especialidade_bp.route("/<int:especialidade_id>", methods=["PUT"])
def atualizar_especialidade(especialidade_id: int):
    return _get_controller().atualizar(especialidade_id)


@especialidade_bp.route("/<int:especialidade_id>", methods=["DELETE"])
def excluir_especialidade(especialidade_id: int):
    return _get_controller().excluir(especialidade_id)
