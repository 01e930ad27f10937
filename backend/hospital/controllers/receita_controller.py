"""
Prescription controller: HTTP endpoints under /api/v1/receitas.
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
from hospital.repositories.consulta_repo import ConsultaRepository
from hospital.repositories.receita_repo import ReceitaRepository
from hospital.schemas.dtos import ReceitaRequest
from hospital.services.receita_service import ReceitaService

receita_bp = Blueprint("receitas", __name__, url_prefix="/api/v1/receitas")


class ReceitaController:
    def __init__(self, receita_service: ReceitaService):
        self.receita_service = receita_service

    def listar(self):
        return json_list(self.receita_service.listar_todas())

    def buscar(self, receita_id: int):
        return json_item(self.receita_service.buscar_por_id(receita_id))

    def listar_por_consulta(self, consulta_id: int):
        return json_list(self.receita_service.listar_por_consulta(consulta_id))

    def listar_por_paciente(self, paciente_id: int):
        return json_list(self.receita_service.listar_por_paciente(paciente_id))

    def listar_por_medicamento(self):
        nome = require_query_param(request.args, "nome")
        return json_list(self.receita_service.listar_por_medicamento(nome))

    def criar(self):
        dto = ReceitaRequest.from_json(request.get_json(silent=True))
        created = self.receita_service.criar(dto)
        return created_response(
            created, url_for("receitas.buscar_receita", receita_id=created.id)
        )

    def atualizar(self, receita_id: int):
        dto = ReceitaRequest.from_json(request.get_json(silent=True))
        return json_item(self.receita_service.atualizar(receita_id, dto))

    def excluir(self, receita_id: int):
        self.receita_service.excluir(receita_id)
        return no_content()


def _get_controller() -> ReceitaController:
    db = get_db_session()
    return ReceitaController(
        ReceitaService(db, ReceitaRepository(db), ConsultaRepository(db))
    )


@receita_bp.route("/", methods=["GET"], strict_slashes=False)
def listar_receitas():
    return _get_controller().listar()


@receita_bp.route("/<int:receita_id>", methods=["GET"])
def buscar_receita(receita_id: int):
    return _get_controller().buscar(receita_id)


@receita_bp.route("/consulta/<int:consulta_id>", methods=["GET"])
def listar_receitas_por_consulta(consulta_id: int):
    return _get_controller().listar_por_consulta(consulta_id)


@receita_bp.route("/paciente/<int:paciente_id>", methods=["GET"])
def listar_receitas_por_paciente(paciente_id: int):
    return _get_controller().listar_por_paciente(paciente_id)


@receita_bp.route("/medicamento", methods=["GET"])
def listar_receitas_por_medicamento():
    return _get_controller().listar_por_medicamento()


@receita_bp.route("/", methods=["POST"], strict_slashes=False)
def criar_receita():
    return _get_controller().criar()


@receita_bp.route("/<int:receita_id>", methods=["PUT"])
def atualizar_receita(receita_id: int):
    return _get_controller().atualizar(receita_id)


@receita_bp.route("/<int:receita_id>", methods=["DELETE"])
def excluir_receita(receita_id: int):
    return _get_controller().excluir(receita_id)
