"""
Appointment controller: HTTP endpoints under /api/v1/consultas.
"""

from flask import Blueprint, request, url_for

from hospital.core.api_utils import (
    created_response,
    get_db_session,
    json_item,
    json_list,
    no_content,
)
from hospital.core.validation import parse_datetime_param, parse_enum_param
from hospital.domain.entities import StatusConsulta
from hospital.repositories.consulta_repo import ConsultaRepository
from hospital.repositories.exame_repo import ExameRepository
from hospital.repositories.medico_repo import MedicoRepository
from hospital.repositories.paciente_repo import PacienteRepository
from hospital.repositories.prontuario_repo import ProntuarioRepository
from hospital.repositories.receita_repo import ReceitaRepository
from hospital.schemas.dtos import ConsultaRequest
from hospital.services.consulta_service import ConsultaService

consulta_bp = Blueprint("consultas", __name__, url_prefix="/api/v1/consultas")


class ConsultaController:
    """Controller for appointment endpoints.

    Parsing problems (body fields, ``status`` path value, ``inicio``/``fim``
    query values) surface as validation errors; business failures come from
    the service.
    """

    def __init__(self, consulta_service: ConsultaService):
        self.consulta_service = consulta_service

    def listar(self):
        return json_list(self.consulta_service.listar_todas())

    def buscar(self, consulta_id: int):
        return json_item(self.consulta_service.buscar_por_id(consulta_id))

    def listar_por_medico(self, medico_id: int):
        return json_list(self.consulta_service.listar_por_medico(medico_id))

    def listar_por_paciente(self, paciente_id: int):
        return json_list(self.consulta_service.listar_por_paciente(paciente_id))

    def listar_por_status(self, status: str):
        status_enum = parse_enum_param(status, "status", StatusConsulta)
        return json_list(self.consulta_service.listar_por_status(status_enum))

    def listar_por_periodo(self):
        inicio = parse_datetime_param(request.args.get("inicio"), "inicio")
        fim = parse_datetime_param(request.args.get("fim"), "fim")
        return json_list(self.consulta_service.listar_por_periodo(inicio, fim))

    def criar(self):
        dto = ConsultaRequest.from_json(request.get_json(silent=True))
        created = self.consulta_service.criar(dto)
        return created_response(
            created, url_for("consultas.buscar_consulta", consulta_id=created.id)
        )

    def atualizar(self, consulta_id: int):
        dto = ConsultaRequest.from_json(request.get_json(silent=True))
        return json_item(self.consulta_service.atualizar(consulta_id, dto))

    def cancelar(self, consulta_id: int):
        return json_item(self.consulta_service.cancelar(consulta_id))

    def realizar(self, consulta_id: int):
        return json_item(self.consulta_service.realizar(consulta_id))

    def excluir(self, consulta_id: int):
        self.consulta_service.excluir(consulta_id)
        return no_content()


def _get_controller() -> ConsultaController:
    db = get_db_session()
    service = ConsultaService(
        db,
        ConsultaRepository(db),
        MedicoRepository(db),
        PacienteRepository(db),
        ProntuarioRepository(db),
        ReceitaRepository(db),
        ExameRepository(db),
    )
    return ConsultaController(service)


@consulta_bp.route("/", methods=["GET"], strict_slashes=False)
def listar_consultas():
    return _get_controller().listar()


@consulta_bp.route("/<int:consulta_id>", methods=["GET"])
def buscar_consulta(consulta_id: int):
    return _get_controller().buscar(consulta_id)


@consulta_bp.route("/medico/<int:medico_id>", methods=["GET"])
def listar_consultas_por_medico(medico_id: int):
    return _get_controller().listar_por_medico(medico_id)


@consulta_bp.route("/paciente/<int:paciente_id>", methods=["GET"])
def listar_consultas_por_paciente(paciente_id: int):
    return _get_controller().listar_por_paciente(paciente_id)


@consulta_bp.route("/status/<status>", methods=["GET"])
def listar_consultas_por_status(status: str):
    return _get_controller().listar_por_status(status)


@consulta_bp.route("/periodo", methods=["GET"])
def listar_consultas_por_periodo():
    return _get_controller().listar_por_periodo()


@consulta_bp.route("/", methods=["POST"], strict_slashes=False)
def criar_consulta():
    return _get_controller().criar()


@consulta_bp.route("/<int:consulta_id>", methods=["PUT"])
def atualizar_consulta(consulta_id: int):
    return _get_controller().atualizar(consulta_id)


@consulta_bp.route("/<int:consulta_id>/cancelar", methods=["PUT"])
def cancelar_consulta(consulta_id: int):
    return _get_controller().cancelar(consulta_id)


@consulta_bp.route("/<int:consulta_id>/realizar", methods=["PUT"])
def realizar_consulta(consulta_id: int):
    return _get_controller().realizar(consulta_id)


@consulta_bp.route("/<int:consulta_id>", methods=["DELETE"])
def excluir_consulta(consulta_id: int):
    return _get_controller().excluir(consulta_id)
