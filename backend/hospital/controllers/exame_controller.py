"""
Exam controller: HTTP endpoints under /api/v1/exames.
"""

from typing import Optional

from flask import Blueprint, request, url_for

from hospital.core.api_utils import (
    created_response,
    get_db_session,
    json_item,
    json_list,
    no_content,
)
from hospital.core.validation import BaseValidator, ValidationResult, parse_enum_param
from hospital.domain.entities import TipoExame
from hospital.repositories.consulta_repo import ConsultaRepository
from hospital.repositories.exame_repo import ExameRepository
from hospital.schemas.dtos import ExameRequest
from hospital.services.exame_service import ExameService

exame_bp = Blueprint("exames", __name__, url_prefix="/api/v1/exames")


class ExameController:
    def __init__(self, exame_service: ExameService):
        self.exame_service = exame_service

    def listar(self):
        return json_list(self.exame_service.listar_todos())

    def buscar(self, exame_id: int):
        return json_item(self.exame_service.buscar_por_id(exame_id))

    def listar_por_consulta(self, consulta_id: int):
        return json_list(self.exame_service.listar_por_consulta(consulta_id))

    def listar_por_paciente(self, paciente_id: int):
        return json_list(self.exame_service.listar_por_paciente(paciente_id))

    def listar_por_tipo(self, tipo: str):
        tipo_enum = parse_enum_param(tipo, "tipo", TipoExame)
        return json_list(self.exame_service.listar_por_tipo(tipo_enum))

    def listar_pendentes(self):
        return json_list(self.exame_service.listar_pendentes())

    def criar(self):
        dto = ExameRequest.from_json(request.get_json(silent=True))
        created = self.exame_service.criar(dto)
        return created_response(
            created, url_for("exames.buscar_exame", exame_id=created.id)
        )

    def atualizar(self, exame_id: int):
        dto = ExameRequest.from_json(request.get_json(silent=True))
        return json_item(self.exame_service.atualizar(exame_id, dto))

    def registrar_resultado(self, exame_id: int):
        """Result comes from ``?resultado=`` or, failing that, the JSON body."""
        resultado = self._read_resultado()
        return json_item(self.exame_service.registrar_resultado(exame_id, resultado))

    def excluir(self, exame_id: int):
        self.exame_service.excluir(exame_id)
        return no_content()

    @staticmethod
    def _read_resultado() -> Optional[str]:
        resultado = request.args.get("resultado")
        if resultado is None:
            body = request.get_json(silent=True)
            if isinstance(body, dict) and body.get("resultado") is not None:
                resultado = str(body["resultado"])

        result = ValidationResult()
        BaseValidator.validate_string(
            resultado,
            "resultado",
            result,
            max_length=1000,
            message="O resultado deve ter no máximo 1000 caracteres",
        )
        result.raise_if_invalid()
        return resultado


def _get_controller() -> ExameController:
    db = get_db_session()
    return ExameController(ExameService(db, ExameRepository(db), ConsultaRepository(db)))


@exame_bp.route("/", methods=["GET"], strict_slashes=False)
def listar_exames():
    return _get_controller().listar()


@exame_bp.route("/<int:exame_id>", methods=["GET"])
def buscar_exame(exame_id: int):
    return _get_controller().buscar(exame_id)


@exame_bp.route("/consulta/<int:consulta_id>", methods=["GET"])
def listar_exames_por_consulta(consulta_id: int):
    return _get_controller().listar_por_consulta(consulta_id)


@exame_bp.route("/paciente/<int:paciente_id>", methods=["GET"])
def listar_exames_por_paciente(paciente_id: int):
    return _get_controller().listar_por_paciente(paciente_id)


@exame_bp.route("/tipo/<tipo>", methods=["GET"])
def listar_exames_por_tipo(tipo: str):
    return _get_controller().listar_por_tipo(tipo)


@exame_bp.route("/pendentes", methods=["GET"])
def listar_exames_pendentes():
    return _get_controller().listar_pendentes()


@exame_bp.route("/", methods=["POST"], strict_slashes=False)
def criar_exame():
    return _get_controller().criar()


@exame_bp.route("/<int:exame_id>", methods=["PUT"])
def atualizar_exame(exame_id: int):
    return _get_controller().atualizar(exame_id)


@exame_bp.route("/<int:exame_id>/resultado", methods=["PUT"])
def registrar_resultado_exame(exame_id: int):
    return _get_controller().registrar_resultado(exame_id)


@exame_bp.route("/<int:exame_id>", methods=["DELETE"])
def excluir_exame(exame_id: int):
    return _get_controller().excluir(exame_id)
