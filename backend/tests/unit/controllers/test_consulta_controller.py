"""
Unit tests for the appointment controller.

The blueprint runs inside a minimal Flask app with the error handlers
registered; ConsultaService is replaced by a mock so only request parsing,
status codes and response bodies are exercised.
"""

from datetime import datetime
from unittest.mock import patch

import pytest
from flask import Flask

from hospital.controllers.consulta_controller import consulta_bp
from hospital.core.api_utils import close_db_session
from hospital.core.error_handlers import register_error_handlers
from hospital.core.exceptions import BusinessRuleError, EntityNotFoundError
from hospital.domain.entities import StatusConsulta
from hospital.schemas.dtos import ConsultaResponse


@pytest.fixture
def app():
    app = Flask(__name__)
    app.config["TESTING"] = True
    register_error_handlers(app)
    app.teardown_appcontext(close_db_session)
    app.register_blueprint(consulta_bp)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mock_service():
    with patch("hospital.controllers.consulta_controller.ConsultaService") as service_cls:
        yield service_cls.return_value


def _response(consulta_id=1, status=StatusConsulta.AGENDADA):
    return ConsultaResponse(
        id=consulta_id,
        data_hora=datetime(2030, 3, 1, 10, 0),
        status=status,
        medico_id=1,
        paciente_id=2,
        observacao=None,
    )


@pytest.mark.unit
@pytest.mark.controllers
class TestConsultaController:
    def test_listar(self, client, mock_service):
        mock_service.listar_todas.return_value = [_response(1), _response(2)]

        response = client.get("/api/v1/consultas")

        assert response.status_code == 200
        assert [c["id"] for c in response.get_json()] == [1, 2]

    def test_criar_returns_201_with_location(self, client, mock_service):
        mock_service.criar.return_value = _response(7)

        response = client.post(
            "/api/v1/consultas",
            json={"data_hora": "2030-03-01T10:00:00", "medico_id": 1, "paciente_id": 2},
        )

        assert response.status_code == 201
        assert response.headers["Location"].endswith("/api/v1/consultas/7")
        assert response.get_json()["status"] == "AGENDADA"
        dto = mock_service.criar.call_args.args[0]
        assert dto.data_hora == datetime(2030, 3, 1, 10, 0)

    def test_criar_invalid_body(self, client, mock_service):
        response = client.post("/api/v1/consultas", json={"medico_id": "abc"})

        body = response.get_json()
        assert response.status_code == 400
        assert body["message"] == "Erro de validação"
        assert body["path"] == "/api/v1/consultas"
        assert any(error.startswith("data_hora:") for error in body["errors"])
        mock_service.criar.assert_not_called()

    def test_criar_without_json(self, client, mock_service):
        response = client.post("/api/v1/consultas", data="not json")

        assert response.status_code == 400
        assert response.get_json()["errors"] == [
            "Corpo da requisição deve ser um objeto JSON"
        ]

    def test_business_rule_maps_to_400(self, client, mock_service):
        mock_service.cancelar.side_effect = BusinessRuleError(
            "Esta consulta já está cancelada"
        )

        response = client.put("/api/v1/consultas/1/cancelar")

        assert response.status_code == 400
        assert response.get_json()["message"] == "Esta consulta já está cancelada"

    def test_not_found_maps_to_404(self, client, mock_service):
        mock_service.buscar_por_id.side_effect = EntityNotFoundError("Consulta", 9)

        response = client.get("/api/v1/consultas/9")

        body = response.get_json()
        assert response.status_code == 404
        assert body["status"] == 404
        assert body["errors"] == []

    def test_listar_por_status(self, client, mock_service):
        mock_service.listar_por_status.return_value = []

        response = client.get("/api/v1/consultas/status/realizada")

        assert response.status_code == 200
        mock_service.listar_por_status.assert_called_once_with(StatusConsulta.REALIZADA)

    def test_listar_por_status_invalid(self, client, mock_service):
        response = client.get("/api/v1/consultas/status/PENDENTE")

        assert response.status_code == 400
        mock_service.listar_por_status.assert_not_called()

    def test_listar_por_periodo(self, client, mock_service):
        mock_service.listar_por_periodo.return_value = [_response()]

        response = client.get(
            "/api/v1/consultas/periodo?inicio=2030-03-01T00:00:00&fim=2030-03-31T23:59:59"
        )

        assert response.status_code == 200
        mock_service.listar_por_periodo.assert_called_once_with(
            datetime(2030, 3, 1), datetime(2030, 3, 31, 23, 59, 59)
        )

    def test_listar_por_periodo_bad_format(self, client, mock_service):
        response = client.get("/api/v1/consultas/periodo?inicio=01-03-2030&fim=x")

        body = response.get_json()
        assert response.status_code == 400
        assert body["errors"][0].startswith("inicio: Formato de data inválido")

    def test_excluir_returns_204(self, client, mock_service):
        response = client.delete("/api/v1/consultas/4")

        assert response.status_code == 204
        assert response.data == b""
        mock_service.excluir.assert_called_once_with(4)

    def test_unexpected_error_maps_to_500(self, client, mock_service):
        mock_service.realizar.side_effect = RuntimeError("boom")

        response = client.put("/api/v1/consultas/1/realizar")

        body = response.get_json()
        assert response.status_code == 500
        assert body["message"] == "Erro interno do servidor"
