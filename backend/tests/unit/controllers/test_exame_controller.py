"""
Unit tests for the exam controller.
"""

from datetime import datetime
from unittest.mock import patch

import pytest
from flask import Flask

from hospital.controllers.exame_controller import exame_bp
from hospital.core.api_utils import close_db_session
from hospital.core.error_handlers import register_error_handlers
from hospital.domain.entities import TipoExame
from hospital.schemas.dtos import ExameResponse


@pytest.fixture
def client():
    app = Flask(__name__)
    app.config["TESTING"] = True
    register_error_handlers(app)
    app.teardown_appcontext(close_db_session)
    app.register_blueprint(exame_bp)
    return app.test_client()


@pytest.fixture
def mock_service():
    with patch("hospital.controllers.exame_controller.ExameService") as service_cls:
        yield service_cls.return_value


def _response(resultado=None):
    return ExameResponse(
        id=3,
        consulta_id=1,
        nome="Hemograma",
        tipo=TipoExame.LABORATORIAL,
        instrucoes="Jejum de 8 horas",
        data_solicitacao=datetime(2030, 1, 10, 8, 0),
        data_resultado=datetime(2030, 1, 11, 8, 0) if resultado else None,
        resultado=resultado,
    )


@pytest.mark.unit
@pytest.mark.controllers
class TestExameController:
    def test_registrar_resultado_from_query_string(self, client, mock_service):
        mock_service.registrar_resultado.return_value = _response("Normal")

        response = client.put("/api/v1/exames/3/resultado?resultado=Normal")

        assert response.status_code == 200
        assert response.get_json()["resultado"] == "Normal"
        mock_service.registrar_resultado.assert_called_once_with(3, "Normal")

    def test_registrar_resultado_from_json_body(self, client, mock_service):
        mock_service.registrar_resultado.return_value = _response("Alterado")

        response = client.put("/api/v1/exames/3/resultado", json={"resultado": "Alterado"})

        assert response.status_code == 200
        mock_service.registrar_resultado.assert_called_once_with(3, "Alterado")

    def test_registrar_resultado_missing_reaches_service(self, client, mock_service):
        mock_service.registrar_resultado.return_value = _response("x")

        client.put("/api/v1/exames/3/resultado")

        mock_service.registrar_resultado.assert_called_once_with(3, None)

    def test_registrar_resultado_too_long(self, client, mock_service):
        response = client.put("/api/v1/exames/3/resultado", json={"resultado": "x" * 1001})

        assert response.status_code == 400
        mock_service.registrar_resultado.assert_not_called()

    def test_listar_por_tipo(self, client, mock_service):
        mock_service.listar_por_tipo.return_value = [_response()]

        response = client.get("/api/v1/exames/tipo/laboratorial")

        assert response.status_code == 200
        assert response.get_json()[0]["tipo"] == "LABORATORIAL"
        mock_service.listar_por_tipo.assert_called_once_with(TipoExame.LABORATORIAL)

    def test_listar_por_tipo_invalid(self, client, mock_service):
        response = client.get("/api/v1/exames/tipo/SANGUE")

        body = response.get_json()
        assert response.status_code == 400
        assert body["errors"] == [
            "tipo: Valor deve ser um dos: LABORATORIAL, IMAGEM, OUTROS"
        ]

    def test_listar_pendentes(self, client, mock_service):
        mock_service.listar_pendentes.return_value = [_response()]

        response = client.get("/api/v1/exames/pendentes")

        assert response.status_code == 200
        assert response.get_json()[0]["resultado"] is None

    def test_criar(self, client, mock_service):
        mock_service.criar.return_value = _response()

        response = client.post(
            "/api/v1/exames",
            json={"consulta_id": 1, "nome": "Hemograma", "tipo": "LABORATORIAL"},
        )

        assert response.status_code == 201
        assert response.headers["Location"].endswith("/api/v1/exames/3")
