"""
Unit tests for ConsultaService status transitions and deletion guards.
"""

from datetime import timedelta

import pytest

from hospital.core.exceptions import BusinessRuleError, EntityNotFoundError
from hospital.domain.entities import Consulta, StatusConsulta
from hospital.services.consulta_service import ConsultaService
from tests.factories.repository_factories import (
    ConsultaRepositoryFactory,
    ExameRepositoryFactory,
    MedicoRepositoryFactory,
    PacienteRepositoryFactory,
    ProntuarioRepositoryFactory,
    ReceitaRepositoryFactory,
)


@pytest.fixture
def repos():
    return {
        "consulta": ConsultaRepositoryFactory.create_mock_full(),
        "prontuario": ProntuarioRepositoryFactory.create_mock_full(),
        "receita": ReceitaRepositoryFactory.create_mock_full(),
        "exame": ExameRepositoryFactory.create_mock_full(),
    }


@pytest.fixture
def service(mock_db_session, repos, clock) -> ConsultaService:
    return ConsultaService(
        mock_db_session,
        repos["consulta"],
        MedicoRepositoryFactory.create_mock_full(),
        PacienteRepositoryFactory.create_mock_full(),
        repos["prontuario"],
        repos["receita"],
        repos["exame"],
        clock=clock,
        duracao_minutos=30,
    )


@pytest.fixture
def consulta(repos, fixed_now) -> Consulta:
    consulta = Consulta(
        id=3,
        data_hora=fixed_now + timedelta(days=2),
        medico_id=1,
        paciente_id=1,
    )
    repos["consulta"].get_by_id.return_value = consulta
    return consulta


@pytest.mark.unit
@pytest.mark.services
class TestConsultaServiceStatusChanges:
    def test_realizar(self, service, consulta):
        assert service.realizar(3).status == StatusConsulta.REALIZADA

    def test_cancelar(self, service, consulta):
        assert service.cancelar(3).status == StatusConsulta.CANCELADA

    def test_realizar_twice_fails(self, service, consulta):
        service.realizar(3)

        with pytest.raises(BusinessRuleError) as exc_info:
            service.realizar(3)
        assert exc_info.value.message == "Esta consulta já foi realizada"

    def test_cancelar_twice_fails(self, service, consulta):
        service.cancelar(3)

        with pytest.raises(BusinessRuleError) as exc_info:
            service.cancelar(3)
        assert exc_info.value.message == "Esta consulta já está cancelada"

    def test_cancelar_after_realizar_fails(self, service, consulta):
        service.realizar(3)

        with pytest.raises(BusinessRuleError) as exc_info:
            service.cancelar(3)
        assert (
            exc_info.value.message
            == "Não é possível cancelar uma consulta que já foi realizada"
        )

    def test_realizar_after_cancelar_fails(self, service, consulta):
        service.cancelar(3)

        with pytest.raises(BusinessRuleError) as exc_info:
            service.realizar(3)
        assert exc_info.value.message == "Não é possível realizar uma consulta cancelada"

    def test_missing_consulta(self, service, repos):
        with pytest.raises(EntityNotFoundError) as exc_info:
            service.cancelar(404)

        assert exc_info.value.entity_id == 404
        repos["consulta"].update.assert_not_called()


@pytest.mark.unit
@pytest.mark.services
class TestConsultaServiceDeletion:
    def test_excluir_agendada(self, service, consulta, repos, mock_db_session):
        service.excluir(3)

        repos["consulta"].delete.assert_called_once_with(3)
        mock_db_session.commit.assert_called_once()

    def test_excluir_cancelada(self, service, consulta, repos):
        consulta.status = StatusConsulta.CANCELADA

        service.excluir(3)

        repos["consulta"].delete.assert_called_once_with(3)

    def test_excluir_realizada_fails(self, service, consulta, repos):
        consulta.status = StatusConsulta.REALIZADA

        with pytest.raises(BusinessRuleError):
            service.excluir(3)
        repos["consulta"].delete.assert_not_called()

    @pytest.mark.parametrize(
        "dependent, message",
        [
            ("prontuario", "possui um prontuário associado"),
            ("receita", "possui receitas associadas"),
            ("exame", "possui exames associados"),
        ],
    )
    def test_excluir_blocked_by_clinical_records(
        self, service, consulta, repos, dependent, message
    ):
        repos[dependent].exists_for_consulta.return_value = True

        with pytest.raises(BusinessRuleError) as exc_info:
            service.excluir(3)

        assert message in exc_info.value.message
        repos["consulta"].delete.assert_not_called()

    def test_excluir_missing(self, service):
        with pytest.raises(EntityNotFoundError):
            service.excluir(8)


@pytest.mark.unit
@pytest.mark.services
class TestConsultaServiceQueries:
    def test_listar_por_status_passes_enum(self, service, repos, consulta):
        repos["consulta"].list_by_status.return_value = [consulta]

        result = service.listar_por_status(StatusConsulta.AGENDADA)

        assert [c.id for c in result] == [3]
        repos["consulta"].list_by_status.assert_called_once_with(StatusConsulta.AGENDADA)

    def test_listar_por_periodo(self, service, repos, fixed_now):
        fim = fixed_now + timedelta(days=7)

        assert service.listar_por_periodo(fixed_now, fim) == []
        repos["consulta"].list_by_periodo.assert_called_once_with(fixed_now, fim)

    def test_buscar_por_id(self, service, consulta):
        result = service.buscar_por_id(3)

        assert result.to_dict()["status"] == "AGENDADA"
