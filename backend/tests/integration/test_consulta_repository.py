"""
Repository tests for the appointment overlap query against SQLite.
"""

from datetime import datetime, timedelta

import pytest

from hospital.db.base import Medico, Paciente
from hospital.domain.entities import Consulta, StatusConsulta
from hospital.repositories.consulta_repo import ConsultaRepository

SLOT = datetime(2030, 5, 10, 10, 0)


@pytest.fixture
def repo(db_session):
    return ConsultaRepository(db_session)


@pytest.fixture
def medico_id(db_session):
    medico = Medico(nome="Dr. Teste", crm="9999", email="teste@h.com", telefone="1199999999")
    db_session.add(medico)
    db_session.flush()
    return medico.id


@pytest.fixture
def paciente_id(db_session):
    paciente = Paciente(
        nome="Paciente Teste",
        cpf="99999999999",
        data_nascimento=datetime(1990, 1, 1).date(),
        email="p@example.com",
        telefone="1188888888",
        endereco="Rua X, 1",
    )
    db_session.add(paciente)
    db_session.flush()
    return paciente.id


@pytest.fixture
def booked(repo, medico_id, paciente_id):
    return repo.create(Consulta(data_hora=SLOT, medico_id=medico_id, paciente_id=paciente_id))


@pytest.mark.integration
@pytest.mark.repositories
class TestConsultaRepositoryConflicts:
    @pytest.mark.parametrize(
        "offset_minutes, expected",
        [
            (0, True),
            (15, True),
            (-15, True),
            (30, True),
            (-30, True),
            (31, False),
            (-31, False),
        ],
    )
    def test_closed_slots_include_both_ends(
        self, repo, booked, medico_id, offset_minutes, expected
    ):
        candidate = SLOT + timedelta(minutes=offset_minutes)

        assert repo.has_conflict(medico_id, candidate, 30) is expected

    def test_exclude_itself(self, repo, booked, medico_id):
        assert repo.has_conflict(medico_id, SLOT, 30, exclude_id=booked.id) is False

    def test_cancelled_does_not_conflict(self, repo, booked, medico_id):
        booked.status = StatusConsulta.CANCELADA
        repo.update(booked)

        assert repo.has_conflict(medico_id, SLOT, 30) is False

    def test_list_by_periodo_is_inclusive(self, repo, booked):
        assert [c.id for c in repo.list_by_periodo(SLOT, SLOT)] == [booked.id]
        assert repo.list_by_periodo(SLOT + timedelta(seconds=1), SLOT + timedelta(hours=1)) == []

    def test_list_by_status(self, repo, booked):
        assert [c.id for c in repo.list_by_status(StatusConsulta.AGENDADA)] == [booked.id]
        assert repo.list_by_status(StatusConsulta.REALIZADA) == []
