"""
Fixtures for API integration tests: a small helper that creates the
registry records most scenarios need through the HTTP API.
"""

from datetime import timedelta

import pytest

from hospital.core.config import now_local


class ApiHelper:
    """Thin wrapper over the Flask test client for building test data."""

    def __init__(self, client):
        self.client = client
        self._seq = 0

    def _next(self) -> int:
        self._seq += 1
        return self._seq

    def create(self, resource: str, payload: dict) -> dict:
        response = self.client.post(f"/api/v1/{resource}", json=payload)
        assert response.status_code == 201, response.get_data(as_text=True)
        return response.get_json()

    def especialidade(self, nome: str = "Cardiologia") -> dict:
        return self.create(
            "especialidades", {"nome": nome, "descricao": f"Especialidade {nome}"}
        )

    def medico(self, crm: str = None, especialidade_ids=None, email: str = None) -> dict:
        n = self._next()
        return self.create(
            "medicos",
            {
                "nome": f"Dr. Médico {n}",
                "crm": crm or f"{10000 + n}",
                "email": email or f"medico{n}@hospital.com",
                "telefone": "11987654321",
                "especialidade_ids": especialidade_ids or [],
            },
        )

    def paciente(self, cpf: str = None, nome: str = None) -> dict:
        n = self._next()
        return self.create(
            "pacientes",
            {
                "nome": nome or f"Paciente {n}",
                "cpf": cpf or f"{n:011d}",
                "data_nascimento": "1980-06-15",
                "email": f"paciente{n}@example.com",
                "telefone": "11912345678",
                "endereco": "Rua das Flores, 100",
            },
        )

    def consulta(self, medico_id: int, paciente_id: int, data_hora: str) -> dict:
        return self.create(
            "consultas",
            {"data_hora": data_hora, "medico_id": medico_id, "paciente_id": paciente_id},
        )

    def consulta_realizada(self, data_hora: str) -> dict:
        medico = self.medico()
        paciente = self.paciente()
        consulta = self.consulta(medico["id"], paciente["id"], data_hora)
        response = self.client.put(f"/api/v1/consultas/{consulta['id']}/realizar")
        assert response.status_code == 200
        return response.get_json()


@pytest.fixture
def api(client):
    return ApiHelper(client)


@pytest.fixture
def next_week():
    """ISO date-time one week from now."""
    return (now_local() + timedelta(days=7)).replace(microsecond=0).isoformat()
