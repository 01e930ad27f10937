"""
Tests for payload validators in hospital.core.validation.
"""

from datetime import date, datetime

import pytest

from hospital.core.validation import (
    ValidationError,
    get_validator,
    parse_datetime_param,
    parse_enum_param,
    parse_iso_datetime,
    validate_payload,
)
from hospital.domain.entities import StatusConsulta, TipoExame


def _medico_payload(**overrides):
    payload = {
        "nome": "Dr. João Silva",
        "crm": "12345",
        "email": "joao@hospital.com",
        "telefone": "11987654321",
        "especialidade_ids": [1, 2, 1],
    }
    payload.update(overrides)
    return payload


def _paciente_payload(**overrides):
    payload = {
        "nome": "Maria Souza",
        "cpf": "12345678901",
        "data_nascimento": "1985-05-20",
        "email": "maria@example.com",
        "telefone": "11912345678",
        "endereco": "Rua das Flores, 100",
    }
    payload.update(overrides)
    return payload


class TestValidatePayload:
    def test_non_dict_body(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload("medico", None)
        assert exc_info.value.errors == ["Corpo da requisição deve ser um objeto JSON"]

    def test_unknown_entity_type(self):
        with pytest.raises(ValueError):
            get_validator("enfermeiro")

    def test_collects_every_field_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload("medico", {"crm": "12"})

        errors = exc_info.value.errors
        fields = {error.split(":")[0] for error in errors}
        assert fields == {"nome", "crm", "email", "telefone"}
        assert "crm: CRM deve conter entre 4 e 6 dígitos" in errors


class TestMedicoValidator:
    def test_valid_payload_dedupes_especialidades(self):
        cleaned = validate_payload("medico", _medico_payload())

        assert cleaned["crm"] == "12345"
        assert cleaned["especialidade_ids"] == [1, 2]

    def test_especialidades_optional(self):
        payload = _medico_payload()
        del payload["especialidade_ids"]

        assert validate_payload("medico", payload)["especialidade_ids"] == []

    @pytest.mark.parametrize("telefone", ["123", "119876543210", "11-98765-4321"])
    def test_bad_telefone(self, telefone):
        with pytest.raises(ValidationError):
            validate_payload("medico", _medico_payload(telefone=telefone))

    def test_bad_email(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload("medico", _medico_payload(email="sem-arroba"))
        assert exc_info.value.errors == ["email: Email inválido"]

    @pytest.mark.parametrize("ids", ["1,2", [0], [True], ["x"], [2**63], [1.5]])
    def test_bad_especialidade_ids(self, ids):
        with pytest.raises(ValidationError):
            validate_payload("medico", _medico_payload(especialidade_ids=ids))


class TestPacienteValidator:
    def test_valid(self):
        cleaned = validate_payload("paciente", _paciente_payload())

        assert cleaned["data_nascimento"] == date(1985, 5, 20)

    def test_cpf_must_have_11_digits(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload("paciente", _paciente_payload(cpf="123.456.789-01"))
        assert exc_info.value.errors == ["cpf: CPF deve conter 11 dígitos"]

    def test_birth_date_must_be_past(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload("paciente", _paciente_payload(data_nascimento="2999-01-01"))
        assert exc_info.value.errors == [
            "data_nascimento: A data de nascimento deve ser no passado"
        ]

    def test_nome_too_short(self):
        with pytest.raises(ValidationError):
            validate_payload("paciente", _paciente_payload(nome="Al"))


class TestConsultaValidator:
    def test_parses_iso_datetime_and_status(self):
        cleaned = validate_payload(
            "consulta",
            {
                "data_hora": "2030-03-01T10:00:00",
                "medico_id": 1,
                "paciente_id": "2",
                "status": "cancelada",
            },
        )

        assert cleaned["data_hora"] == datetime(2030, 3, 1, 10, 0)
        assert cleaned["paciente_id"] == 2
        assert cleaned["status"] == StatusConsulta.CANCELADA
        assert cleaned["observacao"] is None

    def test_status_optional(self):
        cleaned = validate_payload(
            "consulta",
            {"data_hora": "2030-03-01T10:00:00", "medico_id": 1, "paciente_id": 2},
        )
        assert cleaned["status"] is None

    def test_invalid_status(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(
                "consulta",
                {
                    "data_hora": "2030-03-01T10:00:00",
                    "medico_id": 1,
                    "paciente_id": 2,
                    "status": "PENDENTE",
                },
            )
        assert exc_info.value.errors == [
            "status: Valor deve ser um dos: AGENDADA, REALIZADA, CANCELADA"
        ]

    @pytest.mark.parametrize(
        "data_hora", ["01/03/2030 10:00", "2030-03-01T10:00:00+03:00", 12345]
    )
    def test_invalid_data_hora(self, data_hora):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(
                "consulta", {"data_hora": data_hora, "medico_id": 1, "paciente_id": 2}
            )
        assert exc_info.value.errors[0].startswith("data_hora: Data e hora inválidas")

    def test_ids_must_be_positive_integers(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(
                "consulta",
                {"data_hora": "2030-03-01T10:00:00", "medico_id": 0, "paciente_id": True},
            )
        assert len(exc_info.value.errors) == 2

    @pytest.mark.parametrize("medico_id", [10**20, 2**63, 1.9, float("inf")])
    def test_ids_out_of_range_or_fractional(self, medico_id):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(
                "consulta",
                {
                    "data_hora": "2030-03-01T10:00:00",
                    "medico_id": medico_id,
                    "paciente_id": 2,
                },
            )
        assert exc_info.value.errors[0].startswith("medico_id:")

    def test_integral_float_id_and_microseconds_kept(self):
        cleaned = validate_payload(
            "consulta",
            {
                "data_hora": "2030-03-01T10:00:00.123456",
                "medico_id": 3.0,
                "paciente_id": 2,
            },
        )

        assert cleaned["medico_id"] == 3
        assert cleaned["data_hora"] == datetime(2030, 3, 1, 10, 0, 0, 123456)


class TestClinicalValidators:
    def test_prontuario_anamnese_length(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload("prontuario", {"consulta_id": 1, "anamnese": "curta"})
        assert exc_info.value.errors == [
            "anamnese: A anamnese deve ter entre 10 e 2000 caracteres"
        ]

    def test_receita_validade_must_be_future(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(
                "receita",
                {
                    "consulta_id": 1,
                    "medicamento": "Aspirina",
                    "posologia": "1 comprimido ao dia",
                    "data_validade": "2000-01-01T00:00:00",
                },
            )
        assert exc_info.value.errors == [
            "data_validade: A data de validade deve ser no futuro"
        ]

    def test_receita_valid(self):
        cleaned = validate_payload(
            "receita",
            {
                "consulta_id": 1,
                "medicamento": "Aspirina",
                "posologia": "1 comprimido ao dia",
                "data_validade": "2999-01-01T00:00:00",
                "observacoes": "   ",
            },
        )
        assert cleaned["observacoes"] is None
        assert cleaned["data_validade"] == datetime(2999, 1, 1)

    def test_exame_tipo_by_name(self):
        cleaned = validate_payload(
            "exame", {"consulta_id": 1, "nome": "Hemograma", "tipo": "imagem"}
        )
        assert cleaned["tipo"] == TipoExame.IMAGEM
        assert cleaned["resultado"] is None

    def test_exame_resultado_too_long(self):
        with pytest.raises(ValidationError):
            validate_payload(
                "exame",
                {
                    "consulta_id": 1,
                    "nome": "Hemograma",
                    "tipo": "LABORATORIAL",
                    "resultado": "x" * 1001,
                },
            )


class TestParamParsers:
    def test_parse_enum_param(self):
        assert parse_enum_param("realizada", "status", StatusConsulta) == (
            StatusConsulta.REALIZADA
        )

    def test_parse_enum_param_invalid(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_enum_param("XPTO", "tipo", TipoExame)
        assert exc_info.value.errors[0].startswith("tipo: Valor deve ser um dos")

    def test_parse_datetime_param_missing(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_datetime_param(None, "inicio")
        assert exc_info.value.field == "inicio"
        assert "yyyy-MM-dd'T'HH:mm:ss" in exc_info.value.errors[0]

    def test_parse_iso_datetime_rejects_offsets(self):
        with pytest.raises(ValueError):
            parse_iso_datetime("2030-01-01T10:00:00Z")
