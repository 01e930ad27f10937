"""
Common validation utilities for the hospital API controllers.

Each entity has a validator that checks the shape of an incoming JSON
payload (required fields, lengths, formats, enum values) and returns a
``ValidationResult`` with cleaned, typed values. Business rules that need
the database live in the services, not here.
"""

import logging
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Type

from hospital.core.config import now_local
from hospital.domain.entities import StatusConsulta, TipoExame

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
ISO_DATETIME_HINT = "Use o formato ISO: yyyy-MM-dd'T'HH:mm:ss"

# Largest value a BIGINT primary key can hold
MAX_DB_ID = 2**63 - 1


class ValidationError(Exception):
    """Custom exception for validation errors."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        errors: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        if errors is None:
            errors = [f"{field}: {message}"] if field else []
        self.errors = errors


class ValidationResult:
    """Container for validation results."""

    def __init__(self):
        self.errors: List[str] = []
        self.is_valid: bool = True
        self.cleaned_data: Dict[str, Any] = {}

    def add_error(self, message: str, field: Optional[str] = None):
        """Add validation error."""
        error_msg = f"{field}: {message}" if field else message
        self.errors.append(error_msg)
        self.is_valid = False
        logger.warning(f"Validation error: {error_msg}")

    def raise_if_invalid(self) -> Dict[str, Any]:
        """Raise ``ValidationError`` with every field error, else return cleaned data."""
        if not self.is_valid:
            raise ValidationError("Erro de validação", errors=list(self.errors))
        return self.cleaned_data


def parse_iso_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 local date-time string (``2025-01-31T10:00:00``).

    Raises ``ValueError`` for anything else, including values carrying a
    timezone offset.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        parsed = datetime.fromisoformat(value.strip())
    else:
        raise ValueError(f"Invalid ISO date-time: {value!r}")
    if parsed.tzinfo is not None:
        raise ValueError("Timezone offsets are not accepted")
    return parsed


class BaseValidator:
    """Base validator with common validation methods."""

    def validate(
        self, data: Dict[str, Any]
    ) -> ValidationResult:  # pragma: no cover - interface definition
        """Validate data for a specific entity type."""
        raise NotImplementedError("Subclasses must implement validate")

    @staticmethod
    def validate_required_field(
        value: Any, field_name: str, result: ValidationResult
    ) -> bool:
        """Validate that a required field is present and not empty."""
        if (
            value is None
            or value == ""
            or (isinstance(value, str) and value.strip() == "")
        ):
            result.add_error(f"{field_name} é obrigatório", field_name)
            return False
        return True

    @staticmethod
    def validate_date(
        value: Any, field_name: str, result: ValidationResult
    ) -> Optional[date]:
        """Validate and convert date field."""
        if value is None or value == "":
            return None

        if isinstance(value, datetime):
            return value.date()

        if isinstance(value, date):
            return value

        if isinstance(value, str):
            try:
                return datetime.strptime(value.strip(), "%Y-%m-%d").date()
            except ValueError:
                result.add_error("Data inválida. Use formato YYYY-MM-DD", field_name)
                return None

        result.add_error("Formato de data inválido", field_name)
        return None

    @staticmethod
    def validate_datetime(
        value: Any, field_name: str, result: ValidationResult
    ) -> Optional[datetime]:
        """Validate and convert an ISO-8601 local date-time field."""
        if value is None or value == "":
            return None

        try:
            return parse_iso_datetime(value)
        except (TypeError, ValueError):
            result.add_error(f"Data e hora inválidas. {ISO_DATETIME_HINT}", field_name)
            return None

    @staticmethod
    def validate_integer(
        value: Any,
        field_name: str,
        result: ValidationResult,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
    ) -> Optional[int]:
        """Validate and convert integer field."""
        if value is None or value == "":
            return None

        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool):
            result.add_error("Valor deve ser um número inteiro", field_name)
            return None

        if isinstance(value, float) and not value.is_integer():
            result.add_error("Valor deve ser um número inteiro", field_name)
            return None

        try:
            int_value = int(value)
        except (ValueError, TypeError, OverflowError):
            result.add_error("Valor deve ser um número inteiro", field_name)
            return None

        if min_value is not None and int_value < min_value:
            result.add_error(f"Valor deve ser maior que {min_value - 1}", field_name)
            return None

        if max_value is not None and int_value > max_value:
            result.add_error(f"Valor deve ser menor que {max_value + 1}", field_name)
            return None

        return int_value

    @staticmethod
    def validate_string(
        value: Any,
        field_name: str,
        result: ValidationResult,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        allowed_values: Optional[List[str]] = None,
        message: Optional[str] = None,
    ) -> Optional[str]:
        """Validate string field."""
        if value is None:
            return None

        if not isinstance(value, str):
            value = str(value)

        value = value.strip()

        if min_length is not None and len(value) < min_length:
            result.add_error(
                message or f"Deve ter pelo menos {min_length} caracteres", field_name
            )
            return None

        if max_length is not None and len(value) > max_length:
            result.add_error(
                message or f"Deve ter no máximo {max_length} caracteres", field_name
            )
            return None

        if allowed_values is not None and value not in allowed_values:
            result.add_error(
                f"Valor deve ser um dos: {', '.join(allowed_values)}", field_name
            )
            return None

        return value if value else None

    @staticmethod
    def validate_pattern(
        value: Any,
        field_name: str,
        result: ValidationResult,
        pattern: str,
        message: str,
    ) -> Optional[str]:
        """Validate that a string fully matches a regular expression."""
        if value is None or value == "":
            return None

        text = str(value).strip()
        if not re.fullmatch(pattern, text):
            result.add_error(message, field_name)
            return None
        return text

    @staticmethod
    def validate_email(
        value: Any, field_name: str, result: ValidationResult
    ) -> Optional[str]:
        if value is None or value == "":
            return None

        text = str(value).strip()
        if len(text) > 100 or not EMAIL_PATTERN.match(text):
            result.add_error("Email inválido", field_name)
            return None
        return text

    @staticmethod
    def validate_enum(
        value: Any, field_name: str, result: ValidationResult, enum_cls: Type
    ) -> Optional[Any]:
        """Convert an enum name (e.g. ``AGENDADA``) into the enum member."""
        if value is None or value == "":
            return None

        try:
            return enum_cls[str(value).strip().upper()]
        except KeyError:
            allowed = ", ".join(member.name for member in enum_cls)
            result.add_error(f"Valor deve ser um dos: {allowed}", field_name)
            return None

    @staticmethod
    def validate_id_list(
        value: Any, field_name: str, result: ValidationResult
    ) -> Optional[List[int]]:
        """Validate a list of positive integer ids, dropping duplicates."""
        if value is None:
            return []

        if not isinstance(value, (list, tuple, set)):
            result.add_error("Deve ser uma lista de IDs", field_name)
            return None

        ids: List[int] = []
        for item in value:
            if isinstance(item, bool):
                result.add_error("IDs devem ser números inteiros positivos", field_name)
                return None
            if isinstance(item, float) and not item.is_integer():
                result.add_error("IDs devem ser números inteiros positivos", field_name)
                return None
            try:
                item_id = int(item)
            except (TypeError, ValueError, OverflowError):
                result.add_error("IDs devem ser números inteiros positivos", field_name)
                return None
            if item_id < 1 or item_id > MAX_DB_ID:
                result.add_error("IDs devem ser números inteiros positivos", field_name)
                return None
            if item_id not in ids:
                ids.append(item_id)
        return ids

    def _optional_text(
        self,
        data: Dict[str, Any],
        field_name: str,
        result: ValidationResult,
        max_length: int,
        message: Optional[str] = None,
    ) -> None:
        """Copy an optional text field into cleaned data (None when blank)."""
        value = self.validate_string(
            data.get(field_name),
            field_name,
            result,
            max_length=max_length,
            message=message,
        )
        result.cleaned_data[field_name] = value


class EspecialidadeValidator(BaseValidator):
    """Validator for specialty (Especialidade) payloads."""

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        if self.validate_required_field(data.get("nome"), "nome", result):
            nome = self.validate_string(
                data.get("nome"),
                "nome",
                result,
                max_length=100,
                message="O nome da especialidade deve ter no máximo 100 caracteres",
            )
            if nome:
                result.cleaned_data["nome"] = nome

        if self.validate_required_field(data.get("descricao"), "descricao", result):
            descricao = self.validate_string(
                data.get("descricao"),
                "descricao",
                result,
                max_length=500,
                message="A descrição deve ter no máximo 500 caracteres",
            )
            if descricao:
                result.cleaned_data["descricao"] = descricao

        return result


class MedicoValidator(BaseValidator):
    """Validator for doctor (Medico) payloads."""

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        if self.validate_required_field(data.get("nome"), "nome", result):
            nome = self.validate_string(
                data.get("nome"),
                "nome",
                result,
                min_length=3,
                max_length=100,
                message="O nome deve ter entre 3 e 100 caracteres",
            )
            if nome:
                result.cleaned_data["nome"] = nome

        if self.validate_required_field(data.get("crm"), "crm", result):
            crm = self.validate_pattern(
                data.get("crm"),
                "crm",
                result,
                r"\d{4,6}",
                "CRM deve conter entre 4 e 6 dígitos",
            )
            if crm:
                result.cleaned_data["crm"] = crm

        if self.validate_required_field(data.get("email"), "email", result):
            email = self.validate_email(data.get("email"), "email", result)
            if email:
                result.cleaned_data["email"] = email

        if self.validate_required_field(data.get("telefone"), "telefone", result):
            telefone = self.validate_pattern(
                data.get("telefone"),
                "telefone",
                result,
                r"\d{10,11}",
                "Telefone deve conter entre 10 e 11 dígitos",
            )
            if telefone:
                result.cleaned_data["telefone"] = telefone

        especialidade_ids = self.validate_id_list(
            data.get("especialidade_ids"), "especialidade_ids", result
        )
        if especialidade_ids is not None:
            result.cleaned_data["especialidade_ids"] = especialidade_ids

        return result


class PacienteValidator(BaseValidator):
    """Validator for patient (Paciente) payloads."""

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        if self.validate_required_field(data.get("nome"), "nome", result):
            nome = self.validate_string(
                data.get("nome"),
                "nome",
                result,
                min_length=3,
                max_length=100,
                message="O nome deve ter entre 3 e 100 caracteres",
            )
            if nome:
                result.cleaned_data["nome"] = nome

        if self.validate_required_field(data.get("cpf"), "cpf", result):
            cpf = self.validate_pattern(
                data.get("cpf"), "cpf", result, r"\d{11}", "CPF deve conter 11 dígitos"
            )
            if cpf:
                result.cleaned_data["cpf"] = cpf

        if self.validate_required_field(
            data.get("data_nascimento"), "data_nascimento", result
        ):
            nascimento = self.validate_date(
                data.get("data_nascimento"), "data_nascimento", result
            )
            if nascimento is not None:
                if nascimento >= now_local().date():
                    result.add_error(
                        "A data de nascimento deve ser no passado", "data_nascimento"
                    )
                else:
                    result.cleaned_data["data_nascimento"] = nascimento

        if self.validate_required_field(data.get("email"), "email", result):
            email = self.validate_email(data.get("email"), "email", result)
            if email:
                result.cleaned_data["email"] = email

        if self.validate_required_field(data.get("telefone"), "telefone", result):
            telefone = self.validate_pattern(
                data.get("telefone"),
                "telefone",
                result,
                r"\d{10,11}",
                "Telefone deve conter entre 10 e 11 dígitos",
            )
            if telefone:
                result.cleaned_data["telefone"] = telefone

        if self.validate_required_field(data.get("endereco"), "endereco", result):
            endereco = self.validate_string(
                data.get("endereco"),
                "endereco",
                result,
                max_length=200,
                message="O endereço deve ter no máximo 200 caracteres",
            )
            if endereco:
                result.cleaned_data["endereco"] = endereco

        return result


class ConsultaValidator(BaseValidator):
    """Validator for appointment (Consulta) payloads.

    Whether ``data_hora`` lies in the future is a business rule checked by
    ``ConsultaService``; here only the format is checked.
    """

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        if self.validate_required_field(data.get("data_hora"), "data_hora", result):
            data_hora = self.validate_datetime(data.get("data_hora"), "data_hora", result)
            if data_hora is not None:
                result.cleaned_data["data_hora"] = data_hora

        for field_name in ("medico_id", "paciente_id"):
            if self.validate_required_field(data.get(field_name), field_name, result):
                value = self.validate_integer(
                    data.get(field_name),
                    field_name,
                    result,
                    min_value=1,
                    max_value=MAX_DB_ID,
                )
                if value is not None:
                    result.cleaned_data[field_name] = value

        status = self.validate_enum(data.get("status"), "status", result, StatusConsulta)
        result.cleaned_data["status"] = status

        self._optional_text(
            data,
            "observacao",
            result,
            max_length=500,
            message="A observação deve ter no máximo 500 caracteres",
        )

        return result


class ProntuarioValidator(BaseValidator):
    """Validator for medical record (Prontuario) payloads."""

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        if self.validate_required_field(data.get("consulta_id"), "consulta_id", result):
            consulta_id = self.validate_integer(
                data.get("consulta_id"),
                "consulta_id",
                result,
                min_value=1,
                max_value=MAX_DB_ID,
            )
            if consulta_id is not None:
                result.cleaned_data["consulta_id"] = consulta_id

        if self.validate_required_field(data.get("anamnese"), "anamnese", result):
            anamnese = self.validate_string(
                data.get("anamnese"),
                "anamnese",
                result,
                min_length=10,
                max_length=2000,
                message="A anamnese deve ter entre 10 e 2000 caracteres",
            )
            if anamnese:
                result.cleaned_data["anamnese"] = anamnese

        self._optional_text(
            data,
            "diagnostico",
            result,
            max_length=500,
            message="O diagnóstico deve ter no máximo 500 caracteres",
        )
        self._optional_text(
            data,
            "plano_tratamento",
            result,
            max_length=1000,
            message="O plano de tratamento deve ter no máximo 1000 caracteres",
        )

        return result


class ReceitaValidator(BaseValidator):
    """Validator for prescription (Receita) payloads."""

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        if self.validate_required_field(data.get("consulta_id"), "consulta_id", result):
            consulta_id = self.validate_integer(
                data.get("consulta_id"),
                "consulta_id",
                result,
                min_value=1,
                max_value=MAX_DB_ID,
            )
            if consulta_id is not None:
                result.cleaned_data["consulta_id"] = consulta_id

        if self.validate_required_field(data.get("medicamento"), "medicamento", result):
            medicamento = self.validate_string(
                data.get("medicamento"),
                "medicamento",
                result,
                min_length=3,
                max_length=100,
                message="O nome do medicamento deve ter entre 3 e 100 caracteres",
            )
            if medicamento:
                result.cleaned_data["medicamento"] = medicamento

        if self.validate_required_field(data.get("posologia"), "posologia", result):
            posologia = self.validate_string(
                data.get("posologia"),
                "posologia",
                result,
                min_length=5,
                max_length=500,
                message="A posologia deve ter entre 5 e 500 caracteres",
            )
            if posologia:
                result.cleaned_data["posologia"] = posologia

        self._optional_text(
            data,
            "observacoes",
            result,
            max_length=500,
            message="As observações devem ter no máximo 500 caracteres",
        )

        if self.validate_required_field(
            data.get("data_validade"), "data_validade", result
        ):
            validade = self.validate_datetime(
                data.get("data_validade"), "data_validade", result
            )
            if validade is not None:
                if validade <= now_local():
                    result.add_error(
                        "A data de validade deve ser no futuro", "data_validade"
                    )
                else:
                    result.cleaned_data["data_validade"] = validade

        return result


class ExameValidator(BaseValidator):
    """Validator for exam (Exame) payloads."""

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        if self.validate_required_field(data.get("consulta_id"), "consulta_id", result):
            consulta_id = self.validate_integer(
                data.get("consulta_id"),
                "consulta_id",
                result,
                min_value=1,
                max_value=MAX_DB_ID,
            )
            if consulta_id is not None:
                result.cleaned_data["consulta_id"] = consulta_id

        if self.validate_required_field(data.get("nome"), "nome", result):
            nome = self.validate_string(
                data.get("nome"),
                "nome",
                result,
                min_length=3,
                max_length=100,
                message="O nome do exame deve ter entre 3 e 100 caracteres",
            )
            if nome:
                result.cleaned_data["nome"] = nome

        if self.validate_required_field(data.get("tipo"), "tipo", result):
            tipo = self.validate_enum(data.get("tipo"), "tipo", result, TipoExame)
            if tipo is not None:
                result.cleaned_data["tipo"] = tipo

        self._optional_text(
            data,
            "instrucoes",
            result,
            max_length=500,
            message="As instruções devem ter no máximo 500 caracteres",
        )
        self._optional_text(
            data,
            "resultado",
            result,
            max_length=1000,
            message="O resultado deve ter no máximo 1000 caracteres",
        )

        return result


# Factory function to get appropriate validator
def get_validator(entity_type: str) -> BaseValidator:
    """Get validator instance for entity type."""
    validators = {
        "especialidade": EspecialidadeValidator(),
        "medico": MedicoValidator(),
        "paciente": PacienteValidator(),
        "consulta": ConsultaValidator(),
        "prontuario": ProntuarioValidator(),
        "receita": ReceitaValidator(),
        "exame": ExameValidator(),
    }

    validator = validators.get(entity_type.lower())
    if not validator:
        raise ValueError(f"No validator found for entity type: {entity_type}")

    return validator


def validate_payload(entity_type: str, data: Any) -> Dict[str, Any]:
    """Validate a JSON payload and return cleaned data, raising ``ValidationError``."""
    if not isinstance(data, dict):
        raise ValidationError(
            "Erro de validação", errors=["Corpo da requisição deve ser um objeto JSON"]
        )
    return get_validator(entity_type).validate(data).raise_if_invalid()


def parse_enum_param(value: str, field_name: str, enum_cls: Type) -> Any:
    """Convert a path parameter into an enum member or raise ``ValidationError``."""
    result = ValidationResult()
    member = BaseValidator.validate_enum(value, field_name, result, enum_cls)
    result.raise_if_invalid()
    return member


def parse_datetime_param(value: Optional[str], field_name: str) -> datetime:
    """Parse a required ISO date-time query parameter or raise ``ValidationError``."""
    try:
        return parse_iso_datetime(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Formato de data inválido. {ISO_DATETIME_HINT}",
            field=field_name,
        )
