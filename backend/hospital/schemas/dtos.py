"""
Data Transfer Objects (DTOs).

Request DTOs are built from a JSON payload through the matching validator
in ``core/validation.py``; response DTOs are built from domain entities and
serialized with ``to_dict()`` (ISO-8601 date-times, enums by name).
"""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from hospital.core.validation import validate_payload
from hospital.domain.entities import (
    Consulta,
    Especialidade,
    Exame,
    Medico,
    Paciente,
    Prontuario,
    Receita,
    StatusConsulta,
    TipoExame,
)


def _iso(value: Optional[Any]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _serialize(data: Dict[str, Any]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, (StatusConsulta, TipoExame)):
            result[key] = value.name
        elif isinstance(value, (datetime, date)):
            result[key] = _iso(value)
        else:
            result[key] = value
    return result


# ------------------- ESPECIALIDADE -------------------


@dataclass
class EspecialidadeRequest:
    """DTO for specialty create/update requests."""

    nome: str
    descricao: str

    @classmethod
    def from_json(cls, payload: Any) -> "EspecialidadeRequest":
        return cls(**validate_payload("especialidade", payload))


@dataclass
class EspecialidadeResponse:
    id: int
    nome: str
    descricao: str

    @classmethod
    def from_domain(cls, especialidade: Especialidade) -> "EspecialidadeResponse":
        return cls(
            id=especialidade.id,
            nome=especialidade.nome,
            descricao=especialidade.descricao,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ------------------- MEDICO -------------------


@dataclass
class MedicoRequest:
    """DTO for doctor create/update requests."""

    nome: str
    crm: str
    email: str
    telefone: str
    especialidade_ids: List[int] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload: Any) -> "MedicoRequest":
        return cls(**validate_payload("medico", payload))


@dataclass
class MedicoResponse:
    id: int
    nome: str
    crm: str
    email: str
    telefone: str
    especialidade_ids: List[int]

    @classmethod
    def from_domain(cls, medico: Medico) -> "MedicoResponse":
        return cls(
            id=medico.id,
            nome=medico.nome,
            crm=medico.crm,
            email=medico.email,
            telefone=medico.telefone,
            especialidade_ids=list(medico.especialidade_ids),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ------------------- PACIENTE -------------------


@dataclass
class PacienteRequest:
    """DTO for patient create/update requests."""

    nome: str
    cpf: str
    data_nascimento: date
    email: str
    telefone: str
    endereco: str

    @classmethod
    def from_json(cls, payload: Any) -> "PacienteRequest":
        return cls(**validate_payload("paciente", payload))


@dataclass
class PacienteResponse:
    id: int
    nome: str
    cpf: str
    data_nascimento: date
    email: str
    telefone: str
    endereco: str

    @classmethod
    def from_domain(cls, paciente: Paciente) -> "PacienteResponse":
        return cls(
            id=paciente.id,
            nome=paciente.nome,
            cpf=paciente.cpf,
            data_nascimento=paciente.data_nascimento,
            email=paciente.email,
            telefone=paciente.telefone,
            endereco=paciente.endereco,
        )

    def to_dict(self) -> Dict[str, Any]:
        return _serialize(asdict(self))


# ------------------- CONSULTA -------------------


@dataclass
class ConsultaRequest:
    """DTO for appointment create/update requests.

    ``status`` is ignored on creation and optional on update.
    """

    data_hora: datetime
    medico_id: int
    paciente_id: int
    status: Optional[StatusConsulta] = None
    observacao: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any) -> "ConsultaRequest":
        return cls(**validate_payload("consulta", payload))


@dataclass
class ConsultaResponse:
    id: int
    data_hora: datetime
    status: StatusConsulta
    medico_id: int
    paciente_id: int
    observacao: Optional[str]

    @classmethod
    def from_domain(cls, consulta: Consulta) -> "ConsultaResponse":
        return cls(
            id=consulta.id,
            data_hora=consulta.data_hora,
            status=consulta.status,
            medico_id=consulta.medico_id,
            paciente_id=consulta.paciente_id,
            observacao=consulta.observacao,
        )

    def to_dict(self) -> Dict[str, Any]:
        return _serialize(asdict(self))


# ------------------- PRONTUARIO -------------------


@dataclass
class ProntuarioRequest:
    consulta_id: int
    anamnese: str
    diagnostico: Optional[str] = None
    plano_tratamento: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any) -> "ProntuarioRequest":
        return cls(**validate_payload("prontuario", payload))


@dataclass
class ProntuarioResponse:
    id: int
    consulta_id: int
    anamnese: str
    diagnostico: Optional[str]
    plano_tratamento: Optional[str]
    data_criacao: Optional[datetime]
    data_atualizacao: Optional[datetime]

    @classmethod
    def from_domain(cls, prontuario: Prontuario) -> "ProntuarioResponse":
        return cls(
            id=prontuario.id,
            consulta_id=prontuario.consulta_id,
            anamnese=prontuario.anamnese,
            diagnostico=prontuario.diagnostico,
            plano_tratamento=prontuario.plano_tratamento,
            data_criacao=prontuario.data_criacao,
            data_atualizacao=prontuario.data_atualizacao,
        )

    def to_dict(self) -> Dict[str, Any]:
        return _serialize(asdict(self))


# ------------------- RECEITA -------------------


@dataclass
class ReceitaRequest:
    consulta_id: int
    medicamento: str
    posologia: str
    data_validade: datetime
    observacoes: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any) -> "ReceitaRequest":
        return cls(**validate_payload("receita", payload))


@dataclass
class ReceitaResponse:
    id: int
    consulta_id: int
    medicamento: str
    posologia: str
    observacoes: Optional[str]
    data_emissao: Optional[datetime]
    data_validade: datetime

    @classmethod
    def from_domain(cls, receita: Receita) -> "ReceitaResponse":
        return cls(
            id=receita.id,
            consulta_id=receita.consulta_id,
            medicamento=receita.medicamento,
            posologia=receita.posologia,
            observacoes=receita.observacoes,
            data_emissao=receita.data_emissao,
            data_validade=receita.data_validade,
        )

    def to_dict(self) -> Dict[str, Any]:
        return _serialize(asdict(self))


# ------------------- EXAME -------------------


@dataclass
class ExameRequest:
    """DTO for exam requests; ``resultado`` may be sent up front."""

    consulta_id: int
    nome: str
    tipo: TipoExame
    instrucoes: Optional[str] = None
    resultado: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any) -> "ExameRequest":
        return cls(**validate_payload("exame", payload))


@dataclass
class ExameResponse:
    id: int
    consulta_id: int
    nome: str
    tipo: TipoExame
    instrucoes: Optional[str]
    data_solicitacao: Optional[datetime]
    data_resultado: Optional[datetime]
    resultado: Optional[str]

    @classmethod
    def from_domain(cls, exame: Exame) -> "ExameResponse":
        return cls(
            id=exame.id,
            consulta_id=exame.consulta_id,
            nome=exame.nome,
            tipo=exame.tipo,
            instrucoes=exame.instrucoes,
            data_solicitacao=exame.data_solicitacao,
            data_resultado=exame.data_resultado,
            resultado=exame.resultado,
        )

    def to_dict(self) -> Dict[str, Any]:
        return _serialize(asdict(self))
