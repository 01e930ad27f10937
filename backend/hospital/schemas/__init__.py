"""
Schemas package - Data Transfer Objects.

This package contains DTOs that define the API contracts.
"""

from .dtos import (
    ConsultaRequest,
    ConsultaResponse,
    EspecialidadeRequest,
    EspecialidadeResponse,
    ExameRequest,
    ExameResponse,
    MedicoRequest,
    MedicoResponse,
    PacienteRequest,
    PacienteResponse,
    ProntuarioRequest,
    ProntuarioResponse,
    ReceitaRequest,
    ReceitaResponse,
)

__all__ = [
    "EspecialidadeRequest",
    "EspecialidadeResponse",
    "MedicoRequest",
    "MedicoResponse",
    "PacienteRequest",
    "PacienteResponse",
    "ConsultaRequest",
    "ConsultaResponse",
    "ProntuarioRequest",
    "ProntuarioResponse",
    "ReceitaRequest",
    "ReceitaResponse",
    "ExameRequest",
    "ExameResponse",
]
