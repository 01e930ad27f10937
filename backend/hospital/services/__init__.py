# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import (
    consulta_service,
    especialidade_service,
    exame_service,
    medico_service,
    paciente_service,
    prontuario_service,
    receita_service,
)

__all__ = [
    "consulta_service",
    "especialidade_service",
    "exame_service",
    "medico_service",
    "paciente_service",
    "prontuario_service",
    "receita_service",
]
