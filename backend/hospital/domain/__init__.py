"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities and the status/type enums
- interfaces.py: Repository contracts
"""

from .entities import (
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
from .interfaces import (
    IConsultaReader,
    IConsultaRepository,
    IConsultaWriter,
    IEspecialidadeReader,
    IEspecialidadeRepository,
    IEspecialidadeWriter,
    IExameReader,
    IExameRepository,
    IExameWriter,
    IMedicoReader,
    IMedicoRepository,
    IMedicoWriter,
    IPacienteReader,
    IPacienteRepository,
    IPacienteWriter,
    IProntuarioReader,
    IProntuarioRepository,
    IProntuarioWriter,
    IReceitaReader,
    IReceitaRepository,
    IReceitaWriter,
)

__all__ = [
    # Domain entities
    "Especialidade",
    "Medico",
    "Paciente",
    "Consulta",
    "Prontuario",
    "Receita",
    "Exame",
    "StatusConsulta",
    "TipoExame",
    # Repository interfaces
    "IEspecialidadeRepository",
    "IMedicoRepository",
    "IPacienteRepository",
    "IConsultaRepository",
    "IProntuarioRepository",
    "IReceitaRepository",
    "IExameRepository",
    # Segregated interfaces
    "IEspecialidadeReader",
    "IEspecialidadeWriter",
    "IMedicoReader",
    "IMedicoWriter",
    "IPacienteReader",
    "IPacienteWriter",
    "IConsultaReader",
    "IConsultaWriter",
    "IProntuarioReader",
    "IProntuarioWriter",
    "IReceitaReader",
    "IReceitaWriter",
    "IExameReader",
    "IExameWriter",
]
