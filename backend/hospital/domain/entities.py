"""
Domain entities - Pure business logic, no framework dependencies.

Relations between entities are kept as ids (``medico_id``,
``especialidade_ids`` ...); repositories resolve them with queries.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional


class StatusConsulta(str, Enum):
    """Appointment lifecycle: AGENDADA -> REALIZADA | CANCELADA (both terminal)."""

    AGENDADA = "AGENDADA"
    REALIZADA = "REALIZADA"
    CANCELADA = "CANCELADA"


class TipoExame(str, Enum):
    LABORATORIAL = "LABORATORIAL"
    IMAGEM = "IMAGEM"
    OUTROS = "OUTROS"


@dataclass
class Especialidade:
    """Medical specialty."""

    nome: str = ""
    descricao: str = ""
    id: Optional[int] = None

    def __post_init__(self):
        if not self.nome or not self.nome.strip():
            raise ValueError("Nome da especialidade é obrigatório")


@dataclass
class Medico:
    """Doctor, identified by a unique CRM license number."""

    nome: str = ""
    crm: str = ""
    email: str = ""
    telefone: str = ""
    especialidade_ids: List[int] = field(default_factory=list)
    id: Optional[int] = None

    def __post_init__(self):
        if not self.crm:
            raise ValueError("CRM é obrigatório")
        # Keep ids unique while preserving the order they were given in
        self.especialidade_ids = list(dict.fromkeys(self.especialidade_ids))


@dataclass
class Paciente:
    """Patient, identified by a unique CPF."""

    nome: str = ""
    cpf: str = ""
    data_nascimento: Optional[date] = None
    email: str = ""
    telefone: str = ""
    endereco: str = ""
    id: Optional[int] = None

    def __post_init__(self):
        if not self.cpf:
            raise ValueError("CPF é obrigatório")


@dataclass
class Consulta:
    """Appointment between one doctor and one patient."""

    data_hora: Optional[datetime] = None
    medico_id: int = 0
    paciente_id: int = 0
    status: StatusConsulta = StatusConsulta.AGENDADA
    observacao: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        if self.medico_id <= 0:
            raise ValueError("Valid medico_id is required")
        if self.paciente_id <= 0:
            raise ValueError("Valid paciente_id is required")
        if isinstance(self.status, str) and not isinstance(self.status, StatusConsulta):
            self.status = StatusConsulta(self.status)

    @property
    def realizada(self) -> bool:
        return self.status == StatusConsulta.REALIZADA

    @property
    def cancelada(self) -> bool:
        return self.status == StatusConsulta.CANCELADA


@dataclass
class Prontuario:
    """Medical record; at most one per appointment."""

    consulta_id: int = 0
    anamnese: str = ""
    diagnostico: Optional[str] = None
    plano_tratamento: Optional[str] = None
    data_criacao: Optional[datetime] = None
    data_atualizacao: Optional[datetime] = None
    id: Optional[int] = None


@dataclass
class Receita:
    consulta_id: int = 0
    medicamento: str = ""
    posologia: str = ""
    observacoes: Optional[str] = None
    data_emissao: Optional[datetime] = None
    data_validade: Optional[datetime] = None
    id: Optional[int] = None


@dataclass
class Exame:
    """Exam order; ``resultado`` and ``data_resultado`` are filled in later."""

    consulta_id: int = 0
    nome: str = ""
    tipo: TipoExame = TipoExame.OUTROS
    instrucoes: Optional[str] = None
    data_solicitacao: Optional[datetime] = None
    data_resultado: Optional[datetime] = None
    resultado: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.tipo, str) and not isinstance(self.tipo, TipoExame):
            self.tipo = TipoExame(self.tipo)

    @property
    def pendente(self) -> bool:
        """True while no result has been recorded."""
        return self.resultado is None

    def registrar_resultado(self, resultado: str, quando: datetime) -> None:
        self.resultado = resultado
        self.data_resultado = quando
