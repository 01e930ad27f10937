"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing. Writers only flush;
the owning service decides when the transaction commits.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

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


class IEspecialidadeReader(ABC):
    """Interface for specialty read operations."""

    @abstractmethod
    def get_by_id(self, especialidade_id: int) -> Optional[Especialidade]:
        """Get specialty by ID."""
        pass

    @abstractmethod
    def get_by_nome(self, nome: str) -> Optional[Especialidade]:
        """Get specialty by exact name."""
        pass

    @abstractmethod
    def list_all(self) -> List[Especialidade]:
        """List every specialty."""
        pass

    @abstractmethod
    def list_by_medico(self, medico_id: int) -> List[Especialidade]:
        """List the specialties of a doctor, ordered by name."""
        pass

    @abstractmethod
    def has_medicos(self, especialidade_id: int) -> bool:
        """Check whether any doctor is associated with the specialty."""
        pass


class IEspecialidadeWriter(ABC):
    """Interface for specialty write operations."""

    @abstractmethod
    def create(self, especialidade: Especialidade) -> Especialidade:
        pass

    @abstractmethod
    def update(self, especialidade: Especialidade) -> Especialidade:
        pass

    @abstractmethod
    def delete(self, especialidade_id: int) -> bool:
        pass


class IEspecialidadeRepository(IEspecialidadeReader, IEspecialidadeWriter):
    """Complete specialty repository interface."""

    pass


class IMedicoReader(ABC):
    """Interface for doctor read operations."""

    @abstractmethod
    def get_by_id(self, medico_id: int) -> Optional[Medico]:
        """Get doctor by ID."""
        pass

    @abstractmethod
    def get_by_id_for_update(self, medico_id: int) -> Optional[Medico]:
        """Get doctor by ID, locking the row until the transaction ends."""
        pass

    @abstractmethod
    def get_by_crm(self, crm: str) -> Optional[Medico]:
        """Get doctor by CRM."""
        pass

    @abstractmethod
    def list_all(self) -> List[Medico]:
        pass

    @abstractmethod
    def search_by_nome(self, nome: str) -> List[Medico]:
        """Case-insensitive substring search ordered by name."""
        pass

    @abstractmethod
    def list_by_especialidade(self, especialidade_id: int) -> List[Medico]:
        """List doctors holding a specialty, ordered by name."""
        pass

    @abstractmethod
    def has_consultas(self, medico_id: int) -> bool:
        pass


class IMedicoWriter(ABC):
    """Interface for doctor write operations."""

    @abstractmethod
    def create(self, medico: Medico) -> Medico:
        pass

    @abstractmethod
    def update(self, medico: Medico) -> Medico:
        pass

    @abstractmethod
    def delete(self, medico_id: int) -> bool:
        pass


class IMedicoRepository(IMedicoReader, IMedicoWriter):
    """Complete doctor repository interface."""

    pass


class IPacienteReader(ABC):
    """Interface for patient read operations."""

    @abstractmethod
    def get_by_id(self, paciente_id: int) -> Optional[Paciente]:
        pass

    @abstractmethod
    def get_by_cpf(self, cpf: str) -> Optional[Paciente]:
        pass

    @abstractmethod
    def list_all(self) -> List[Paciente]:
        pass

    @abstractmethod
    def search_by_nome(self, nome: str) -> List[Paciente]:
        """Case-insensitive substring search ordered by name."""
        pass

    @abstractmethod
    def has_consultas(self, paciente_id: int) -> bool:
        pass


class IPacienteWriter(ABC):
    """Interface for patient write operations."""

    @abstractmethod
    def create(self, paciente: Paciente) -> Paciente:
        pass

    @abstractmethod
    def update(self, paciente: Paciente) -> Paciente:
        pass

    @abstractmethod
    def delete(self, paciente_id: int) -> bool:
        pass


class IPacienteRepository(IPacienteReader, IPacienteWriter):
    """Complete patient repository interface."""

    pass


class IConsultaReader(ABC):
    """Interface for appointment read operations. Lists are ordered by data_hora."""

    @abstractmethod
    def get_by_id(self, consulta_id: int) -> Optional[Consulta]:
        pass

    @abstractmethod
    def list_all(self) -> List[Consulta]:
        pass

    @abstractmethod
    def list_by_medico(self, medico_id: int) -> List[Consulta]:
        pass

    @abstractmethod
    def list_by_paciente(self, paciente_id: int) -> List[Consulta]:
        pass

    @abstractmethod
    def list_by_status(self, status: StatusConsulta) -> List[Consulta]:
        pass

    @abstractmethod
    def list_by_periodo(self, inicio: datetime, fim: datetime) -> List[Consulta]:
        """List appointments with inicio <= data_hora <= fim."""
        pass

    @abstractmethod
    def has_conflict(
        self,
        medico_id: int,
        data_hora: datetime,
        duracao_minutos: int,
        exclude_id: Optional[int] = None,
    ) -> bool:
        """Check for a non-cancelled appointment of the doctor overlapping the slot."""
        pass


class IConsultaWriter(ABC):
    """Interface for appointment write operations."""

    @abstractmethod
    def create(self, consulta: Consulta) -> Consulta:
        pass

    @abstractmethod
    def update(self, consulta: Consulta) -> Consulta:
        pass

    @abstractmethod
    def delete(self, consulta_id: int) -> bool:
        pass


class IConsultaRepository(IConsultaReader, IConsultaWriter):
    """Complete appointment repository interface."""

    pass


class IProntuarioReader(ABC):
    """Interface for medical record read operations."""

    @abstractmethod
    def get_by_id(self, prontuario_id: int) -> Optional[Prontuario]:
        pass

    @abstractmethod
    def get_by_consulta(self, consulta_id: int) -> Optional[Prontuario]:
        pass

    @abstractmethod
    def list_all(self) -> List[Prontuario]:
        pass

    @abstractmethod
    def list_by_paciente(self, paciente_id: int) -> List[Prontuario]:
        """Records of a patient, newest first."""
        pass

    @abstractmethod
    def exists_for_consulta(self, consulta_id: int) -> bool:
        pass


class IProntuarioWriter(ABC):
    """Interface for medical record write operations."""

    @abstractmethod
    def create(self, prontuario: Prontuario) -> Prontuario:
        pass

    @abstractmethod
    def update(self, prontuario: Prontuario) -> Prontuario:
        pass

    @abstractmethod
    def delete(self, prontuario_id: int) -> bool:
        pass


class IProntuarioRepository(IProntuarioReader, IProntuarioWriter):
    """Complete medical record repository interface."""

    pass


class IReceitaReader(ABC):
    """Interface for prescription read operations."""

    @abstractmethod
    def get_by_id(self, receita_id: int) -> Optional[Receita]:
        pass

    @abstractmethod
    def list_all(self) -> List[Receita]:
        pass

    @abstractmethod
    def list_by_consulta(self, consulta_id: int) -> List[Receita]:
        pass

    @abstractmethod
    def list_by_paciente(self, paciente_id: int) -> List[Receita]:
        pass

    @abstractmethod
    def search_by_medicamento(self, medicamento: str) -> List[Receita]:
        """Case-insensitive substring search on the drug name."""
        pass

    @abstractmethod
    def exists_for_consulta(self, consulta_id: int) -> bool:
        pass


class IReceitaWriter(ABC):
    """Interface for prescription write operations."""

    @abstractmethod
    def create(self, receita: Receita) -> Receita:
        pass

    @abstractmethod
    def update(self, receita: Receita) -> Receita:
        pass

    @abstractmethod
    def delete(self, receita_id: int) -> bool:
        pass


class IReceitaRepository(IReceitaReader, IReceitaWriter):
    """Complete prescription repository interface."""

    pass


class IExameReader(ABC):
    """Interface for exam read operations. Lists are ordered by data_solicitacao."""

    @abstractmethod
    def get_by_id(self, exame_id: int) -> Optional[Exame]:
        pass

    @abstractmethod
    def list_all(self) -> List[Exame]:
        pass

    @abstractmethod
    def list_by_consulta(self, consulta_id: int) -> List[Exame]:
        """Oldest first."""
        pass

    @abstractmethod
    def list_by_paciente(self, paciente_id: int) -> List[Exame]:
        """Newest first."""
        pass

    @abstractmethod
    def list_by_tipo(self, tipo: TipoExame) -> List[Exame]:
        pass

    @abstractmethod
    def list_pendentes(self) -> List[Exame]:
        """Exams without a result, oldest first."""
        pass

    @abstractmethod
    def exists_for_consulta(self, consulta_id: int) -> bool:
        pass


class IExameWriter(ABC):
    """Interface for exam write operations."""

    @abstractmethod
    def create(self, exame: Exame) -> Exame:
        pass

    @abstractmethod
    def update(self, exame: Exame) -> Exame:
        pass

    @abstractmethod
    def delete(self, exame_id: int) -> bool:
        pass


class IExameRepository(IExameReader, IExameWriter):
    """Complete exam repository interface."""

    pass
