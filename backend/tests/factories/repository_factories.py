"""
Repository test factories following Interface Segregation Principle.

This module provides mock factories for repository interfaces, ensuring
tests only depend on the specific interfaces they need. Full mocks return
"nothing found" by default; ``create`` assigns an id and ``update`` echoes
the entity back, the way the SQLAlchemy repositories behave.
"""

from itertools import count
from unittest.mock import Mock

from hospital.domain.interfaces import (
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


def _assign_id(start: int = 1):
    """side_effect for ``create``: give the entity the next id and return it."""
    ids = count(start)

    def _create(entity):
        if entity.id is None:
            entity.id = next(ids)
        return entity

    return _create


def _echo(entity):
    return entity


def _configure_writer(mock_writer: Mock) -> Mock:
    mock_writer.create.side_effect = _assign_id()
    mock_writer.update.side_effect = _echo
    mock_writer.delete.return_value = True
    return mock_writer


class EspecialidadeRepositoryFactory:
    """Factory for specialty repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        mock_reader = Mock(spec=IEspecialidadeReader)
        mock_reader.get_by_id.return_value = None
        mock_reader.get_by_nome.return_value = None
        mock_reader.list_all.return_value = []
        mock_reader.list_by_medico.return_value = []
        mock_reader.has_medicos.return_value = False
        return mock_reader

    @staticmethod
    def create_mock_writer() -> Mock:
        return _configure_writer(Mock(spec=IEspecialidadeWriter))

    @staticmethod
    def create_mock_full() -> Mock:
        """Create full repository mock implementing IEspecialidadeRepository."""
        mock_repo = Mock(spec=IEspecialidadeRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.get_by_nome.return_value = None
        mock_repo.list_all.return_value = []
        mock_repo.list_by_medico.return_value = []
        mock_repo.has_medicos.return_value = False
        return _configure_writer(mock_repo)


class MedicoRepositoryFactory:
    """Factory for doctor repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        mock_reader = Mock(spec=IMedicoReader)
        mock_reader.get_by_id.return_value = None
        mock_reader.get_by_id_for_update.return_value = None
        mock_reader.get_by_crm.return_value = None
        mock_reader.list_all.return_value = []
        mock_reader.search_by_nome.return_value = []
        mock_reader.list_by_especialidade.return_value = []
        mock_reader.has_consultas.return_value = False
        return mock_reader

    @staticmethod
    def create_mock_writer() -> Mock:
        return _configure_writer(Mock(spec=IMedicoWriter))

    @staticmethod
    def create_mock_full() -> Mock:
        """Create full repository mock implementing IMedicoRepository."""
        mock_repo = Mock(spec=IMedicoRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.get_by_id_for_update.return_value = None
        mock_repo.get_by_crm.return_value = None
        mock_repo.list_all.return_value = []
        mock_repo.search_by_nome.return_value = []
        mock_repo.list_by_especialidade.return_value = []
        mock_repo.has_consultas.return_value = False
        return _configure_writer(mock_repo)


class PacienteRepositoryFactory:
    """Factory for patient repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        mock_reader = Mock(spec=IPacienteReader)
        mock_reader.get_by_id.return_value = None
        mock_reader.get_by_cpf.return_value = None
        mock_reader.list_all.return_value = []
        mock_reader.search_by_nome.return_value = []
        mock_reader.has_consultas.return_value = False
        return mock_reader

    @staticmethod
    def create_mock_writer() -> Mock:
        return _configure_writer(Mock(spec=IPacienteWriter))

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IPacienteRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.get_by_cpf.return_value = None
        mock_repo.list_all.return_value = []
        mock_repo.search_by_nome.return_value = []
        mock_repo.has_consultas.return_value = False
        return _configure_writer(mock_repo)


class ConsultaRepositoryFactory:
    """Factory for appointment repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        mock_reader = Mock(spec=IConsultaReader)
        mock_reader.get_by_id.return_value = None
        mock_reader.list_all.return_value = []
        mock_reader.list_by_medico.return_value = []
        mock_reader.list_by_paciente.return_value = []
        mock_reader.list_by_status.return_value = []
        mock_reader.list_by_periodo.return_value = []
        mock_reader.has_conflict.return_value = False
        return mock_reader

    @staticmethod
    def create_mock_writer() -> Mock:
        return _configure_writer(Mock(spec=IConsultaWriter))

    @staticmethod
    def create_mock_full() -> Mock:
        """Create full repository mock implementing IConsultaRepository."""
        mock_repo = Mock(spec=IConsultaRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.list_all.return_value = []
        mock_repo.list_by_medico.return_value = []
        mock_repo.list_by_paciente.return_value = []
        mock_repo.list_by_status.return_value = []
        mock_repo.list_by_periodo.return_value = []
        mock_repo.has_conflict.return_value = False
        return _configure_writer(mock_repo)


class ProntuarioRepositoryFactory:
    """Factory for medical record repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        mock_reader = Mock(spec=IProntuarioReader)
        mock_reader.get_by_id.return_value = None
        mock_reader.get_by_consulta.return_value = None
        mock_reader.list_all.return_value = []
        mock_reader.list_by_paciente.return_value = []
        mock_reader.exists_for_consulta.return_value = False
        return mock_reader

    @staticmethod
    def create_mock_writer() -> Mock:
        return _configure_writer(Mock(spec=IProntuarioWriter))

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IProntuarioRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.get_by_consulta.return_value = None
        mock_repo.list_all.return_value = []
        mock_repo.list_by_paciente.return_value = []
        mock_repo.exists_for_consulta.return_value = False
        return _configure_writer(mock_repo)


class ReceitaRepositoryFactory:
    """Factory for prescription repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        mock_reader = Mock(spec=IReceitaReader)
        mock_reader.get_by_id.return_value = None
        mock_reader.list_all.return_value = []
        mock_reader.list_by_consulta.return_value = []
        mock_reader.list_by_paciente.return_value = []
        mock_reader.search_by_medicamento.return_value = []
        mock_reader.exists_for_consulta.return_value = False
        return mock_reader

    @staticmethod
    def create_mock_writer() -> Mock:
        return _configure_writer(Mock(spec=IReceitaWriter))

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IReceitaRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.list_all.return_value = []
        mock_repo.list_by_consulta.return_value = []
        mock_repo.list_by_paciente.return_value = []
        mock_repo.search_by_medicamento.return_value = []
        mock_repo.exists_for_consulta.return_value = False
        return _configure_writer(mock_repo)


class ExameRepositoryFactory:
    """Factory for exam repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        mock_reader = Mock(spec=IExameReader)
        mock_reader.get_by_id.return_value = None
        mock_reader.list_all.return_value = []
        mock_reader.list_by_consulta.return_value = []
        mock_reader.list_by_paciente.return_value = []
        mock_reader.list_by_tipo.return_value = []
        mock_reader.list_pendentes.return_value = []
        mock_reader.exists_for_consulta.return_value = False
        return mock_reader

    @staticmethod
    def create_mock_writer() -> Mock:
        return _configure_writer(Mock(spec=IExameWriter))

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IExameRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.list_all.return_value = []
        mock_repo.list_by_consulta.return_value = []
        mock_repo.list_by_paciente.return_value = []
        mock_repo.list_by_tipo.return_value = []
        mock_repo.list_pendentes.return_value = []
        mock_repo.exists_for_consulta.return_value = False
        return _configure_writer(mock_repo)
