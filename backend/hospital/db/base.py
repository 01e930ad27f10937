from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hospital.domain.entities import StatusConsulta, TipoExame

from .session import Base

# ------------------- MEDICO x ESPECIALIDADE -------------------
medico_especialidades = Table(
    "medico_especialidades",
    Base.metadata,
    Column(
        "medico_id",
        Integer,
        ForeignKey("medicos.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "especialidade_id",
        Integer,
        ForeignKey("especialidades.id"),
        primary_key=True,
    ),
)


class Especialidade(Base):
    """Medical specialty"""

    __tablename__ = "especialidades"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    nome: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    descricao: Mapped[str] = mapped_column(String(500), nullable=False)

    def __repr__(self):
        return f"<Especialidade(id={self.id}, nome='{self.nome}')>"


class Medico(Base):
    """Doctor"""

    __tablename__ = "medicos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    nome: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    crm: Mapped[str] = mapped_column(String(6), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    telefone: Mapped[str] = mapped_column(String(11), nullable=False)

    # One-directional: specialties never navigate back to doctors
    especialidades: Mapped[List[Especialidade]] = relationship(
        Especialidade,
        secondary=medico_especialidades,
        lazy="selectin",
        order_by=Especialidade.nome,
    )

    def __repr__(self):
        return f"<Medico(id={self.id}, crm='{self.crm}')>"


class Paciente(Base):
    """Patient"""

    __tablename__ = "pacientes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    nome: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    cpf: Mapped[str] = mapped_column(String(11), unique=True, nullable=False)
    data_nascimento: Mapped[date] = mapped_column(Date, nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    telefone: Mapped[str] = mapped_column(String(11), nullable=False)
    endereco: Mapped[str] = mapped_column(String(200), nullable=False)

    def __repr__(self):
        return f"<Paciente(id={self.id}, cpf='{self.cpf}')>"


class Consulta(Base):
    """Appointment between a doctor and a patient"""

    __tablename__ = "consultas"
    __table_args__ = (Index("ix_consultas_medico_data_hora", "medico_id", "data_hora"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    data_hora: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    status: Mapped[StatusConsulta] = mapped_column(
        Enum(StatusConsulta, native_enum=False, length=20),
        nullable=False,
        default=StatusConsulta.AGENDADA,
    )
    medico_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("medicos.id"), nullable=False
    )
    paciente_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("pacientes.id"), nullable=False, index=True
    )
    observacao: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    def __repr__(self):
        return f"<Consulta(id={self.id}, data_hora={self.data_hora}, status={self.status})>"


class Prontuario(Base):
    """Medical record, one per appointment"""

    __tablename__ = "prontuarios"
    __table_args__ = (UniqueConstraint("consulta_id", name="uq_prontuarios_consulta"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    consulta_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("consultas.id"), nullable=False
    )
    anamnese: Mapped[str] = mapped_column(Text, nullable=False)
    diagnostico: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    plano_tratamento: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    data_atualizacao: Mapped[Optional[datetime]] = mapped_column(
        DateTime, nullable=True
    )


class Receita(Base):
    """Prescription"""

    __tablename__ = "receitas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    consulta_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("consultas.id"), nullable=False, index=True
    )
    medicamento: Mapped[str] = mapped_column(String(100), nullable=False)
    posologia: Mapped[str] = mapped_column(String(500), nullable=False)
    observacoes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    data_emissao: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    data_validade: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class Exame(Base):
    """Exam order and, once available, its result"""

    __tablename__ = "exames"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    consulta_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("consultas.id"), nullable=False, index=True
    )
    nome: Mapped[str] = mapped_column(String(100), nullable=False)
    tipo: Mapped[TipoExame] = mapped_column(
        Enum(TipoExame, native_enum=False, length=20), nullable=False
    )
    instrucoes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    data_solicitacao: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    data_resultado: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    resultado: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
