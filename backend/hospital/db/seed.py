"""
Database seeding functions.

Inserts reference data (default medical specialties) so a fresh database
is usable right away. Every function here is idempotent.
"""

import logging
from typing import Iterable, Optional, Tuple

from hospital.db.base import Especialidade
from hospital.db.session import SessionLocal

logger = logging.getLogger(__name__)

DEFAULT_ESPECIALIDADES: Tuple[Tuple[str, str], ...] = (
    ("Cardiologia", "Diagnóstico e tratamento de doenças do coração"),
    ("Clínica Geral", "Atendimento clínico geral e acompanhamento preventivo"),
    ("Dermatologia", "Diagnóstico e tratamento de doenças da pele"),
    ("Ginecologia", "Saúde do sistema reprodutor feminino"),
    ("Neurologia", "Diagnóstico e tratamento de doenças do sistema nervoso"),
    ("Ortopedia", "Tratamento de lesões e doenças do sistema musculoesquelético"),
    ("Pediatria", "Atendimento médico de crianças e adolescentes"),
)


def seed_especialidades(
    especialidades: Optional[Iterable[Tuple[str, str]]] = None,
) -> int:
    """
    Insert the given specialties, skipping names that already exist.

    Returns:
        Number of specialties created
    """
    created = 0
    with SessionLocal() as db:
        try:
            for nome, descricao in especialidades or DEFAULT_ESPECIALIDADES:
                exists = db.query(Especialidade).filter_by(nome=nome).first()
                if exists is not None:
                    logger.debug(
                        "Especialidade already present",
                        extra={"context": {"nome": nome}},
                    )
                    continue
                db.add(Especialidade(nome=nome, descricao=descricao))
                created += 1
            db.commit()
        except Exception:
            db.rollback()
            logger.error("Failed to seed especialidades", exc_info=True)
            raise

    logger.info("Especialidades seeded", extra={"context": {"created": created}})
    return created
