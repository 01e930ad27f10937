import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from hospital.core.config import get_database_url
from hospital.core.db import register_query_timing

logger = logging.getLogger(__name__)

# Declarative base shared by every model in hospital.db.base
Base = declarative_base()

# Built on first use so tests can point DATABASE_URL elsewhere first
_engine = None
_SessionLocal = None
_database_url = None


def get_engine():
    """Engine for the current DATABASE_URL, created lazily and cached."""
    global _engine
    global _database_url
    global _SessionLocal
    database_url = get_database_url()
    # Rebuild when DATABASE_URL changed since the last call
    if _engine is None or _database_url != database_url:
        if _engine is not None:
            _engine.dispose()
            _SessionLocal = None

        url = make_url(database_url)
        if url.drivername.startswith("postgres"):
            _engine = create_engine(
                database_url,
                pool_size=10,
                max_overflow=20,
                pool_pre_ping=True,
                pool_recycle=3600,
                connect_args={
                    "application_name": "hospital_api",  # Visible in pg_stat_activity
                    "connect_timeout": 10,
                },
                echo=False,  # SQL echo is controlled by logging config
            )
        elif url.drivername.startswith("sqlite") and url.database in (None, "", ":memory:"):
            # Use a single shared in-memory database across the process so DDL
            # persists across sessions (tests create tables, then open new ones).
            _engine = create_engine(
                database_url,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        elif url.drivername.startswith("sqlite"):
            _engine = create_engine(
                database_url, echo=False, connect_args={"check_same_thread": False}
            )
        else:
            _engine = create_engine(database_url, echo=False)

        register_query_timing(_engine)
        logger.debug(
            "SQLAlchemy engine created",
            extra={"context": {"dialect": _engine.dialect.name}},
        )
        _database_url = database_url
    return _engine


def get_sessionmaker():
    """Session factory bound to the current engine."""
    global _SessionLocal
    engine = get_engine()
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )
    return _SessionLocal


def SessionLocal() -> Session:
    """Calling SessionLocal() returns a new Session bound to the lazy engine."""
    return get_sessionmaker()()


@contextmanager
def atomic(db: Session):
    """Run a block as one transaction: commit on success, roll back on any error."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def create_tables():
    """Create every table that does not exist yet."""
    # Importing the models module registers every table on Base.metadata
    from hospital.db import base  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def drop_tables():
    from hospital.db import base  # noqa: F401

    Base.metadata.drop_all(bind=get_engine())
