"""Database engine and session management."""
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from price_alert_monitor.config import get_settings
from price_alert_monitor.db.models import (  # noqa: F401  # pylint: disable=unused-import
    Alert, PushEndpoint, PushSetting)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the synchronous engine used by the alert store."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


@contextmanager
def get_session(engine: Engine) -> Generator[Session, None, None]:
    """Yield a database session; commits on success, rolls back on error."""
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_tables(engine: Engine) -> None:
    """Create all tables. Idempotent for existing tables."""
    SQLModel.metadata.create_all(engine)


def init_db() -> None:
    """Console entry point: create tables in the configured database."""
    settings = get_settings()
    create_tables(build_engine(settings.database_url, echo=settings.sql_echo))
