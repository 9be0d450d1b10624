"""SQLAlchemy engine for the records store."""

import os

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from src.application.ports.database import DatabaseEnginePort
from src.infrastructure.logging.logger import get_app_logger


RECORDS_DB_URL_ENV = "RECORDS_DB_URL"

# Server backends get a small pool with health checks. SQLite keeps the
# pool SQLAlchemy picks for file and in-memory databases.
SERVER_POOL_OPTIONS = {
    "pool_size": 5,
    "max_overflow": 5,
    "pool_pre_ping": True,
}


def records_db_url() -> str:
    """Return the records database URL from the environment or ``.env``.

    Raises:
        RuntimeError: If ``RECORDS_DB_URL`` is missing or empty.
    """
    dotenv.load_dotenv()
    db_url = os.getenv(RECORDS_DB_URL_ENV, "").strip()
    if not db_url:
        raise RuntimeError(
            f"Missing environment variable: {RECORDS_DB_URL_ENV}"
        )
    return db_url


def engine_options(db_url: str) -> dict:
    """Return ``create_engine`` keyword arguments for a database URL."""
    if make_url(db_url).get_backend_name() == "sqlite":
        return {}
    return dict(SERVER_POOL_OPTIONS)


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort backed by one process-wide SQLAlchemy engine.

    The engine is created on first use so importing the module never needs
    a configured database.
    """

    _engine: Engine | None = None

    def get_records_engine(self) -> Engine:
        cls = type(self)
        if cls._engine is None:
            db_url = records_db_url()
            cls._engine = create_engine(db_url, **engine_options(db_url))
            get_app_logger().info(
                "Records engine created for "
                f"{make_url(db_url).render_as_string(hide_password=True)}"
            )
        return cls._engine


__all__ = [
    "RECORDS_DB_URL_ENV",
    "records_db_url",
    "engine_options",
    "SqlAlchemyDatabaseEngineAdapter",
]
