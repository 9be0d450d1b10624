"""Database ports for the clinic finance dashboard.

This module defines the application-layer protocol for accessing the records
database engine. Infrastructure implementations are expected to provide
concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the database engine holding revenue and expense records.

    Application use cases can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_records_engine(self) -> Engine:
        """Get the engine for the records database.

        Returns:
            Engine: SQLAlchemy engine connected to the records store.
        """


__all__ = ["DatabaseEnginePort"]
