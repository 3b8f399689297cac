"""Database ports for the liquidity planner.

This module defines the application-layer protocol for accessing the
planning database engine. Infrastructure implementations provide concrete
adapters that satisfy it.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine of the planning database.

    Application use cases can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_planning_engine(self) -> Engine:
        """Get the engine for the planning database.

        Returns:
            Engine: SQLAlchemy engine connected to the planning tables.
        """


__all__ = ["DatabaseEnginePort"]
