"""Database infrastructure for the fleet dashboard.

This module exposes concrete helpers to create and reuse the SQLAlchemy
engine connected to the analytics database that mirrors the dashboard
API tables. It belongs to the infrastructure layer because it deals with
external systems.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from fleet_dashboard.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Values from a ``.env`` file are loaded first.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance with a small connection pool and
        health checks enabled.
    """
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_analytics_engine: Optional[Engine] = None


def get_analytics_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the analytics database.

    Returns:
        Engine: Lazily initialized engine connected to the analytics tables.
    """
    global _analytics_engine
    if _analytics_engine is None:
        db_url = _get_env_var("FLEET_ANALYTICS_DB_URL")
        _analytics_engine = _create_engine(db_url)
    return _analytics_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so record stores can depend only on the protocol.
    """

    def get_analytics_engine(self) -> Engine:
        """Get the engine for the analytics database.

        Returns:
            Engine: SQLAlchemy engine connected to the analytics tables.
        """
        return get_analytics_engine()


__all__ = [
    "get_analytics_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
