"""SQLAlchemy adapter package for docbridge."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import SqlAlchemyCheckpointRepository
from .transaction import SqlAlchemyTransactionContext
from .unit_of_work import SqlAlchemyUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyCheckpointRepository",
    "SqlAlchemyTransactionContext",
    "SqlAlchemyUnitOfWork",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
