"""SQLAlchemy mapping metadata for step checkpoints."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, Dialect, Integer, String, Table, TypeDecorator, orm
from sqlalchemy.orm import configure_mappers

from docbridge.domain.checkpoint import StepCheckpoint

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()

step_checkpoint_table = Table(
    "step_checkpoint",
    mapper_registry.metadata,
    Column("step_name", String(255), primary_key=True),
    Column("committed_chunks", Integer, nullable=False, default=0),
    Column("committed_items", Integer, nullable=False, default=0),
    Column("updated_at", UTCDateTime(), nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the checkpoint model."""

    log.info("Starting SQLAlchemy mappers")
    mapper_registry.map_imperatively(StepCheckpoint, step_checkpoint_table)
    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
