"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from docbridge.adapters.mongodb import MongoDocumentStore
from docbridge.adapters.sqlalchemy.transaction import SqlAlchemyTransactionContext
from docbridge.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from docbridge.config import get_document_store_config
from docbridge.domain.chunk_step import DEFAULT_CHUNK_SIZE, StepResult, run_chunked_step
from docbridge.domain.item_writer import DocumentItemWriter
from docbridge.domain.ports.unit_of_work import StepUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Iterable

    from docbridge.config import DocumentStoreConfig
    from docbridge.domain.failure_cell import FailureCell
    from docbridge.domain.ports.conversion import DocumentConverter
    from docbridge.domain.ports.document_store import DocumentStore

UnitOfWorkFactory = Callable[[], StepUnitOfWork]


log = getLogger(__name__)


def build_document_writer(
    config: DocumentStoreConfig,
    *,
    store: DocumentStore | None = None,
    converter: DocumentConverter | None = None,
    failure_cell: FailureCell | None = None,
) -> DocumentItemWriter:
    """Create an item writer whose deferred writes follow the current unit of work."""

    return DocumentItemWriter(
        store or MongoDocumentStore.from_config(config),
        database=config.database,
        collection=config.collection,
        transaction_context=SqlAlchemyTransactionContext(),
        converter=converter,
        durability=config.durability,
        transactional=config.transactional,
        failure_cell=failure_cell,
    )


def import_documents(
    items: Iterable[object],
    *,
    step_name: str,
    config: DocumentStoreConfig | None = None,
    store: DocumentStore | None = None,
    converter: DocumentConverter | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> StepResult:
    """Write ``items`` to the configured collection, checkpointing every chunk."""

    if not is_started():
        startup()
    effective_config = config or get_document_store_config()
    writer = build_document_writer(effective_config, store=store, converter=converter)
    log.info(
        "Starting import: step=%s, target=%s, chunk_size=%s, transactional=%s",
        step_name,
        writer.target,
        chunk_size,
        effective_config.transactional,
    )

    result = run_chunked_step(
        step_name=step_name,
        items=items,
        writer=writer,
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyUnitOfWork,
        chunk_size=chunk_size,
    )

    log.info(
        f"Finished import: step={result.step_name}, chunks={result.chunks}, "
        f"items={result.items}, resumed_from={result.resumed_from}"
    )
    return result
