"""Pipeline-facing item writer for a single document collection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docbridge.config.errors import ConfigurationError
from docbridge.domain.documents import WriteBatch, WriteTarget, prepare_documents
from docbridge.domain.errors import DeferredWriteFailedError
from docbridge.domain.failure_cell import FailureCell
from docbridge.domain.write_coordinator import WriteCoordinator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docbridge.domain.documents import DurabilityLevel
    from docbridge.domain.ports.conversion import DocumentConverter
    from docbridge.domain.ports.document_store import DocumentStore
    from docbridge.domain.ports.transaction import AfterCommitCallback, TransactionContext

log = logging.getLogger(__name__)


class _NoTransaction:
    def is_transaction_active(self) -> bool:
        return False

    def register_after_commit(self, callback: AfterCommitCallback) -> None:
        _ = callback
        raise RuntimeError("No transaction to register an after-commit callback with")


class DocumentItemWriter:
    """Write chunks of items into one collection and report deferred failures.

    Configuration is validated on construction, before any I/O happens. With
    ``transactional`` enabled (the default) writes issued inside an active
    transaction are deferred until it commits, and :meth:`after_chunk` turns a
    failure of such a write into :class:`DeferredWriteFailedError`. Call
    :meth:`after_chunk` once per chunk, after the chunk's transaction ended.
    """

    def __init__(
        self,
        store: DocumentStore | None,
        *,
        database: str | None,
        collection: str | None,
        transaction_context: TransactionContext | None = None,
        converter: DocumentConverter | None = None,
        durability: DurabilityLevel | None = None,
        transactional: bool = True,
        failure_cell: FailureCell | None = None,
    ) -> None:
        if store is None:
            raise ConfigurationError("A document store is required")
        if not database or not database.strip():
            raise ConfigurationError("A database name is required")
        if not collection or not collection.strip():
            raise ConfigurationError("A collection name is required")
        if store.name != database:
            raise ConfigurationError(
                f"Document store writes to database {store.name!r}, not {database!r}"
            )
        if transactional and transaction_context is None:
            raise ConfigurationError("A transaction context is required in transactional mode")

        self.target = WriteTarget(store_name=database, collection_name=collection)
        self.converter = converter
        self.durability = durability
        self.transactional = transactional
        self.failure_cell = failure_cell if failure_cell is not None else FailureCell()
        self.coordinator = WriteCoordinator(
            store,
            transaction_context or _NoTransaction(),
            failure_cell=self.failure_cell,
            transactional=transactional,
        )

    def write(self, items: Sequence[object]) -> None:
        documents = prepare_documents(items, self.converter)
        self.coordinator.write(
            WriteBatch(target=self.target, documents=documents, durability=self.durability)
        )

    def before_chunk(self) -> None:
        pass

    def after_chunk(self) -> None:
        failure = self.failure_cell.take()
        if failure is None:
            return
        log.error(
            "Aborting: %s document(s) for %s were not written although their chunk committed",
            failure.document_count,
            failure.target,
        )
        raise DeferredWriteFailedError(failure) from failure.error
