"""Transaction-aware coordinator for writes to the document store.

The document store cannot take part in the transaction that commits the rest
of a chunk. When a transaction is active, the physical write is therefore
registered as an after-commit callback: it runs only once the transactional
resources have committed and never after a rollback. A failure at that point
has no caller left to raise into, so it is parked in a :class:`FailureCell`
and surfaced by the chunk-boundary hook one tick later.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docbridge.domain.errors import StoreWriteError
from docbridge.domain.failure_cell import DeferredWriteFailure, FailureCell

if TYPE_CHECKING:
    from docbridge.domain.documents import DurabilityLevel, WriteBatch
    from docbridge.domain.ports.document_store import DocumentStore
    from docbridge.domain.ports.transaction import TransactionContext

log = logging.getLogger(__name__)


class WriteCoordinator:
    def __init__(
        self,
        store: DocumentStore,
        transaction_context: TransactionContext,
        *,
        failure_cell: FailureCell | None = None,
        transactional: bool = True,
    ) -> None:
        self.store = store
        self.transaction_context = transaction_context
        self.failure_cell = failure_cell if failure_cell is not None else FailureCell()
        self.transactional = transactional

    def write(self, batch: WriteBatch) -> None:
        """Write ``batch`` now, or defer it until the active transaction commits.

        Raises :class:`StoreWriteError` only on the synchronous path. A deferred
        write always returns immediately; its outcome is reported through the
        failure cell.
        """

        if batch.is_empty:
            return

        if self.transactional and self.transaction_context.is_transaction_active():
            log.debug(
                "Deferring write of %s document(s) to %s until commit",
                len(batch),
                batch.target,
            )
            self.transaction_context.register_after_commit(lambda: self._run_deferred(batch))
            return

        try:
            self._physical_write(batch)
        except Exception as exc:
            raise StoreWriteError(f"Write to {batch.target} failed: {exc}") from exc

    def _run_deferred(self, batch: WriteBatch) -> None:
        try:
            self._physical_write(batch)
        except Exception as exc:  # noqa: BLE001
            log.exception(
                "Deferred write of %s document(s) to %s failed after commit",
                len(batch),
                batch.target,
            )
            self.failure_cell.store(
                DeferredWriteFailure(target=batch.target, document_count=len(batch), error=exc)
            )
            return
        log.debug("Deferred write of %s document(s) to %s completed", len(batch), batch.target)

    def _physical_write(self, batch: WriteBatch) -> None:
        durability = self._resolve_durability(batch)
        self.store.write(batch.target.collection_name, batch.documents, durability)

    def _resolve_durability(self, batch: WriteBatch) -> DurabilityLevel:
        if batch.durability is not None:
            return batch.durability
        return self.store.default_durability(batch.target.collection_name)
