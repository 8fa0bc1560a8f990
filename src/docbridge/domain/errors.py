"""Errors raised while writing pipeline chunks to the document store."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docbridge.domain.failure_cell import DeferredWriteFailure


class DocumentWriteError(RuntimeError):
    """Base class for document writer failures."""


class ConversionError(DocumentWriteError):
    """Raised when an item cannot be turned into a document."""


class StoreWriteError(DocumentWriteError):
    """Raised when a synchronous write to the document store fails."""


class DeferredWriteFailedError(DocumentWriteError):
    """Terminal abort for a deferred write that failed after its chunk committed.

    The transactional resources of the chunk are already committed, so the
    document store is missing that chunk and must be reconciled by an operator.
    """

    def __init__(self, failure: DeferredWriteFailure) -> None:
        super().__init__(
            f"Could not write {failure.document_count} document(s) to {failure.target} "
            f"after the chunk committed: {failure.error}"
        )
        self.failure = failure
