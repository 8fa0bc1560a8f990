"""Single-slot holder carrying a deferred write failure to the next chunk boundary."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docbridge.domain.documents import WriteTarget

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeferredWriteFailure:
    """A physical write that failed inside an after-commit callback."""

    target: WriteTarget
    document_count: int
    error: BaseException


class FailureCell:
    """Thread-safe slot for at most one unacknowledged deferred failure.

    The after-commit callback stores into the cell, possibly from the thread
    that committed the transaction; the chunk-boundary hook empties it with
    :meth:`take`. Chunks are processed sequentially, so the slot is always
    drained between two deferred writes. A store into an occupied slot means
    the boundary hook was skipped: the newer failure wins and the displaced one
    is logged. Failures are never queued.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._failure: DeferredWriteFailure | None = None

    def store(self, failure: DeferredWriteFailure) -> None:
        with self._lock:
            displaced = self._failure
            self._failure = failure
        if displaced is not None:
            log.warning(
                "Deferred write failure for %s was never checked at a chunk boundary and "
                "is replaced by a newer failure for %s; original error: %r",
                displaced.target,
                failure.target,
                displaced.error,
            )

    def take(self) -> DeferredWriteFailure | None:
        """Atomically return the stored failure (if any) and clear the slot."""

        with self._lock:
            failure, self._failure = self._failure, None
        return failure

    def peek(self) -> DeferredWriteFailure | None:
        with self._lock:
            return self._failure

    def reset(self) -> None:
        with self._lock:
            self._failure = None
