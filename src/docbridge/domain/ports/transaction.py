"""Port for observing the enclosing transaction of a unit of work."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

type AfterCommitCallback = Callable[[], None]


@runtime_checkable
class TransactionContext(Protocol):
    """Answers whether a transaction is active and accepts after-commit callbacks.

    ``register_after_commit`` callbacks must run exactly once, only after the
    transaction's own resources committed, and never after a rollback.
    """

    def is_transaction_active(self) -> bool: ...

    def register_after_commit(self, callback: AfterCommitCallback) -> None: ...
