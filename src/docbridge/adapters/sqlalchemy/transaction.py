"""Transaction context backed by SQLAlchemy session events.

After-commit callbacks are kept in ``Session.info`` and driven by two session
events: ``after_commit`` of the outermost transaction runs them, and
``after_soft_rollback`` of the outermost transaction drops them. A callback is
therefore run at most once and never after a rollback. The commit has already
happened when callbacks run, so an exception from one is logged and the
remaining callbacks still run; callbacks that need to report failures must
record them themselves.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

from sqlalchemy import event

if TYPE_CHECKING:
    from sqlalchemy.orm import Session, SessionTransaction

    from docbridge.domain.ports.transaction import AfterCommitCallback

log = logging.getLogger(__name__)

_PENDING_KEY = "docbridge.after_commit"

_active_session: ContextVar[Session | None] = ContextVar("docbridge_active_session", default=None)


def bind_session(session: Session) -> Token[Session | None]:
    """Make ``session`` the current session of this execution context."""

    return _active_session.set(session)


def unbind_session(token: Token[Session | None]) -> None:
    _active_session.reset(token)


def current_session() -> Session | None:
    return _active_session.get()


class SqlAlchemyTransactionContext:
    """Observe a session's transaction.

    Without an explicit ``session`` the context follows whichever session the
    current unit of work has bound, so one instance can serve a whole step.
    """

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    def is_transaction_active(self) -> bool:
        session = self._resolve_session()
        return session is not None and session.in_transaction()

    def register_after_commit(self, callback: AfterCommitCallback) -> None:
        session = self._resolve_session()
        if session is None or not session.in_transaction():
            raise RuntimeError("No active SQLAlchemy transaction to register a callback with")
        _pending_callbacks(session).append(callback)

    def _resolve_session(self) -> Session | None:
        return self._session if self._session is not None else current_session()


def _pending_callbacks(session: Session) -> list[AfterCommitCallback]:
    pending: list[AfterCommitCallback] | None = session.info.get(_PENDING_KEY)
    if pending is None:
        pending = []
        session.info[_PENDING_KEY] = pending
        event.listen(session, "after_commit", _run_pending)
        event.listen(session, "after_soft_rollback", _discard_pending)
    return pending


def _run_pending(session: Session) -> None:
    if session.in_nested_transaction():
        return
    pending: list[AfterCommitCallback] | None = session.info.get(_PENDING_KEY)
    if not pending:
        return
    callbacks = list(pending)
    pending.clear()
    for callback in callbacks:
        try:
            callback()
        except Exception:  # noqa: BLE001
            log.exception("After-commit callback %r failed", callback)


def _discard_pending(session: Session, previous_transaction: SessionTransaction) -> None:
    if previous_transaction.nested:
        return
    pending: list[AfterCommitCallback] | None = session.info.get(_PENDING_KEY)
    if not pending:
        return
    log.debug("Transaction rolled back, dropping %s after-commit callback(s)", len(pending))
    pending.clear()
