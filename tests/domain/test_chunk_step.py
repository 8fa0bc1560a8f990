from __future__ import annotations

import pytest

from docbridge.domain.checkpoint import StepCheckpoint
from docbridge.domain.chunk_step import run_chunked_step
from docbridge.domain.errors import DeferredWriteFailedError, StoreWriteError
from docbridge.domain.item_writer import DocumentItemWriter
from tests.helpers.documents import (
    FakeCheckpointRepository,
    FakeDocumentStore,
    FakeStepUnitOfWork,
    FakeTransactionContext,
    RecordingListener,
)


def _writer(store: FakeDocumentStore, transaction: FakeTransactionContext) -> DocumentItemWriter:
    return DocumentItemWriter(
        store, database="shop", collection="orders", transaction_context=transaction
    )


def _records(count: int) -> list[dict[str, int]]:
    return [{"n": n} for n in range(count)]


def test_each_chunk_commits_checkpoint_then_writes_documents(
    store: FakeDocumentStore, transaction: FakeTransactionContext
) -> None:
    repository = FakeCheckpointRepository()
    events: list[str] = []

    result = run_chunked_step(
        step_name="orders",
        items=_records(5),
        writer=_writer(store, transaction),
        unit_of_work_factory=lambda: FakeStepUnitOfWork(repository, transaction, events=events),
        chunk_size=2,
        listeners=(RecordingListener(events),),
    )

    assert result.chunks == 3
    assert result.items == 5
    assert result.resumed_from == 0
    assert [len(call.documents) for call in store.calls] == [2, 2, 1]
    assert store.documents == _records(5)
    checkpoint = repository.get("orders")
    assert checkpoint is not None
    assert (checkpoint.committed_chunks, checkpoint.committed_items) == (3, 5)
    assert events[2:6] == ["before_chunk", "begin", "commit", "after_chunk"]


def test_restart_skips_items_covered_by_checkpoint(
    store: FakeDocumentStore, transaction: FakeTransactionContext
) -> None:
    repository = FakeCheckpointRepository()
    repository.add(StepCheckpoint(step_name="orders", committed_chunks=2, committed_items=4))

    result = run_chunked_step(
        step_name="orders",
        items=_records(6),
        writer=_writer(store, transaction),
        unit_of_work_factory=lambda: FakeStepUnitOfWork(repository, transaction),
        chunk_size=2,
    )

    assert result.resumed_from == 4
    assert result.chunks == 1
    assert store.documents == [{"n": 4}, {"n": 5}]
    checkpoint = repository.get("orders")
    assert checkpoint is not None
    assert checkpoint.committed_items == 6


def test_deferred_failure_aborts_step_after_its_chunk_committed(
    transaction: FakeTransactionContext,
) -> None:
    store = FakeDocumentStore(error=ConnectionError("connection refused"))
    repository = FakeCheckpointRepository()

    with pytest.raises(DeferredWriteFailedError, match="connection refused"):
        run_chunked_step(
            step_name="orders",
            items=_records(4),
            writer=_writer(store, transaction),
            unit_of_work_factory=lambda: FakeStepUnitOfWork(repository, transaction),
            chunk_size=2,
        )

    assert len(store.calls) == 1
    checkpoint = repository.get("orders")
    assert checkpoint is not None
    assert checkpoint.committed_items == 2


def test_failed_commit_never_writes_documents(
    store: FakeDocumentStore, transaction: FakeTransactionContext
) -> None:
    repository = FakeCheckpointRepository()

    with pytest.raises(RuntimeError, match="commit failed"):
        run_chunked_step(
            step_name="orders",
            items=_records(2),
            writer=_writer(store, transaction),
            unit_of_work_factory=lambda: FakeStepUnitOfWork(
                repository, transaction, fail_commit=True
            ),
            chunk_size=2,
        )

    assert store.calls == []
    assert repository.get("orders") is None


def test_synchronous_write_error_rolls_back_chunk(transaction: FakeTransactionContext) -> None:
    store = FakeDocumentStore(error=ValueError("duplicate key"))
    repository = FakeCheckpointRepository()
    writer = DocumentItemWriter(
        store,
        database="shop",
        collection="orders",
        transaction_context=transaction,
        transactional=False,
    )

    with pytest.raises(StoreWriteError):
        run_chunked_step(
            step_name="orders",
            items=_records(2),
            writer=writer,
            unit_of_work_factory=lambda: FakeStepUnitOfWork(repository, transaction),
        )

    assert repository.get("orders") is None


def test_chunk_size_must_be_positive(
    store: FakeDocumentStore, transaction: FakeTransactionContext
) -> None:
    with pytest.raises(ValueError, match="chunk_size"):
        run_chunked_step(
            step_name="orders",
            items=[],
            writer=_writer(store, transaction),
            unit_of_work_factory=lambda: FakeStepUnitOfWork(
                FakeCheckpointRepository(), transaction
            ),
            chunk_size=0,
        )
