"""Ports consumed by the document writer."""

from __future__ import annotations

from .chunking import ChunkListener, ItemWriter
from .conversion import DocumentConverter
from .document_store import DocumentStore
from .persistence import CheckpointRepository
from .transaction import AfterCommitCallback, TransactionContext
from .unit_of_work import StepRepositories, StepUnitOfWork, UnitOfWork

__all__ = [
    "AfterCommitCallback",
    "CheckpointRepository",
    "ChunkListener",
    "DocumentConverter",
    "DocumentStore",
    "ItemWriter",
    "StepRepositories",
    "StepUnitOfWork",
    "TransactionContext",
    "UnitOfWork",
]
