"""Ports for persisting step checkpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from docbridge.domain.checkpoint import StepCheckpoint


@runtime_checkable
class CheckpointRepository(Protocol):
    """Persistence contract for step checkpoints."""

    def get(self, step_name: str) -> StepCheckpoint | None: ...

    def add(self, checkpoint: StepCheckpoint) -> None: ...
