"""Progress of a chunked step, committed together with each chunk."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False)
class StepCheckpoint:
    step_name: str
    committed_chunks: int = 0
    committed_items: int = 0
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if not self.step_name.strip():
            raise ValueError("step_name must not be blank")
        if self.committed_chunks < 0 or self.committed_items < 0:
            raise ValueError("checkpoint counters must be non-negative")

    def advance(self, item_count: int, *, now: datetime | None = None) -> None:
        """Record one more committed chunk holding ``item_count`` items."""

        if item_count < 0:
            raise ValueError("item_count must be non-negative")
        self.committed_chunks += 1
        self.committed_items += item_count
        self.updated_at = now or _utcnow()
