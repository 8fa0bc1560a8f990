"""Ports describing the chunk lifecycle of the batch pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class ChunkListener(Protocol):
    """Hooks invoked around every chunk, after the chunk's transaction ended."""

    def before_chunk(self) -> None: ...

    def after_chunk(self) -> None: ...


@runtime_checkable
class ItemWriter[TItem](Protocol):
    """Writes all items of one chunk."""

    def write(self, items: Sequence[TItem]) -> None: ...
