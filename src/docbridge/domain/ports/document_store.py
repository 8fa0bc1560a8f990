"""Port for the non-transactional document store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docbridge.domain.documents import Document, DurabilityLevel


@runtime_checkable
class DocumentStore(Protocol):
    """Driver contract; implementations must be safe to call from any thread.

    ``name`` is the database the store writes into.
    """

    @property
    def name(self) -> str: ...

    def write(
        self,
        collection: str,
        documents: Sequence[Document],
        durability: DurabilityLevel,
    ) -> None: ...

    def default_durability(self, collection: str) -> DurabilityLevel: ...
