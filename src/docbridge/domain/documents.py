"""Documents, write targets and the conversion of pipeline items into documents."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from docbridge.domain.errors import ConversionError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from docbridge.domain.ports.conversion import DocumentConverter

type Document = Mapping[str, Any]


class DurabilityLevel(StrEnum):
    """How strongly the document store must acknowledge a write."""

    UNACKNOWLEDGED = "unacknowledged"
    ACKNOWLEDGED = "acknowledged"
    JOURNALED = "journaled"
    MAJORITY = "majority"


@dataclass(frozen=True, slots=True)
class WriteTarget:
    store_name: str
    collection_name: str

    def __str__(self) -> str:
        return f"{self.store_name}.{self.collection_name}"


@dataclass(frozen=True, slots=True)
class WriteBatch:
    """Documents of one chunk bound for a single collection."""

    target: WriteTarget
    documents: tuple[Document, ...] = ()
    durability: DurabilityLevel | None = None

    def __len__(self) -> int:
        return len(self.documents)

    @property
    def is_empty(self) -> bool:
        return not self.documents


@dataclass(frozen=True, slots=True)
class AlreadyDocument:
    document: Document

    def resolve(self) -> Document:
        return self.document


@dataclass(frozen=True, slots=True)
class NeedsConversion:
    item: object
    converter: DocumentConverter | None

    def resolve(self) -> Document:
        if self.converter is None:
            raise ConversionError(
                f"Cannot convert item to document without a converter: {self.item!r}"
            )
        try:
            document = self.converter(self.item)
        except Exception as exc:
            raise ConversionError(f"Converter failed for item {self.item!r}: {exc}") from exc
        if not isinstance(document, Mapping):
            raise ConversionError(
                f"Converter returned {type(document).__name__}, expected a mapping "
                f"for item {self.item!r}"
            )
        return document


type PreparedItem = AlreadyDocument | NeedsConversion


def classify_item(item: object, converter: DocumentConverter | None) -> PreparedItem:
    """Tag ``item`` as a ready document or one that still needs ``converter``."""

    if isinstance(item, Mapping):
        return AlreadyDocument(document=item)
    return NeedsConversion(item=item, converter=converter)


def prepare_documents(
    items: Iterable[object] | None, converter: DocumentConverter | None = None
) -> tuple[Document, ...]:
    """Resolve every item into a document, failing before any I/O on the first bad one."""

    if items is None:
        return ()
    return tuple(classify_item(item, converter).resolve() for item in items)
