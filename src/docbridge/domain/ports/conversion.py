"""Port for turning pipeline items into documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


@runtime_checkable
class DocumentConverter(Protocol):
    """Callable converting one item into a document."""

    def __call__(self, item: Any, /) -> Mapping[str, Any]: ...
