"""Document store (MongoDB) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from docbridge.domain.documents import DurabilityLevel

from .env import env_flag, optional_env_var, require_env_vars
from .errors import InvalidSettingError

DEFAULT_TRANSACTIONAL = True
MONGO_TIMEOUT_MS = 10_000


@dataclass(frozen=True)
class DocumentStoreConfig:
    """Holds the target of the document writer."""

    uri: str
    database: str
    collection: str
    durability: DurabilityLevel | None = None
    transactional: bool = DEFAULT_TRANSACTIONAL
    timeout_ms: int = MONGO_TIMEOUT_MS


def parse_durability(
    value: str | None, *, name: str = "DOCBRIDGE_DURABILITY"
) -> DurabilityLevel | None:
    if value is None:
        return None
    try:
        return DurabilityLevel(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(level.value for level in DurabilityLevel)
        raise InvalidSettingError(
            name, value, f"unknown durability level (expected one of: {choices})"
        ) from exc


def get_document_store_config(*, collection: str | None = None) -> DocumentStoreConfig:
    required = ["DOCBRIDGE_MONGO_URI", "DOCBRIDGE_DATABASE"]
    if collection is None:
        required.append("DOCBRIDGE_COLLECTION")
    values = require_env_vars(required)
    return DocumentStoreConfig(
        uri=values["DOCBRIDGE_MONGO_URI"],
        database=values["DOCBRIDGE_DATABASE"],
        collection=collection or values["DOCBRIDGE_COLLECTION"],
        durability=parse_durability(optional_env_var("DOCBRIDGE_DURABILITY")),
        transactional=env_flag("DOCBRIDGE_TRANSACTIONAL", default=DEFAULT_TRANSACTIONAL),
    )
