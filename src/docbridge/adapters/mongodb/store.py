"""pymongo-based document store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pymongo import MongoClient
from pymongo.write_concern import WriteConcern

from docbridge.domain.documents import DurabilityLevel

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pymongo.database import Database

    from docbridge.config.document_store import DocumentStoreConfig
    from docbridge.domain.documents import Document

log = logging.getLogger(__name__)

_WRITE_CONCERNS: dict[DurabilityLevel, WriteConcern] = {
    DurabilityLevel.UNACKNOWLEDGED: WriteConcern(w=0),
    DurabilityLevel.ACKNOWLEDGED: WriteConcern(w=1),
    DurabilityLevel.JOURNALED: WriteConcern(w=1, j=True),
    DurabilityLevel.MAJORITY: WriteConcern(w="majority"),
}


def write_concern_for(durability: DurabilityLevel) -> WriteConcern:
    return _WRITE_CONCERNS[durability]


def durability_for(write_concern: WriteConcern) -> DurabilityLevel:
    """Map a collection's write concern onto the closest durability level."""

    if not write_concern.acknowledged:
        return DurabilityLevel.UNACKNOWLEDGED
    w = write_concern.document.get("w")
    if w == "majority" or (isinstance(w, int) and w > 1):
        return DurabilityLevel.MAJORITY
    if write_concern.document.get("j"):
        return DurabilityLevel.JOURNALED
    return DurabilityLevel.ACKNOWLEDGED


class MongoDocumentStore:
    """Insert documents into collections of one MongoDB database."""

    def __init__(self, database: Database[Any]) -> None:
        self.database = database

    @classmethod
    def from_config(
        cls, config: DocumentStoreConfig, *, client: MongoClient[Any] | None = None
    ) -> MongoDocumentStore:
        mongo_client = client or MongoClient(config.uri, serverSelectionTimeoutMS=config.timeout_ms)
        return cls(mongo_client.get_database(config.database))

    @property
    def name(self) -> str:
        return self.database.name

    def write(
        self,
        collection: str,
        documents: Sequence[Document],
        durability: DurabilityLevel,
    ) -> None:
        if not documents:
            return
        target = self.database.get_collection(
            collection, write_concern=write_concern_for(durability)
        )
        # insert_many sets _id on the dicts it receives
        target.insert_many([dict(document) for document in documents], ordered=True)
        log.debug(
            "Inserted %s document(s) into %s.%s (%s)",
            len(documents),
            self.database.name,
            collection,
            durability,
        )

    def default_durability(self, collection: str) -> DurabilityLevel:
        return durability_for(self.database.get_collection(collection).write_concern)
