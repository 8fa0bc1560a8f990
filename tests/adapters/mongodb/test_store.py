from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from pymongo.write_concern import WriteConcern

from docbridge.adapters.mongodb import MongoDocumentStore, durability_for, write_concern_for
from docbridge.config import DocumentStoreConfig
from docbridge.domain.documents import DurabilityLevel


@pytest.mark.parametrize(
    ("write_concern", "expected"),
    [
        (WriteConcern(w=0), DurabilityLevel.UNACKNOWLEDGED),
        (WriteConcern(), DurabilityLevel.ACKNOWLEDGED),
        (WriteConcern(w=1), DurabilityLevel.ACKNOWLEDGED),
        (WriteConcern(w=1, j=True), DurabilityLevel.JOURNALED),
        (WriteConcern(w=3), DurabilityLevel.MAJORITY),
        (WriteConcern(w="majority"), DurabilityLevel.MAJORITY),
    ],
)
def test_durability_for_write_concern(
    write_concern: WriteConcern, expected: DurabilityLevel
) -> None:
    assert durability_for(write_concern) is expected


def test_write_concern_for_each_level() -> None:
    assert write_concern_for(DurabilityLevel.UNACKNOWLEDGED).acknowledged is False
    assert write_concern_for(DurabilityLevel.ACKNOWLEDGED).document == {"w": 1}
    assert write_concern_for(DurabilityLevel.JOURNALED).document == {"w": 1, "j": True}
    assert write_concern_for(DurabilityLevel.MAJORITY).document == {"w": "majority"}


def test_write_inserts_copies_with_requested_write_concern() -> None:
    database = MagicMock()
    collection = database.get_collection.return_value
    store = MongoDocumentStore(database)
    documents = ({"a": 1}, {"a": 2})

    store.write("orders", documents, DurabilityLevel.MAJORITY)

    database.get_collection.assert_called_once_with(
        "orders", write_concern=WriteConcern(w="majority")
    )
    collection.insert_many.assert_called_once_with([{"a": 1}, {"a": 2}], ordered=True)
    inserted = collection.insert_many.call_args.args[0]
    assert inserted[0] is not documents[0]


def test_write_skips_empty_batches() -> None:
    database = MagicMock()
    store = MongoDocumentStore(database)

    store.write("orders", (), DurabilityLevel.ACKNOWLEDGED)

    database.get_collection.assert_not_called()


def test_driver_errors_propagate() -> None:
    database = MagicMock()
    database.get_collection.return_value.insert_many.side_effect = ConnectionError(
        "connection refused"
    )
    store = MongoDocumentStore(database)

    with pytest.raises(ConnectionError, match="connection refused"):
        store.write("orders", ({"a": 1},), DurabilityLevel.ACKNOWLEDGED)


def test_default_durability_reads_collection_write_concern() -> None:
    database = MagicMock()
    database.get_collection.return_value.write_concern = WriteConcern(w="majority")
    store = MongoDocumentStore(database)

    assert store.default_durability("orders") is DurabilityLevel.MAJORITY
    database.get_collection.assert_called_once_with("orders")


def test_from_config_selects_configured_database() -> None:
    client = MagicMock()
    config = DocumentStoreConfig(uri="mongodb://localhost", database="shop", collection="orders")

    store = MongoDocumentStore.from_config(config, client=client)

    client.get_database.assert_called_once_with("shop")
    assert store.database is client.get_database.return_value
