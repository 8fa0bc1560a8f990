"""MongoDB adapter package for docbridge."""

from __future__ import annotations

from .store import MongoDocumentStore, durability_for, write_concern_for

__all__ = ["MongoDocumentStore", "durability_for", "write_concern_for"]
