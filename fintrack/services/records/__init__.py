"""Per-user record persistence package."""

from fintrack.services.records.scoped_store import (
    CorruptCollectionError,
    ScopedDataStore,
    collapse_budgets,
    decode_collection,
    encode_collection,
)

__all__ = [
    "CorruptCollectionError",
    "ScopedDataStore",
    "collapse_budgets",
    "decode_collection",
    "encode_collection",
]
