"""Core utilities: snapshot serialization for the document store."""

from .serialization import (
    SNAPSHOT_SCHEMA_VERSION,
    serialize_documents,
    deserialize_documents,
    write_snapshot,
    read_snapshot,
)

__all__ = [
    "SNAPSHOT_SCHEMA_VERSION",
    "serialize_documents",
    "deserialize_documents",
    "write_snapshot",
    "read_snapshot",
]
