"""
Serialization Utilities

Provides to/from JSON utilities for document store snapshots.

- `serialize_documents` / `deserialize_documents` work on plain dicts
- `write_snapshot` / `read_snapshot` handle the JSON file round trip
- Snapshots carry a schema version; unknown versions are rejected
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any, Iterable

from ..models.documents import Document

logger = logging.getLogger(__name__)

SNAPSHOT_SCHEMA_VERSION = 1


# ─────────────────────────────────────────────────────────────────────────────
# Document Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_documents(documents: Iterable[Document]) -> dict[str, Any]:
    """
    Serialize documents to a snapshot dictionary.

    Args:
        documents: Documents in store order

    Returns:
        Dictionary suitable for JSON serialization
    """
    return {
        "schema_version": SNAPSHOT_SCHEMA_VERSION,
        "documents": [doc.to_dict() for doc in documents],
    }


def deserialize_documents(data: dict[str, Any]) -> list[Document]:
    """
    Deserialize documents from a snapshot dictionary.

    Args:
        data: Dictionary from JSON

    Returns:
        Documents in snapshot order

    Raises:
        ValueError: If the snapshot is malformed or has duplicate ids
    """
    version = data.get("schema_version")
    if version != SNAPSHOT_SCHEMA_VERSION:
        raise ValueError(f"Unsupported snapshot schema version: {version!r}")

    entries = data.get("documents")
    if not isinstance(entries, list):
        raise ValueError("Snapshot 'documents' must be a list")

    documents = []
    seen: set[int] = set()
    for i, entry in enumerate(entries):
        try:
            doc = Document.from_dict(entry)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid document at position {i}: {e}") from e
        if doc.id in seen:
            raise ValueError(f"Duplicate document id in snapshot: {doc.id}")
        seen.add(doc.id)
        documents.append(doc)
    return documents


# ─────────────────────────────────────────────────────────────────────────────
# File Round Trip
# ─────────────────────────────────────────────────────────────────────────────

def write_snapshot(documents: Iterable[Document], path: Path) -> None:
    """
    Atomically write a snapshot file.

    Writes to a temp file in the target directory and renames it over
    the destination, so readers never see a half-written snapshot.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(serialize_documents(documents), ensure_ascii=False, indent=2)

    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            suffix=".tmp",
            dir=path.parent,
            delete=False,
            encoding="utf-8",
        ) as f:
            temp_path = Path(f.name)
            f.write(payload)
        # replace() overwrites existing files on all platforms
        temp_path.replace(path)
    except Exception:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise
    logger.debug(f"Wrote document snapshot to {path}")


def read_snapshot(path: Path) -> list[Document]:
    """
    Read a snapshot file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a valid snapshot
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Snapshot file is corrupted: {path}: {e}") from e
    return deserialize_documents(data)
