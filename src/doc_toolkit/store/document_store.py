"""
Module: store.document_store

Purpose:
    In-memory ordered collection of saved documents.
    Insertion order is the only ordering; nothing is ever sorted or
    deleted.

Key Classes:
    - DocumentStore: Create/update, page listing and snapshots

Dependencies:
    - core.models.documents: Document
    - core.utils.serialization: Snapshot files

Used By:
    - editor.session: Save/load of the current document
    - export.controller: Index page snapshot
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from doc_toolkit.core.models import Document
from doc_toolkit.core.utils.serialization import read_snapshot, write_snapshot

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 5


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class DocumentStore:
    """
    Ordered in-memory document collection.

    Identifiers are derived from the wall clock in milliseconds and
    bumped when two documents are created within the same millisecond,
    so every identifier handed out by a store is distinct.

    Writes are serialized with a lock; readers get copies, so an export
    can snapshot the list while the editor keeps saving.

    Example:
        >>> store = DocumentStore()
        >>> docs, index = store.create_or_update(None, "<p>X</p>")
        >>> docs, index = store.create_or_update(index, "<p>Y</p>")
        >>> len(store), store.get(index).content
        (1, '<p>Y</p>')
    """

    def __init__(
        self,
        documents: Optional[Iterable[Document]] = None,
        *,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        """
        Initialize store.

        Args:
            documents: Initial documents in order (ids must be unique)
            clock: Millisecond clock used for new identifiers
        """
        self._documents: List[Document] = list(documents or [])
        self._clock = clock
        self._lock = threading.Lock()

        ids = [doc.id for doc in self._documents]
        if len(set(ids)) != len(ids):
            raise ValueError("Document ids must be unique")
        self._last_id = max(ids, default=0)

    # ─────────────────────────────────────────────────────────────────────
    # Mutation
    # ─────────────────────────────────────────────────────────────────────

    def create_or_update(
        self,
        current_index: Optional[int],
        content: str,
    ) -> Tuple[List[Document], int]:
        """
        Save content as a new document or over an existing one.

        When current_index points at an existing document its content is
        replaced in place (same id, same position). Otherwise a new
        document is appended.

        Args:
            current_index: Index of the document being edited, or None
            content: Serialized markup to save

        Returns:
            Tuple of (copy of the updated list, index of the saved document)
        """
        with self._lock:
            if current_index is not None and 0 <= current_index < len(self._documents):
                existing = self._documents[current_index]
                self._documents[current_index] = existing.with_content(content)
                logger.debug(f"Updated document {existing.id} at index {current_index}")
                return list(self._documents), current_index

            doc = Document(id=self._next_id(), content=content)
            self._documents.append(doc)
            index = len(self._documents) - 1
            logger.debug(f"Created document {doc.id} at index {index}")
            return list(self._documents), index

    def _next_id(self) -> int:
        """Clock-derived id, strictly greater than any issued before."""
        self._last_id = max(self._clock(), self._last_id + 1)
        return self._last_id

    # ─────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────

    def list(self) -> List[Document]:
        """Full ordered list (a copy, safe to hold across saves)."""
        with self._lock:
            return list(self._documents)

    def get(self, index: int) -> Document:
        """
        Document at index.

        Raises:
            IndexError: If index is out of range (negative indices included)
        """
        with self._lock:
            if not 0 <= index < len(self._documents):
                raise IndexError(f"No document at index {index}")
            return self._documents[index]

    def page(self, page_index: int, page_size: int = DEFAULT_PAGE_SIZE) -> List[Document]:
        """Documents on one list page; see page_documents()."""
        return page_documents(self.list(), page_index, page_size)

    def page_count(self, page_size: int = DEFAULT_PAGE_SIZE) -> int:
        """Number of non-empty list pages."""
        if page_size <= 0:
            raise ValueError(f"page_size must be positive: {page_size}")
        return -(-len(self) // page_size)

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    # ─────────────────────────────────────────────────────────────────────
    # Snapshots
    # ─────────────────────────────────────────────────────────────────────

    def save_snapshot(self, path: Path) -> None:
        """Write all documents to a JSON snapshot file."""
        write_snapshot(self.list(), path)
        logger.info(f"Saved {len(self)} documents to {path}")

    @classmethod
    def from_snapshot(cls, path: Path, **kwargs) -> DocumentStore:
        """Create a store from a JSON snapshot file."""
        documents = read_snapshot(path)
        logger.info(f"Loaded {len(documents)} documents from {path}")
        return cls(documents, **kwargs)


def page_documents(
    documents: List[Document],
    page_index: int,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> List[Document]:
    """
    Slice [page_index * page_size, (page_index + 1) * page_size) of documents.

    Out-of-range pages (negative included) give an empty list instead of
    an error.

    Raises:
        ValueError: If page_size is not positive
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive: {page_size}")
    if page_index < 0:
        return []
    start = page_index * page_size
    return documents[start:start + page_size]
