"""
Module: editor.session

Purpose:
    State of one editing session: the live content, edit mode, which
    saved document is open and which page of the document list is shown.

Key Classes:
    - EditorSession: Save/load/create, edit toggle, list paging, export

Dependencies:
    - store.document_store: DocumentStore
    - export.controller: export_document

Used By:
    - Host applications driving the editing surface
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from doc_toolkit.export import ExportConfig, ExportOptions, ExportResult, export_document
from doc_toolkit.export.controller import CancelToken
from doc_toolkit.export.render import RendererAdapter
from doc_toolkit.store import DEFAULT_PAGE_SIZE, DocumentStore

from .tables import insert_table
from .toolbar import toolbar_config

logger = logging.getLogger(__name__)


class EditorSession:
    """
    Editing session bound to a document store.

    Attributes:
        store: Document store the session saves into
        content: Live markup of the editing surface
        is_editing: Edit mode (read only when False)
        current_index: Store index of the open document, None for a new one
        current_page: Page of the document list being shown (0-indexed)
        docs_per_page: Documents per list page

    Example:
        >>> session = EditorSession(DocumentStore())
        >>> session.content = "<p>Draft</p>"
        >>> session.save()
        0
        >>> session.visible_documents()
        [(0, 'Document 1')]
    """

    def __init__(self, store: DocumentStore, docs_per_page: int = DEFAULT_PAGE_SIZE) -> None:
        if docs_per_page <= 0:
            raise ValueError(f"docs_per_page must be positive: {docs_per_page}")
        self.store = store
        self.docs_per_page = docs_per_page
        self.content = ""
        self.is_editing = True
        self.current_index: Optional[int] = None
        self.current_page = 0

    # ─────────────────────────────────────────────────────────────────────
    # Documents
    # ─────────────────────────────────────────────────────────────────────

    def save(self) -> int:
        """
        Save the live content.

        Updates the open document in place, or creates a new document
        that becomes the open one.

        Returns:
            Store index of the saved document
        """
        _, index = self.store.create_or_update(self.current_index, self.content)
        self.current_index = index
        logger.info(f"Saved document {index + 1}")
        return index

    def load(self, index: int) -> None:
        """
        Open a saved document for editing.

        Raises:
            IndexError: If no document exists at index
        """
        document = self.store.get(index)
        self.content = document.content
        self.is_editing = True
        self.current_index = index

    def create_new(self) -> None:
        """Start a new, unsaved document."""
        self.content = ""
        self.is_editing = True
        self.current_index = None

    def toggle_editing(self) -> bool:
        """Flip edit mode; returns the new mode."""
        self.is_editing = not self.is_editing
        return self.is_editing

    def toolbar(self):
        """Toolbar definition for the current mode."""
        return toolbar_config(self.is_editing)

    def insert_table(self, rows: int, cols: int, position: Optional[int] = None) -> None:
        """
        Insert a table into the live content.

        Ignored in read-only mode. Appends when no position is given.
        """
        if not self.is_editing:
            logger.debug("Ignoring table insert in read-only mode")
            return
        if position is None:
            position = len(self.content)
        self.content = insert_table(self.content, position, rows, cols)

    # ─────────────────────────────────────────────────────────────────────
    # Document list paging
    # ─────────────────────────────────────────────────────────────────────

    def visible_documents(self) -> List[Tuple[int, str]]:
        """(store index, label) for each document on the current list page."""
        first = self.current_page * self.docs_per_page
        page = self.store.page(self.current_page, self.docs_per_page)
        return [(first + i, f"Document {first + i + 1}") for i in range(len(page))]

    @property
    def has_next_page(self) -> bool:
        return (self.current_page + 1) * self.docs_per_page < len(self.store)

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 0

    def next_page(self) -> bool:
        """Advance the list page if more documents follow."""
        if not self.has_next_page:
            return False
        self.current_page += 1
        return True

    def previous_page(self) -> bool:
        """Go back one list page if not on the first."""
        if not self.has_previous_page:
            return False
        self.current_page -= 1
        return True

    # ─────────────────────────────────────────────────────────────────────
    # Export
    # ─────────────────────────────────────────────────────────────────────

    def export(
        self,
        options: Optional[ExportOptions] = None,
        *,
        renderer: Optional[RendererAdapter] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> ExportResult:
        """
        Export the live content, snapshotting the store for the index page.

        Raises:
            RenderFailure, InvalidGeometryError, ExportError: See export_document()
        """
        config = ExportConfig(options=options or ExportOptions())
        return export_document(
            self.content,
            config,
            documents=self.store.list(),
            renderer=renderer,
            cancel_token=cancel_token,
        )
