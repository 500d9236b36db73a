"""
Module: store

Purpose:
    In-memory document storage for the editor and export pipeline.

Key Classes:
    - DocumentStore: Ordered collection with create/update and paging

Key Functions:
    - page_documents(): Fixed-size page of a document list
"""

from .document_store import DocumentStore, page_documents, DEFAULT_PAGE_SIZE

__all__ = [
    "DocumentStore",
    "page_documents",
    "DEFAULT_PAGE_SIZE",
]
