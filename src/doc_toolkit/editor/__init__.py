"""
Module: editor

Purpose:
    Editing session state around the rich-text surface: save/load,
    edit mode, document list paging, toolbar and table helpers.

Key Classes:
    - EditorSession: One editing session bound to a DocumentStore

Key Functions:
    - toolbar_config(): Toolbar definition for the current mode
    - build_table_html(): Markup for an inserted table
"""

from .session import EditorSession
from .toolbar import FORMATS, toolbar_config
from .tables import build_table_html, insert_table

__all__ = [
    "EditorSession",
    "FORMATS",
    "toolbar_config",
    "build_table_html",
    "insert_table",
]
