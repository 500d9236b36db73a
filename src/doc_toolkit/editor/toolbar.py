"""
Module: editor.toolbar

Purpose:
    Toolbar and format configuration handed to the editing surface.
    The toolbar is only shown while editing.

Key Functions:
    - toolbar_config(): Toolbar groups, or False when read only
"""

from __future__ import annotations

import copy
from typing import Any, List, Union

# Formats the editing surface accepts in saved markup
FORMATS: tuple[str, ...] = (
    "font",
    "size",
    "bold",
    "italic",
    "underline",
    "strike",
    "color",
    "background",
    "align",
    "list",
    "bullet",
    "link",
    "image",
    "video",
)

FONT_SIZES: tuple[Any, ...] = ("small", False, "large", "huge")

TOOLBAR_GROUPS: tuple[tuple[Any, ...], ...] = (
    ({"font": []}, {"size": list(FONT_SIZES)}),
    ("bold", "italic", "underline", "strike"),
    ({"color": []}, {"background": []}),
    ({"align": []},),
    ("link", "image", "video"),
    ({"list": "ordered"}, {"list": "bullet"}),
    ("clean",),
    ("table",),
)


def toolbar_config(is_editing: bool) -> Union[List[List[Any]], bool]:
    """
    Toolbar definition for the editing surface.

    Args:
        is_editing: Whether the editor is in edit mode

    Returns:
        List of button groups when editing, False to hide the toolbar

    Example:
        >>> toolbar_config(False)
        False
        >>> toolbar_config(True)[1]
        ['bold', 'italic', 'underline', 'strike']
    """
    if not is_editing:
        return False
    # Fresh lists so callers can't mutate the shared definition
    return [list(copy.deepcopy(group)) for group in TOOLBAR_GROUPS]
