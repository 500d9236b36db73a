"""
Module: documents

Purpose:
    Provides the Document dataclass - a saved rich-text document as held
    by the DocumentStore. Content is the serialized editor markup.

Key Functions:
    - Document.with_content(content): Copy with new content, same id
    - Document.plain_text(): Markup stripped to readable text
    - Document.to_dict(): Serialize for JSON
    - Document.from_dict(data): Deserialize from JSON
    - markup_to_text(): Plain text of editor markup
    - is_blank_markup(): Whether markup renders nothing

Dependencies:
    - bleach: Markup to text
    - dataclasses, html, re (std)

Used By:
    - store.document_store.DocumentStore
    - export.layout.paginator (index page lines)
    - core.utils.serialization
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, replace

import bleach

# Tags kept through cleaning so their boundaries become word breaks
BLOCK_TAGS = frozenset({
    "p", "div", "br", "li", "ol", "ul", "h1", "h2", "h3", "h4", "h5", "h6",
    "blockquote", "pre", "table", "tr", "td", "th",
})

# Elements that render visibly without any text
MEDIA_TAGS = frozenset({"img", "video", "iframe", "table", "hr"})

_HIDDEN_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_SPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class Document:
    """
    A saved document (immutable).

    Saving an existing document produces a replacement with the same id
    at the same store position, so ids stay stable for the document's
    lifetime.

    Attributes:
        id: Opaque timestamp-derived identifier (unique per store)
        content: Serialized rich-text markup

    Example:
        >>> doc = Document(id=1718000000000, content="<p>Hello</p>")
        >>> doc.with_content("<p>Bye</p>").id
        1718000000000
    """

    id: int
    content: str

    def __post_init__(self) -> None:
        """Validate document on construction."""
        if not isinstance(self.content, str):
            raise TypeError(f"content must be str: {type(self.content).__name__}")

    def with_content(self, content: str) -> Document:
        """Return a copy carrying new content and the same id."""
        return replace(self, content=content)

    @property
    def is_empty(self) -> bool:
        """True when the markup renders nothing: no text and no media."""
        return is_blank_markup(self.content)

    def plain_text(self) -> str:
        """
        Markup reduced to single-spaced plain text.

        Block boundaries become spaces so adjacent paragraphs do not
        run together. Script and style bodies and comments are dropped.
        """
        return markup_to_text(self.content)

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        return {"id": self.id, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict) -> Document:
        """
        Deserialize from dictionary.

        Args:
            data: Dict with id and content

        Returns:
            Document instance
        """
        return cls(id=int(data["id"]), content=data.get("content", ""))

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        preview = self.plain_text()
        if len(preview) > 24:
            preview = preview[:21] + "..."
        return f"Document({self.id}, {preview!r})"


def _clean(markup: str, keep: frozenset) -> str:
    """Strip every tag except keep (attributes dropped); text stays escaped."""
    markup = _HIDDEN_RE.sub(" ", markup)
    return bleach.clean(markup, tags=keep, attributes={}, strip=True, strip_comments=True)


def markup_to_text(markup: str) -> str:
    """
    Reduce markup to single-spaced plain text.

    Example:
        >>> markup_to_text('<p>Fish &amp; chips</p><p><img alt="a>b">today</p>')
        'Fish & chips today'
    """
    text = _TAG_RE.sub(" ", _clean(markup, BLOCK_TAGS))
    text = html.unescape(text)
    return _SPACE_RE.sub(" ", text).strip()


def is_blank_markup(markup: str) -> bool:
    """True when markup has no visible text and no media elements."""
    if markup_to_text(markup):
        return False
    # Text comes back escaped, so any "<" left is a kept media tag
    return "<" not in _clean(markup, MEDIA_TAGS)
