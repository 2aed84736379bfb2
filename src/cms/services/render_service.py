# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""How a stored document is served, decided once from its extension."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import markdown

from cms.core.filenames import extension


class DocumentKind(str, Enum):
    TEXT = "text"
    MARKDOWN = "markdown"
    IMAGE = "image"
    UNKNOWN = "unknown"


# extension -> (kind, image format)
_KINDS = {
    ".txt": (DocumentKind.TEXT, None),
    ".md": (DocumentKind.MARKDOWN, None),
    ".png": (DocumentKind.IMAGE, "png"),
    ".jpg": (DocumentKind.IMAGE, "jpeg"),
}


@dataclass(frozen=True)
class Kind:
    kind: DocumentKind
    image_format: Optional[str] = None


@dataclass(frozen=True)
class Rendered:
    body: bytes | str
    content_type: Optional[str]
    # Markdown output is an HTML fragment meant to go inside the page layout
    needs_layout: bool = False


def kind_for(filename: str) -> Kind:
    kind, fmt = _KINDS.get(extension(filename), (DocumentKind.UNKNOWN, None))
    return Kind(kind=kind, image_format=fmt)


def render_markdown(text: str) -> str:
    return markdown.markdown(text, extensions=["fenced_code", "tables"])


def render(kind: Kind, content: bytes) -> Rendered:
    """Map raw document bytes to a servable body and content type.

    Unknown kinds produce an empty body with no content type.
    """
    if kind.kind is DocumentKind.MARKDOWN:
        return Rendered(
            body=render_markdown(content.decode("utf-8", errors="replace")),
            content_type="text/html",
            needs_layout=True,
        )
    if kind.kind is DocumentKind.TEXT:
        return Rendered(body=content, content_type="text/plain")
    if kind.kind is DocumentKind.IMAGE:
        return Rendered(body=content, content_type=f"image/{kind.image_format}")
    return Rendered(body=b"", content_type=None)
