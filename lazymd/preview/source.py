"""Open-file pipeline: read, parse, and lay out a document.

Read failures never escape this module: they become the message of a single
error block so the preview always has something to show.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..errors import EncodingError, IoError
from ..layout import Line, layout
from ..markdown import Block, CodeBlock, ErrorBlock, markdown_to_html, parse
from ..ui_theme import DEFAULT_THEME, UITheme

log = logging.getLogger(__name__)

KIND_MARKDOWN = "markdown"
KIND_HTML = "html"

Reader = Callable[[Path], str]


def document_blocks(raw_text: str, kind: str = KIND_MARKDOWN, error: str | None = None) -> list[Block]:
    """Return the blocks to display for a document of ``kind``."""
    if error is not None:
        return [ErrorBlock(error)]
    if kind == KIND_HTML:
        html = markdown_to_html(raw_text)
        return [CodeBlock("html", tuple(html.splitlines()))] if html else []
    return parse(raw_text)


def render_document(
    raw_text: str,
    kind: str,
    width: int,
    theme: UITheme = DEFAULT_THEME,
    *,
    error: str | None = None,
) -> list[Line]:
    return layout(document_blocks(raw_text, kind, error), width, theme)


def load_document(path: Path, reader: Reader) -> tuple[str, str | None]:
    """Read ``path`` returning ``(raw_text, error_message)``.

    On ``IoError``/``EncodingError`` the text is empty and the message
    describes the failure.
    """
    try:
        return reader(path), None
    except (IoError, EncodingError) as exc:
        log.warning("preview of %s failed: %s", path, exc)
        return "", f"Cannot preview {path.name}: {exc.reason}"
