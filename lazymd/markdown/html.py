"""Markdown to HTML conversion for the ``:hp`` command.

Uses markdown-it-py with the CommonMark preset plus GitHub-style tables and
strikethrough, so the HTML view shows what a standard converter produces.
"""

from __future__ import annotations

from markdown_it import MarkdownIt

_MD = MarkdownIt("commonmark").enable(["table", "strikethrough"])


def markdown_to_html(raw_text: str) -> str:
    """Return the HTML fragment for Markdown ``raw_text``."""
    return _MD.render(raw_text)
