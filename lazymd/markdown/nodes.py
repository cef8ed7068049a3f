"""Document tree for parsed Markdown.

Blocks and inline spans are closed sets of frozen dataclasses. Consumers
dispatch with ``isinstance`` chains and treat an unknown node as a bug.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# Inline spans


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Emphasis:
    children: tuple["InlineSpan", ...]


@dataclass(frozen=True)
class Strong:
    children: tuple["InlineSpan", ...]


@dataclass(frozen=True)
class Strikethrough:
    children: tuple["InlineSpan", ...]


@dataclass(frozen=True)
class Code:
    text: str


@dataclass(frozen=True)
class Link:
    children: tuple["InlineSpan", ...]
    target: str


@dataclass(frozen=True)
class LineBreak:
    """Hard break inside a paragraph (``<br>``, two trailing spaces, ``\\``)."""


InlineSpan = Text | Emphasis | Strong | Strikethrough | Code | Link | LineBreak


# Blocks


class Alignment(Enum):
    DEFAULT = "default"
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


@dataclass(frozen=True)
class Heading:
    level: int
    spans: tuple[InlineSpan, ...]


@dataclass(frozen=True)
class Paragraph:
    spans: tuple[InlineSpan, ...]


@dataclass(frozen=True)
class CodeBlock:
    language: str | None
    lines: tuple[str, ...]


@dataclass(frozen=True)
class ListBlock:
    ordered: bool
    items: tuple[tuple["Block", ...], ...]
    start: int = 1


@dataclass(frozen=True)
class Table:
    header: tuple[tuple[InlineSpan, ...], ...]
    alignments: tuple[Alignment, ...]
    rows: tuple[tuple[tuple[InlineSpan, ...], ...], ...] = field(default_factory=tuple)

    @property
    def column_count(self) -> int:
        return len(self.alignments)


@dataclass(frozen=True)
class BlockQuote:
    children: tuple["Block", ...]


@dataclass(frozen=True)
class ThematicBreak:
    pass


@dataclass(frozen=True)
class ErrorBlock:
    """Stand-in content shown when a document could not be loaded."""

    message: str


Block = Heading | Paragraph | CodeBlock | ListBlock | Table | BlockQuote | ThematicBreak | ErrorBlock


def plain_text(spans: tuple[InlineSpan, ...] | list[InlineSpan]) -> str:
    """Flatten inline spans into their visible text (link targets excluded)."""
    out: list[str] = []
    for span in spans:
        if isinstance(span, (Text, Code)):
            out.append(span.text)
        elif isinstance(span, (Emphasis, Strong, Strikethrough, Link)):
            out.append(plain_text(span.children))
        elif isinstance(span, LineBreak):
            out.append("\n")
    return "".join(out)
