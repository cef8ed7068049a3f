"""Styled terminal cells and line helpers.

A ``Line`` is an immutable tuple of ``StyledCell``. While a block is being
laid out, rows are built as plain lists and frozen at the end of the pass.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntFlag

from ..ansi import char_display_width
from ..highlight import sanitize_terminal_text
from ..ui_theme import RGB

TAB_SIZE = 4
# Glyph used while wrapping to mark a hard line break inside inline content.
BREAK_GLYPH = "\n"


class Attr(IntFlag):
    NONE = 0
    BOLD = 1
    DIM = 2
    ITALIC = 4
    UNDERLINE = 8
    STRIKE = 16
    REVERSE = 32


@dataclass(frozen=True)
class Style:
    fg: RGB | None = None
    bg: RGB | None = None
    attrs: Attr = Attr.NONE

    def add(self, attrs: Attr) -> "Style":
        return replace(self, attrs=self.attrs | attrs)

    def with_fg(self, fg: RGB | None) -> "Style":
        return replace(self, fg=fg)

    def with_bg(self, bg: RGB | None) -> "Style":
        return replace(self, bg=bg)


@dataclass(frozen=True)
class StyledCell:
    glyph: str
    fg: RGB | None = None
    bg: RGB | None = None
    attrs: Attr = Attr.NONE

    @property
    def style(self) -> Style:
        return Style(self.fg, self.bg, self.attrs)

    @property
    def width(self) -> int:
        return char_display_width(self.glyph)

    def is_space(self) -> bool:
        return self.glyph == " "


Line = tuple[StyledCell, ...]


def text_cells(text: str, style: Style) -> list[StyledCell]:
    """Convert ``text`` to cells, escaping control bytes and expanding tabs."""
    clean = sanitize_terminal_text(text)
    out: list[StyledCell] = []
    for ch in clean:
        if ch == "\t":
            out.extend(StyledCell(" ", style.fg, style.bg, style.attrs) for _ in range(TAB_SIZE))
            continue
        if ch in "\r\n":
            ch = " "
        out.append(StyledCell(ch, style.fg, style.bg, style.attrs))
    return out


def break_cell() -> StyledCell:
    return StyledCell(BREAK_GLYPH)


def cells_width(cells) -> int:
    return sum(cell.width for cell in cells)


def line_text(line) -> str:
    """Return the visible characters of a line (styling dropped)."""
    return "".join(cell.glyph for cell in line)


def pad_cells(cells: list[StyledCell], width: int, style: Style) -> list[StyledCell]:
    """Right-pad ``cells`` with spaces in ``style`` up to ``width`` columns."""
    missing = width - cells_width(cells)
    if missing <= 0:
        return cells
    return cells + [StyledCell(" ", style.fg, style.bg, style.attrs) for _ in range(missing)]


def clip_cells(cells, width: int) -> list[StyledCell]:
    """Keep the leading cells that fit in ``width`` display columns."""
    out: list[StyledCell] = []
    col = 0
    for cell in cells:
        w = cell.width
        if col + w > width:
            break
        out.append(cell)
        col += w
    return out


def truncate_cells(cells: list[StyledCell], width: int, marker: str, style: Style) -> list[StyledCell]:
    """Cut ``cells`` to exactly ``width`` columns ending in ``marker``.

    Returns ``cells`` unchanged when they already fit.
    """
    if cells_width(cells) <= width:
        return cells
    if width <= 0:
        return []
    kept = clip_cells(cells, width - 1)
    kept = pad_cells(kept, width - 1, style)
    return kept + [StyledCell(marker, style.fg, style.bg, style.attrs)]
