"""Frame composition and ANSI output.

Turns the active model into full-width ANSI rows (the explorer listing or the
rendered document plus chrome) and writes complete frames to the terminal.
This is the only place styled cells become escape sequences.
"""

from __future__ import annotations

import os
import sys

from ..ansi import RESET, sgr
from ..layout.cells import Attr, Style, StyledCell, cells_width, clip_cells, pad_cells, text_cells
from ..ui_theme import UITheme
from .controller import EXPLORER_HINT, PREVIEW_HINT, AppState, Mode

_ATTR_CODES: tuple[tuple[Attr, int], ...] = (
    (Attr.BOLD, 1),
    (Attr.DIM, 2),
    (Attr.ITALIC, 3),
    (Attr.UNDERLINE, 4),
    (Attr.REVERSE, 7),
    (Attr.STRIKE, 9),
)
SELECTED_MARKER = ">> "
UNSELECTED_MARKER = "   "


def _style_sgr(fg, bg, attrs: Attr, theme: UITheme) -> str:
    codes = tuple(code for flag, code in _ATTR_CODES if attrs & flag)
    return sgr(fg if fg is not None else theme.fg, bg if bg is not None else theme.bg, codes)


def cells_to_ansi(cells, width: int, theme: UITheme) -> str:
    """Render cells as one ANSI row exactly ``width`` columns wide."""
    row = pad_cells(clip_cells(cells, width), width, Style())
    out: list[str] = []
    current: tuple | None = None
    for cell in row:
        key = (cell.fg, cell.bg, cell.attrs)
        if key != current:
            out.append(_style_sgr(cell.fg, cell.bg, cell.attrs, theme))
            current = key
        out.append(cell.glyph)
    out.append(RESET)
    return "".join(out)


def _right_aligned(text: str, width: int, style: Style) -> list[StyledCell]:
    cells = text_cells(text, style)
    if cells_width(cells) > width:
        # Keep the tail: the hint and counts matter more than a long path prefix.
        while cells and cells_width(cells) > width:
            cells.pop(0)
        return cells
    return text_cells(" " * (width - cells_width(cells)), style) + cells


def explorer_rows(state: AppState, theme: UITheme) -> list[list[StyledCell]]:
    explorer = state.explorer
    width = state.width
    rows: list[list[StyledCell]] = []
    header_style = Style(fg=theme.heading, attrs=Attr.BOLD)
    rows.append(text_cells(str(explorer.directory), header_style))

    visible = state.explorer_rows()
    if not explorer.entries:
        rows.append(text_cells("   (empty directory)", Style(fg=theme.muted)))
    selected_attrs = Attr.BOLD if theme.selection_bg is not None else Attr.BOLD | Attr.REVERSE
    selected_style = Style(fg=theme.selection_fg, bg=theme.selection_bg, attrs=selected_attrs)
    end = min(len(explorer.entries), explorer.list_start + visible)
    for idx in range(explorer.list_start, end):
        entry = explorer.entries[idx]
        if idx == explorer.cursor:
            row = text_cells(SELECTED_MARKER + entry.label, selected_style)
            rows.append(pad_cells(row, width, selected_style))
            continue
        style = Style(fg=theme.directory if entry.is_dir else theme.fg)
        rows.append(text_cells(UNSELECTED_MARKER + entry.label, style))

    while len(rows) < state.height - 1:
        rows.append([])
    rows = rows[: max(0, state.height - 1)]
    rows.append(status_row(state, theme))
    return rows


def status_row(state: AppState, theme: UITheme) -> list[StyledCell]:
    if state.command_active:
        return text_cells(f":{state.command_buffer}", Style(fg=theme.fg))
    if state.status_message:
        fg = theme.error if state.status_is_error else theme.fg
        return text_cells(state.status_message, Style(fg=fg))
    return text_cells(EXPLORER_HINT, Style(fg=theme.muted))


def preview_rows(state: AppState, theme: UITheme) -> list[list[StyledCell]]:
    preview = state.preview
    assert preview is not None
    visible = state.preview_rows()
    rows: list[list[StyledCell]] = [list(line) for line in preview.visible_lines(visible)]
    while len(rows) < visible:
        rows.append([])
    rows = rows[: max(0, state.height - 1)]
    if state.command_active:
        rows.append(status_row(state, theme))
    else:
        footer = f"{preview.title} | {preview.char_count} chars | {PREVIEW_HINT}"
        rows.append(_right_aligned(footer, state.width, Style(fg=theme.muted)))
    return rows


def compose_frame(state: AppState, theme: UITheme) -> list[str]:
    """Return the ANSI rows for the active mode, each ``state.width`` wide."""
    if state.mode is Mode.PREVIEW and state.preview is not None:
        rows = preview_rows(state, theme)
    else:
        rows = explorer_rows(state, theme)
    return [cells_to_ansi(row, state.width, theme) for row in rows]


def draw(rows: list[str], fd: int | None = None) -> None:
    """Write a composed frame from the top-left corner in one syscall."""
    out = ["\033[H"]
    out.append("\r\n".join(rows))
    out.append("\033[J")
    target = sys.stdout.fileno() if fd is None else fd
    os.write(target, "".join(out).encode("utf-8", errors="replace"))
