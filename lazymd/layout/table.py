"""Pipe-table layout with box-drawing borders.

Columns take their natural (widest cell) width. When the table does not fit,
columns shrink proportionally and cell text re-wraps inside the narrower
column. Below the minimum decorated width the table degrades to a single
column of ``header: value`` rows.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..markdown.nodes import Alignment, InlineSpan, Table
from .cells import BREAK_GLYPH, Attr, Style, StyledCell, cells_width, text_cells
from .wrap import wrap_cells

log = logging.getLogger(__name__)

InlineRenderer = Callable[[tuple[InlineSpan, ...], Style], list[StyledCell]]


def border_overhead(columns: int) -> int:
    """Columns consumed by ``│ a │ b │`` decoration for ``columns`` cells."""
    return 3 * columns + 1


def minimum_table_width(columns: int, minimums: list[int] | None = None) -> int:
    """Narrowest width that still draws borders; each column needs its widest glyph."""
    return border_overhead(columns) + (sum(minimums) if minimums else columns)


def _natural_width(cells: list[StyledCell]) -> int:
    widest = 0
    current: list[StyledCell] = []
    for cell in cells + [StyledCell(BREAK_GLYPH)]:
        if cell.glyph == BREAK_GLYPH:
            widest = max(widest, cells_width(current))
            current = []
        else:
            current.append(cell)
    return widest


def _widest_glyph(cells: list[StyledCell]) -> int:
    return max([1] + [cell.width for cell in cells if cell.glyph != BREAK_GLYPH])


def shrink_columns(natural: list[int], available: int, minimums: list[int] | None = None) -> list[int]:
    """Scale ``natural`` widths so they sum to at most ``available``.

    Widths are floored proportionally, never below the column's entry in
    ``minimums`` (1 when not given). Leftover columns then go to the columns
    with the largest remainders, ties broken left to right.
    """
    total = sum(natural)
    if total <= available:
        return list(natural)
    exact = [width * available / total for width in natural]
    floors = minimums or [1] * len(natural)
    widths = [max(floor, int(value)) for floor, value in zip(floors, exact)]
    while sum(widths) > available:
        shrinkable = [idx for idx in range(len(widths)) if widths[idx] > floors[idx]]
        if not shrinkable:
            break
        widest = max(shrinkable, key=lambda idx: (widths[idx], -idx))
        widths[widest] -= 1
    spare = available - sum(widths)
    order = sorted(range(len(widths)), key=lambda idx: (-(exact[idx] - int(exact[idx])), idx))
    for idx in order:
        if spare <= 0:
            break
        if widths[idx] < natural[idx]:
            widths[idx] += 1
            spare -= 1
    return widths


def _align(cells: list[StyledCell], width: int, alignment: Alignment, style: Style) -> list[StyledCell]:
    missing = max(0, width - cells_width(cells))
    if alignment is Alignment.RIGHT:
        left = missing
    elif alignment is Alignment.CENTER:
        left = missing // 2
    else:
        left = 0
    pad = StyledCell(" ", style.fg, style.bg, style.attrs)
    return [pad] * left + cells + [pad] * (missing - left)


def _border(widths: list[int], left: str, mid: str, right: str, style: Style) -> list[StyledCell]:
    text = left + mid.join("─" * (width + 2) for width in widths) + right
    return text_cells(text, style)


def _row(
    cells: list[list[StyledCell]],
    widths: list[int],
    alignments: tuple[Alignment, ...],
    border_style: Style,
    fill_style: Style,
) -> list[list[StyledCell]]:
    wrapped = [wrap_cells(content, width) for content, width in zip(cells, widths)]
    height = max(len(parts) for parts in wrapped)
    bar = StyledCell("│", border_style.fg, border_style.bg, border_style.attrs)
    space = StyledCell(" ", fill_style.fg, fill_style.bg, fill_style.attrs)
    rows: list[list[StyledCell]] = []
    for line_idx in range(height):
        row: list[StyledCell] = [bar]
        for col_idx, parts in enumerate(wrapped):
            part = parts[line_idx] if line_idx < len(parts) else []
            row.append(space)
            row.extend(_align(part, widths[col_idx], alignments[col_idx], fill_style))
            row.append(space)
            row.append(bar)
        rows.append(row)
    return rows


def _degraded(
    header: list[list[StyledCell]],
    body: list[list[list[StyledCell]]],
    width: int,
    body_style: Style,
    border_style: Style,
) -> list[list[StyledCell]]:
    out: list[list[StyledCell]] = []
    separator = text_cells("─" * width, border_style)
    records = body or [[[] for _ in header]]
    for record_idx, record in enumerate(records):
        if record_idx:
            out.append(list(separator))
        for label, value in zip(header, record):
            content = label + text_cells(": ", body_style) + value if value else list(label)
            out.extend(wrap_cells(content, width))
    return out


def layout_table(
    table: Table,
    width: int,
    render_inline: InlineRenderer,
    body_style: Style,
    border_style: Style,
) -> list[list[StyledCell]]:
    """Lay out ``table`` into rows no wider than ``width``."""
    columns = table.column_count
    if columns == 0:
        return []
    header_style = body_style.add(Attr.BOLD)
    header = [render_inline(cell, header_style) for cell in table.header]
    body = [[render_inline(cell, body_style) for cell in row] for row in table.rows]

    minimums = [_widest_glyph(cells) for cells in header]
    for row in body:
        for idx, cells in enumerate(row):
            minimums[idx] = max(minimums[idx], _widest_glyph(cells))

    if width < minimum_table_width(columns, minimums):
        log.debug(
            "layout degraded: table with %d columns does not fit in width %d",
            columns,
            width,
        )
        return _degraded(header, body, width, body_style, border_style)

    natural = [max(1, _natural_width(cells)) for cells in header]
    for row in body:
        for idx, cells in enumerate(row):
            natural[idx] = max(natural[idx], _natural_width(cells))
    widths = shrink_columns(natural, width - border_overhead(columns), minimums)

    out: list[list[StyledCell]] = [_border(widths, "┌", "┬", "┐", border_style)]
    out.extend(_row(header, widths, table.alignments, border_style, header_style))
    out.append(_border(widths, "├", "┼", "┤", border_style))
    for row in body:
        out.extend(_row(row, widths, table.alignments, border_style, body_style))
    out.append(_border(widths, "└", "┴", "┘", border_style))
    return out
