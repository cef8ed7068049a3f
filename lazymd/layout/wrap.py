"""Width-aware word wrapping over styled cells.

Lines break at the last whitespace that keeps them within ``width``; a word
wider than ``width`` is hard-broken at ``width``. Whitespace at a break point
is dropped, whitespace between words that stay together is kept verbatim.
"""

from __future__ import annotations

from .cells import BREAK_GLYPH, StyledCell, cells_width


def _split_hard_lines(cells: list[StyledCell]) -> list[list[StyledCell]]:
    lines: list[list[StyledCell]] = [[]]
    for cell in cells:
        if cell.glyph == BREAK_GLYPH:
            lines.append([])
        else:
            lines[-1].append(cell)
    return lines


def _words(cells: list[StyledCell]) -> list[tuple[list[StyledCell], list[StyledCell]]]:
    """Split into ``(leading whitespace, word)`` pairs."""
    pairs: list[tuple[list[StyledCell], list[StyledCell]]] = []
    space: list[StyledCell] = []
    word: list[StyledCell] = []
    for cell in cells:
        if cell.is_space():
            if word:
                pairs.append((space, word))
                space, word = [], []
            space.append(cell)
        else:
            word.append(cell)
    if word:
        pairs.append((space, word))
    return pairs


def _hard_break(word: list[StyledCell], width: int) -> list[list[StyledCell]]:
    chunks: list[list[StyledCell]] = []
    chunk: list[StyledCell] = []
    col = 0
    for cell in word:
        w = cell.width
        if col + w > width and chunk:
            chunks.append(chunk)
            chunk, col = [], 0
        chunk.append(cell)
        col += w
    if chunk:
        chunks.append(chunk)
    return chunks


def wrap_cells(cells: list[StyledCell], width: int) -> list[list[StyledCell]]:
    """Wrap inline content into rows of at most ``width`` display columns.

    Break cells (``BREAK_GLYPH``) force a new row. Empty input yields one
    empty row so callers always get something to prefix.
    """
    width = max(1, width)
    rows: list[list[StyledCell]] = []
    for hard_line in _split_hard_lines(cells):
        current: list[StyledCell] = []
        col = 0
        produced = False
        for space, word in _words(hard_line):
            word_width = cells_width(word)
            space_width = cells_width(space)
            if current and col + space_width + word_width <= width:
                current.extend(space)
                current.extend(word)
                col += space_width + word_width
                continue
            if current:
                rows.append(current)
                produced = True
                current, col = [], 0
            if word_width <= width:
                current = list(word)
                col = word_width
                continue
            chunks = _hard_break(word, width)
            rows.extend(chunks[:-1])
            produced = produced or len(chunks) > 1
            current = chunks[-1]
            col = cells_width(current)
        if current or not produced:
            rows.append(current)
    return rows
