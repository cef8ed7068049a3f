"""Block-level Markdown parsing.

``parse`` turns raw text into an ordered list of Blocks. There is no invalid
input: anything that does not match a recognised structure becomes paragraph
text. Inside an open code fence no other syntax is recognised until a closing
fence of the same character and at least the opener's length.
"""

from __future__ import annotations

import re

from .inline import parse_inline
from .nodes import (
    Alignment,
    Block,
    BlockQuote,
    CodeBlock,
    Heading,
    ListBlock,
    Paragraph,
    Table,
    ThematicBreak,
)

TAB_SIZE = 4
# Quotes and lists nested deeper than this are read as paragraph text.
MAX_NESTING = 32

_FENCE_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")
_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?=[ \t]|$)(.*)$")
_HEADING_CLOSE_RE = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")
_THEMATIC_RE = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
_QUOTE_RE = re.compile(r"^ {0,3}> ?(.*)$")
_LIST_ITEM_RE = re.compile(r"^( {0,3})([-*+]|\d{1,9}[.)])(?:([ \t]+)(.*))?$")
_DELIM_CELL_RE = re.compile(r"^:?-+:?$")
_CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")
_HARD_BREAK_RE = re.compile(r"(?: {2,}|\\)$")


def parse(text: str) -> list[Block]:
    """Parse Markdown ``text`` into blocks in document order."""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    if not normalized.strip():
        return []
    return _parse_blocks(normalized.split("\n"), 0)


def _expand_leading_tabs(line: str) -> str:
    stripped = line.lstrip(" \t")
    lead = line[: len(line) - len(stripped)]
    if "\t" not in lead:
        return line
    return lead.expandtabs(TAB_SIZE) + stripped


def _indent(line: str) -> int:
    expanded = _expand_leading_tabs(line)
    return len(expanded) - len(expanded.lstrip(" "))


def _dedent(line: str, columns: int) -> str:
    expanded = _expand_leading_tabs(line)
    remove = min(columns, len(expanded) - len(expanded.lstrip(" ")))
    return expanded[remove:]


def _is_blank(line: str) -> bool:
    return not line.strip()


def _is_list_item(line: str) -> re.Match[str] | None:
    match = _LIST_ITEM_RE.match(_expand_leading_tabs(line))
    if match is None or _THEMATIC_RE.match(line):
        return None
    return match


def _starts_block(line: str) -> bool:
    """Whether ``line`` opens a block that interrupts a running paragraph."""
    return bool(
        _FENCE_RE.match(line)
        or _HEADING_RE.match(line)
        or _THEMATIC_RE.match(line)
        or _QUOTE_RE.match(line)
        or _is_list_item(line)
    )


def _parse_blocks(lines: list[str], depth: int) -> list[Block]:
    blocks: list[Block] = []
    nested = depth < MAX_NESTING
    i = 0
    n = len(lines)
    while i < n:
        line = lines[i]
        if _is_blank(line):
            i += 1
            continue

        fence = _FENCE_RE.match(line)
        if fence and not (fence.group(2)[0] == "`" and "`" in fence.group(3)):
            block, i = _parse_fence(lines, i, fence)
            blocks.append(block)
            continue

        heading = _HEADING_RE.match(line)
        if heading:
            content = _HEADING_CLOSE_RE.sub("", heading.group(2).strip())
            blocks.append(Heading(len(heading.group(1)), parse_inline(content.strip())))
            i += 1
            continue

        if _THEMATIC_RE.match(line):
            blocks.append(ThematicBreak())
            i += 1
            continue

        if nested and _QUOTE_RE.match(line):
            block, i = _parse_quote(lines, i, depth)
            blocks.append(block)
            continue

        if nested and _is_list_item(line):
            block, i = _parse_list(lines, i, depth)
            blocks.append(block)
            continue

        if _is_table_start(lines, i):
            block, i = _parse_table(lines, i)
            blocks.append(block)
            continue

        block, i = _parse_paragraph(lines, i)
        blocks.append(block)
    return blocks


def _parse_fence(lines: list[str], i: int, opener: re.Match[str]) -> tuple[CodeBlock, int]:
    indent = len(opener.group(1))
    fence = opener.group(2)
    info = opener.group(3).strip()
    language = info.split()[0] if info else None
    close_re = re.compile(r"^ {0,3}(" + re.escape(fence[0]) + "{" + str(len(fence)) + r",})[ \t]*$")

    body: list[str] = []
    i += 1
    while i < len(lines):
        if close_re.match(lines[i]):
            return CodeBlock(language, tuple(body)), i + 1
        body.append(_dedent(lines[i], indent) if indent else lines[i])
        i += 1
    # Unterminated fences run to the end of the document.
    while body and not body[-1].strip():
        body.pop()
    return CodeBlock(language, tuple(body)), i


def _parse_quote(lines: list[str], i: int, depth: int) -> tuple[BlockQuote, int]:
    body: list[str] = []
    n = len(lines)
    while i < n:
        line = lines[i]
        quoted = _QUOTE_RE.match(line)
        if quoted:
            body.append(quoted.group(1))
            i += 1
            continue
        # Lazy continuation of a quoted paragraph.
        if not _is_blank(line) and body and not _is_blank(body[-1]) and not _starts_block(line):
            body.append(line)
            i += 1
            continue
        break
    return BlockQuote(tuple(_parse_blocks(body, depth + 1))), i


def _is_ordered(match: re.Match[str]) -> bool:
    return match.group(2)[0].isdigit()


def _parse_list(lines: list[str], i: int, depth: int) -> tuple[ListBlock, int]:
    first = _is_list_item(lines[i])
    assert first is not None
    ordered = _is_ordered(first)
    start = int(first.group(2)[:-1]) if ordered else 1
    items: list[tuple[Block, ...]] = []
    n = len(lines)

    while i < n:
        match = _is_list_item(lines[i])
        if match is None or _is_ordered(match) != ordered:
            break
        indent = len(match.group(1))
        spacing = match.group(3) or ""
        rest = match.group(4) or ""
        gap = len(spacing.expandtabs(TAB_SIZE))
        if not rest or gap > 4:
            gap = 1
        content_col = indent + len(match.group(2)) + gap
        body = [rest]
        i += 1

        while i < n:
            line = lines[i]
            if _is_blank(line):
                j = i
                while j < n and _is_blank(lines[j]):
                    j += 1
                if j < n and _indent(lines[j]) >= content_col:
                    body.extend("" for _ in range(j - i))
                    i = j
                    continue
                break
            if _indent(line) >= content_col:
                body.append(_dedent(line, content_col))
                i += 1
                continue
            if _is_list_item(line):
                break
            if body[-1].strip() and not _starts_block(line) and not _is_table_start(lines, i):
                body.append(line.strip())
                i += 1
                continue
            break

        items.append(tuple(_parse_blocks(body, depth + 1)))

        # Blank lines between sibling items keep the list going.
        j = i
        while j < n and _is_blank(lines[j]):
            j += 1
        if j > i and j < n:
            sibling = _is_list_item(lines[j])
            if sibling is not None and _is_ordered(sibling) == ordered:
                i = j

    return ListBlock(ordered, tuple(items), start), i


def _split_row(line: str) -> list[str]:
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|") and not row.endswith("\\|"):
        row = row[:-1]
    return [cell.strip() for cell in _CELL_SPLIT_RE.split(row)]


def _is_table_row(line: str) -> bool:
    return not _is_blank(line) and _CELL_SPLIT_RE.search(line) is not None


def _is_table_start(lines: list[str], i: int) -> bool:
    if i + 1 >= len(lines) or not _is_table_row(lines[i]):
        return False
    delimiter = lines[i + 1]
    if "-" not in delimiter or not _is_table_row(delimiter):
        return False
    cells = _split_row(delimiter)
    return bool(cells) and all(_DELIM_CELL_RE.match(cell) for cell in cells)


def _alignment(cell: str) -> Alignment:
    left = cell.startswith(":")
    right = cell.endswith(":")
    if left and right:
        return Alignment.CENTER
    if right:
        return Alignment.RIGHT
    if left:
        return Alignment.LEFT
    return Alignment.DEFAULT


def _fit_cells(cells: list[str], count: int) -> tuple:
    fitted = (cells + [""] * count)[:count]
    return tuple(parse_inline(cell) for cell in fitted)


def _parse_table(lines: list[str], i: int) -> tuple[Table, int]:
    alignments = tuple(_alignment(cell) for cell in _split_row(lines[i + 1]))
    count = len(alignments)
    header = _fit_cells(_split_row(lines[i]), count)
    rows = []
    i += 2
    while i < len(lines) and _is_table_row(lines[i]) and not _starts_block(lines[i]):
        rows.append(_fit_cells(_split_row(lines[i]), count))
        i += 1
    return Table(header, alignments, tuple(rows)), i


def _parse_paragraph(lines: list[str], i: int) -> tuple[Paragraph, int]:
    parts: list[str] = []
    n = len(lines)
    while i < n:
        line = lines[i]
        if _is_blank(line):
            break
        if parts and (_starts_block(line) or _is_table_start(lines, i)):
            break
        parts.append(line)
        i += 1

    text_parts: list[str] = []
    for idx, line in enumerate(parts):
        content = line.strip()
        is_last = idx == len(parts) - 1
        if not is_last and _HARD_BREAK_RE.search(line):
            if content.endswith("\\"):
                content = content[:-1].rstrip()
            text_parts.append(content + "<br>")
        else:
            text_parts.append(content + ("" if is_last else " "))
    return Paragraph(parse_inline("".join(text_parts))), i
