"""Block layout: parsed Markdown plus a viewport width to styled lines.

``layout`` is a pure function of its inputs. Resizes simply call it again
with the new width; nothing is cached between passes.
"""

from __future__ import annotations

from ..highlight import SyntaxClass, tokenize
from ..markdown.nodes import (
    Block,
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    ErrorBlock,
    Heading,
    InlineSpan,
    LineBreak,
    Link,
    ListBlock,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    Text,
    ThematicBreak,
)
from ..ui_theme import DEFAULT_THEME, UITheme
from .cells import (
    Attr,
    Line,
    Style,
    StyledCell,
    break_cell,
    clip_cells,
    pad_cells,
    text_cells,
    truncate_cells,
)
from .table import layout_table
from .wrap import wrap_cells

QUOTE_PREFIX = "▎ "
CODE_GUTTER = "│ "
TRUNCATION_MARKER = "…"
BULLETS = ("•", "◦", "▪")
LIST_INDENT = 2
HEADING_STYLES = (Attr.BOLD | Attr.UNDERLINE, Attr.BOLD, Attr.BOLD | Attr.DIM)

Rows = list[list[StyledCell]]


def heading_attrs(level: int) -> Attr:
    """Attributes for heading ``level``; deep levels share the last distinct style."""
    idx = min(max(level, 1), len(HEADING_STYLES)) - 1
    return HEADING_STYLES[idx]


class _BlockRenderer:
    def __init__(self, theme: UITheme) -> None:
        self.theme = theme
        self.base = Style(fg=theme.fg)
        self.muted = Style(fg=theme.muted)

    # Inline content

    def inline(self, spans: tuple[InlineSpan, ...], style: Style) -> list[StyledCell]:
        out: list[StyledCell] = []
        for span in spans:
            if isinstance(span, Text):
                out.extend(text_cells(span.text, style))
            elif isinstance(span, Code):
                out.extend(text_cells(span.text, style.with_bg(self.theme.inline_code_bg)))
            elif isinstance(span, Emphasis):
                out.extend(self.inline(span.children, style.add(Attr.ITALIC)))
            elif isinstance(span, Strong):
                out.extend(self.inline(span.children, style.add(Attr.BOLD)))
            elif isinstance(span, Strikethrough):
                out.extend(self.inline(span.children, style.add(Attr.STRIKE)))
            elif isinstance(span, Link):
                link_style = style.with_fg(self.theme.link).add(Attr.UNDERLINE)
                out.extend(self.inline(span.children, link_style))
            elif isinstance(span, LineBreak):
                out.append(break_cell())
            else:
                raise TypeError(f"unknown inline span: {span!r}")
        return out

    # Blocks

    def blocks(self, blocks, width: int, base: Style, *, tight: bool = False) -> Rows:
        out: Rows = []
        for idx, block in enumerate(blocks):
            if idx and not tight:
                out.append([])
            out.extend(self.block(block, width, base))
        return out

    def block(self, block: Block, width: int, base: Style) -> Rows:
        if isinstance(block, Paragraph):
            return wrap_cells(self.inline(block.spans, base), width)
        if isinstance(block, Heading):
            style = base.with_fg(self.theme.heading).add(heading_attrs(block.level))
            return wrap_cells(self.inline(block.spans, style), width)
        if isinstance(block, CodeBlock):
            return self.code_block(block, width)
        if isinstance(block, ListBlock):
            return self.list_block(block, width, base, depth=0)
        if isinstance(block, Table):
            return layout_table(block, width, self.inline, base, self.muted)
        if isinstance(block, BlockQuote):
            return self.block_quote(block, width)
        if isinstance(block, ThematicBreak):
            return [text_cells("─" * width, Style(fg=self.theme.rule))]
        if isinstance(block, ErrorBlock):
            style = Style(fg=self.theme.error, attrs=Attr.BOLD)
            return wrap_cells(text_cells(f"⚠ {block.message}", style), width)
        raise TypeError(f"unknown block: {block!r}")

    def code_block(self, block: CodeBlock, width: int) -> Rows:
        code_style = Style(fg=self.theme.fg, bg=self.theme.code_bg)
        gutter_style = self.muted.with_bg(self.theme.code_bg)
        label = f"┌─ {block.language}" if block.language else "┌─"
        out: Rows = [text_cells(label, self.muted)]

        source = "\n".join(line.expandtabs(4) for line in block.lines)
        rows: Rows = [[]]
        for token in tokenize(source, block.language):
            style = code_style.with_fg(self.syntax_color(token.syntax_class))
            for idx, part in enumerate(token.text.split("\n")):
                if idx:
                    rows.append([])
                rows[-1].extend(text_cells(part, style))
        if not block.lines:
            rows = []

        for cells in rows:
            row = text_cells(CODE_GUTTER, gutter_style) + cells
            row = truncate_cells(row, width, TRUNCATION_MARKER, gutter_style)
            out.append(pad_cells(row, width, code_style))
        out.append(text_cells("└─", self.muted))
        return out

    def syntax_color(self, syntax_class: SyntaxClass):
        theme = self.theme
        return {
            SyntaxClass.KEYWORD: theme.syntax_keyword,
            SyntaxClass.STRING: theme.syntax_string,
            SyntaxClass.COMMENT: theme.syntax_comment,
            SyntaxClass.NUMBER: theme.syntax_number,
            SyntaxClass.IDENTIFIER: theme.syntax_identifier,
            SyntaxClass.PUNCTUATION: theme.syntax_punctuation,
            SyntaxClass.PLAIN: theme.fg,
        }[syntax_class]

    def list_block(self, block: ListBlock, width: int, base: Style, depth: int) -> Rows:
        if block.ordered:
            last = block.start + max(0, len(block.items) - 1)
            marker_width = len(f"{last}.") + 1
        else:
            marker_width = len(BULLETS[0]) + 1
        bullet = BULLETS[min(depth, len(BULLETS) - 1)]
        # Markers and nesting indents are dropped once they would leave no text column.
        show_marker = width > marker_width
        text_width = width - marker_width if show_marker else width
        step = LIST_INDENT if width > LIST_INDENT else 0
        nested_indent = text_cells(" " * step, base)
        marker_style = self.muted

        out: Rows = []
        for number, item in enumerate(block.items, start=block.start):
            if show_marker:
                marker_text = f"{number}." if block.ordered else bullet
                marker = text_cells(marker_text.ljust(marker_width), marker_style)
                indent = text_cells(" " * marker_width, base)
            else:
                marker, indent = [], []
            first = True
            for child in item:
                if isinstance(child, ListBlock):
                    if first:
                        out.append(list(marker))
                        first = False
                    nested = self.list_block(child, width - step, base, depth + 1)
                    out.extend(nested_indent + row for row in nested)
                    continue
                for row in self.blocks([child], text_width, base, tight=True):
                    out.append((marker if first else indent) + row)
                    first = False
            if first:
                out.append(list(marker))
        return out

    def block_quote(self, block: BlockQuote, width: int) -> Rows:
        quote_style = Style(fg=self.theme.quote_fg)
        if width <= len(QUOTE_PREFIX):
            return self.blocks(block.children, width, quote_style) or [[]]
        inner = self.blocks(block.children, width - len(QUOTE_PREFIX), quote_style)
        prefix = text_cells(QUOTE_PREFIX, Style(fg=self.theme.quote_border))
        if not inner:
            inner = [[]]
        return [prefix + row for row in inner]


def layout(blocks: list[Block], width: int, theme: UITheme = DEFAULT_THEME) -> list[Line]:
    """Lay out ``blocks`` for a viewport ``width`` columns wide.

    Blocks are separated by one blank line. Every produced line fits within
    ``width``; truncated code lines fill it exactly.
    """
    width = max(1, width)
    renderer = _BlockRenderer(theme)
    rows = renderer.blocks(blocks, width, renderer.base)
    return [tuple(clip_cells(row, width)) for row in rows]
