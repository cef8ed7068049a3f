"""Markdown document model, parser, and HTML conversion."""

from .html import markdown_to_html
from .inline import parse_inline
from .nodes import (
    Alignment,
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
    plain_text,
)
from .parser import parse

__all__ = [
    "Alignment",
    "Block",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Emphasis",
    "ErrorBlock",
    "Heading",
    "InlineSpan",
    "LineBreak",
    "Link",
    "ListBlock",
    "Paragraph",
    "Strikethrough",
    "Strong",
    "Table",
    "Text",
    "ThematicBreak",
    "markdown_to_html",
    "parse",
    "parse_inline",
    "plain_text",
]
