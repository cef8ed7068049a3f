"""Block-level Markdown parsing tests.

Covers headings, fences (including unterminated ones), lists, tables, quotes,
and paragraph continuation. Parsing must accept any input without raising.
"""

from __future__ import annotations

import unittest

from lazymd.markdown import (
    Alignment,
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    Heading,
    LineBreak,
    ListBlock,
    Paragraph,
    Strong,
    Table,
    Text,
    ThematicBreak,
    parse,
    plain_text,
)
from lazymd.layout import layout
from lazymd.markdown.parser import MAX_NESTING


class HeadingAndParagraphTests(unittest.TestCase):
    def test_empty_and_whitespace_documents_have_no_blocks(self) -> None:
        self.assertEqual(parse(""), [])
        self.assertEqual(parse("   \n\n\t\n"), [])

    def test_heading_levels_and_closing_hashes(self) -> None:
        blocks = parse("# One\n### Three ###\n###### Six")
        self.assertEqual(
            blocks,
            [
                Heading(1, (Text("One"),)),
                Heading(3, (Text("Three"),)),
                Heading(6, (Text("Six"),)),
            ],
        )

    def test_hash_without_space_is_paragraph_text(self) -> None:
        self.assertEqual(parse("#hashtag"), [Paragraph((Text("#hashtag"),))])

    def test_seven_hashes_is_not_a_heading(self) -> None:
        blocks = parse("####### nope")
        self.assertIsInstance(blocks[0], Paragraph)

    def test_soft_line_breaks_join_with_a_space(self) -> None:
        self.assertEqual(parse("one\ntwo\nthree"), [Paragraph((Text("one two three"),))])

    def test_two_trailing_spaces_make_a_hard_break(self) -> None:
        blocks = parse("one  \ntwo")
        self.assertEqual(blocks, [Paragraph((Text("one"), LineBreak(), Text("two")))])

    def test_trailing_backslash_makes_a_hard_break(self) -> None:
        blocks = parse("one\\\ntwo")
        self.assertEqual(blocks, [Paragraph((Text("one"), LineBreak(), Text("two")))])

    def test_blank_line_separates_paragraphs(self) -> None:
        blocks = parse("first\n\nsecond")
        self.assertEqual(blocks, [Paragraph((Text("first"),)), Paragraph((Text("second"),))])

    def test_crlf_line_endings_are_normalized(self) -> None:
        self.assertEqual(parse("# A\r\n\r\nb\r\n"), [Heading(1, (Text("A"),)), Paragraph((Text("b"),))])

    def test_heading_interrupts_paragraph(self) -> None:
        blocks = parse("text\n# Title")
        self.assertEqual(blocks, [Paragraph((Text("text"),)), Heading(1, (Text("Title"),))])

    def test_thematic_break_variants(self) -> None:
        for source in ("---", "***", "_ _ _", " - - - -"):
            with self.subTest(source=source):
                self.assertEqual(parse(source), [ThematicBreak()])


class FencedCodeTests(unittest.TestCase):
    def test_fence_keeps_language_and_lines_verbatim(self) -> None:
        blocks = parse("```python\ndef f():\n    return '*not emphasis*'\n```")
        self.assertEqual(
            blocks,
            [CodeBlock("python", ("def f():", "    return '*not emphasis*'"))],
        )

    def test_markdown_inside_fence_is_not_interpreted(self) -> None:
        blocks = parse("~~~\n# not a heading\n- not a list\n~~~\nafter")
        self.assertEqual(blocks[0], CodeBlock(None, ("# not a heading", "- not a list")))
        self.assertEqual(blocks[1], Paragraph((Text("after"),)))

    def test_closing_fence_must_match_character_and_length(self) -> None:
        blocks = parse("````\n```\n~~~~\n````")
        self.assertEqual(blocks, [CodeBlock(None, ("```", "~~~~"))])

    def test_unterminated_fence_runs_to_end_of_document(self) -> None:
        blocks = parse("intro\n\n```rust\nfn main() {}\n\n# still code\n\n")
        self.assertEqual(blocks[0], Paragraph((Text("intro"),)))
        self.assertEqual(blocks[1], CodeBlock("rust", ("fn main() {}", "", "# still code")))
        self.assertEqual(len(blocks), 2)

    def test_empty_fence(self) -> None:
        self.assertEqual(parse("```\n```"), [CodeBlock(None, ())])

    def test_indented_fence_strips_opener_indent(self) -> None:
        blocks = parse("  ```\n  a\n    b\n  ```")
        self.assertEqual(blocks, [CodeBlock(None, ("a", "  b"))])

    def test_backtick_info_string_with_backtick_is_not_a_fence(self) -> None:
        blocks = parse("```a`b\ntext")
        self.assertIsInstance(blocks[0], Paragraph)


class ListTests(unittest.TestCase):
    def test_unordered_list_items(self) -> None:
        blocks = parse("- one\n- two\n* three")
        self.assertEqual(len(blocks), 1)
        block = blocks[0]
        self.assertIsInstance(block, ListBlock)
        self.assertFalse(block.ordered)
        self.assertEqual(
            block.items,
            (
                (Paragraph((Text("one"),)),),
                (Paragraph((Text("two"),)),),
                (Paragraph((Text("three"),)),),
            ),
        )

    def test_ordered_list_keeps_start_number(self) -> None:
        block = parse("3. three\n4. four")[0]
        self.assertIsInstance(block, ListBlock)
        self.assertTrue(block.ordered)
        self.assertEqual(block.start, 3)
        self.assertEqual(len(block.items), 2)

    def test_nested_list_belongs_to_parent_item(self) -> None:
        block = parse("- parent\n  - child\n  - sibling\n- next")[0]
        self.assertEqual(len(block.items), 2)
        first = block.items[0]
        self.assertEqual(first[0], Paragraph((Text("parent"),)))
        nested = first[1]
        self.assertIsInstance(nested, ListBlock)
        self.assertEqual(len(nested.items), 2)

    def test_lazy_continuation_joins_item_paragraph(self) -> None:
        block = parse("- first line\ncontinued")[0]
        self.assertEqual(block.items[0], (Paragraph((Text("first line continued"),)),))

    def test_blank_line_between_items_keeps_one_list(self) -> None:
        blocks = parse("- a\n\n- b")
        self.assertEqual(len(blocks), 1)
        self.assertEqual(len(blocks[0].items), 2)

    def test_changing_list_type_starts_new_list(self) -> None:
        blocks = parse("- a\n1. b")
        self.assertEqual(len(blocks), 2)
        self.assertFalse(blocks[0].ordered)
        self.assertTrue(blocks[1].ordered)

    def test_code_fence_inside_item(self) -> None:
        block = parse("- item\n\n  ```\n  code\n  ```")[0]
        self.assertEqual(block.items[0][1], CodeBlock(None, ("code",)))

    def test_empty_item(self) -> None:
        block = parse("-\n- b")[0]
        self.assertEqual(block.items[0], ())
        self.assertEqual(block.items[1], (Paragraph((Text("b"),)),))


class TableTests(unittest.TestCase):
    def test_table_with_alignment_row(self) -> None:
        block = parse("| a | b | c | d |\n|---|:--|--:|:-:|\n| 1 | 2 | 3 | 4 |")[0]
        self.assertIsInstance(block, Table)
        self.assertEqual(
            block.alignments,
            (Alignment.DEFAULT, Alignment.LEFT, Alignment.RIGHT, Alignment.CENTER),
        )
        self.assertEqual(block.header[0], (Text("a"),))
        self.assertEqual(block.rows, (((Text("1"),), (Text("2"),), (Text("3"),), (Text("4"),)),))

    def test_rows_are_padded_and_truncated_to_column_count(self) -> None:
        block = parse("a | b\n--|--\n| 1 |\n1 | 2 | 3")[0]
        self.assertEqual(block.column_count, 2)
        self.assertEqual(block.rows[0], ((Text("1"),), ()))
        self.assertEqual(block.rows[1], ((Text("1"),), (Text("2"),)))

    def test_escaped_pipe_stays_in_cell(self) -> None:
        block = parse("| a \\| b |\n|---|")[0]
        self.assertEqual(block.header, ((Text("a | b"),),))

    def test_inline_markup_in_cells(self) -> None:
        block = parse("| **bold** | `code` |\n|---|---|")[0]
        self.assertEqual(block.header, ((Strong((Text("bold"),)),), (Code("code"),)))

    def test_pipe_without_delimiter_row_is_paragraph(self) -> None:
        blocks = parse("a | b\nc | d")
        self.assertEqual(blocks, [Paragraph((Text("a | b c | d"),))])

    def test_table_ends_at_blank_line(self) -> None:
        blocks = parse("| a |\n|---|\n| 1 |\n\ntext")
        self.assertIsInstance(blocks[0], Table)
        self.assertEqual(blocks[1], Paragraph((Text("text"),)))


class QuoteTests(unittest.TestCase):
    def test_block_quote_contains_nested_blocks(self) -> None:
        block = parse("> # Title\n> body *text*")[0]
        self.assertIsInstance(block, BlockQuote)
        self.assertEqual(block.children[0], Heading(1, (Text("Title"),)))
        self.assertEqual(block.children[1], Paragraph((Text("body "), Emphasis((Text("text"),)))))

    def test_lazy_continuation_line(self) -> None:
        block = parse("> quoted\ncontinued")[0]
        self.assertEqual(block.children, (Paragraph((Text("quoted continued"),)),))

    def test_nested_quotes(self) -> None:
        block = parse("> outer\n>\n> > inner")[0]
        self.assertIsInstance(block.children[1], BlockQuote)
        self.assertEqual(plain_text(block.children[1].children[0].spans), "inner")


class RobustnessTests(unittest.TestCase):
    def test_malformed_input_never_raises(self) -> None:
        samples = [
            "**unclosed",
            "[link](",
            "```",
            "> ",
            "|",
            "|---|",
            "- ",
            "1.",
            "\x00\x1b[31m",
            "* * *\n***bold?",
            "` `` ```",
            "\\",
            "<br",
        ]
        for source in samples:
            with self.subTest(source=source):
                blocks = parse(source)
                self.assertIsInstance(blocks, list)

    def test_document_order_is_preserved(self) -> None:
        blocks = parse("# H\n\npara\n\n---\n\n```\nx\n```\n\n> q")
        self.assertEqual(
            [type(block).__name__ for block in blocks],
            ["Heading", "Paragraph", "ThematicBreak", "CodeBlock", "BlockQuote"],
        )


class NestingLimitTests(unittest.TestCase):
    def quote_depth(self, blocks) -> int:
        depth = 0
        while len(blocks) == 1 and isinstance(blocks[0], BlockQuote):
            depth += 1
            blocks = blocks[0].children
        return depth

    def test_deeply_nested_quotes_become_text_past_the_limit(self) -> None:
        blocks = parse(">" * 1000 + " x")
        self.assertEqual(self.quote_depth(blocks), MAX_NESTING)
        inner = blocks
        for _ in range(MAX_NESTING):
            inner = inner[0].children
        self.assertIsInstance(inner[0], Paragraph)
        self.assertTrue(plain_text(inner[0].spans).endswith("> x"))

    def test_deeply_nested_list_markers_become_text(self) -> None:
        blocks = parse("- " * 1000 + "x")
        depth = 0
        while isinstance(blocks[0], ListBlock):
            depth += 1
            blocks = blocks[0].items[0]
        self.assertEqual(depth, MAX_NESTING)
        self.assertTrue(plain_text(blocks[0].spans).endswith("- x"))

    def test_deeply_indented_lists_parse(self) -> None:
        text = "\n".join("  " * level + "- x" for level in range(1000))
        blocks = parse(text)
        self.assertIsInstance(blocks[0], ListBlock)

    def test_deep_document_lays_out(self) -> None:
        lines = layout(parse(">" * 1000 + " x"), 80)
        self.assertTrue(lines)


if __name__ == "__main__":
    unittest.main()
