"""Preview model and open-file pipeline tests."""

from __future__ import annotations

import unittest
from pathlib import Path

from lazymd.errors import EncodingError, IoError
from lazymd.layout import line_text
from lazymd.markdown import CodeBlock, ErrorBlock, Heading
from lazymd.preview import KIND_HTML, KIND_MARKDOWN, PreviewModel, document_blocks, load_document


class DocumentPipelineTests(unittest.TestCase):
    def test_markdown_document_blocks(self) -> None:
        blocks = document_blocks("# A", KIND_MARKDOWN)
        self.assertIsInstance(blocks[0], Heading)

    def test_html_document_is_one_html_code_block(self) -> None:
        blocks = document_blocks("# A\n\nb", KIND_HTML)
        self.assertEqual(blocks, [CodeBlock("html", ("<h1>A</h1>", "<p>b</p>"))])

    def test_error_replaces_content(self) -> None:
        self.assertEqual(document_blocks("# ignored", KIND_MARKDOWN, "boom"), [ErrorBlock("boom")])

    def test_load_document_turns_read_errors_into_messages(self) -> None:
        path = Path("/docs/secret.md")

        def denied(_path: Path) -> str:
            raise IoError(_path, "Permission denied")

        def binary(_path: Path) -> str:
            raise EncodingError(_path)

        with self.assertLogs("lazymd.preview.source", level="WARNING"):
            self.assertEqual(
                load_document(path, denied),
                ("", "Cannot preview secret.md: Permission denied"),
            )
        with self.assertLogs("lazymd.preview.source", level="WARNING"):
            self.assertEqual(
                load_document(path, binary),
                ("", "Cannot preview secret.md: not a text file"),
            )

    def test_load_document_success(self) -> None:
        self.assertEqual(load_document(Path("a.md"), lambda _path: "text"), ("text", None))


class PreviewModelTests(unittest.TestCase):
    def make(self, lines: int) -> PreviewModel:
        preview = PreviewModel(path=Path("doc.md"), raw_text="\n\n".join(f"p{n}" for n in range(lines)))
        preview.relayout(20)
        return preview

    def test_relayout_rebuilds_lines_from_raw_text(self) -> None:
        preview = PreviewModel(path=Path("doc.md"), raw_text="alpha beta gamma delta")
        preview.relayout(40)
        self.assertEqual([line_text(line) for line in preview.lines], ["alpha beta gamma delta"])
        preview.relayout(11)
        self.assertEqual([line_text(line) for line in preview.lines], ["alpha beta", "gamma delta"])
        self.assertEqual(preview.width, 11)

    def test_scroll_is_clamped(self) -> None:
        preview = self.make(10)
        self.assertEqual(len(preview.lines), 19)
        self.assertFalse(preview.scroll_by(-1, 5))
        self.assertTrue(preview.scroll_by(100, 5))
        self.assertEqual(preview.scroll, 14)
        self.assertEqual(len(preview.visible_lines(5)), 5)

    def test_short_document_never_scrolls(self) -> None:
        preview = self.make(1)
        self.assertFalse(preview.scroll_by(3, 10))
        self.assertEqual(preview.scroll, 0)

    def test_top_and_bottom(self) -> None:
        preview = self.make(10)
        self.assertTrue(preview.to_bottom(5))
        self.assertEqual(preview.scroll, 14)
        self.assertTrue(preview.to_top())
        self.assertEqual(preview.scroll, 0)

    def test_clamp_after_shrinking_content(self) -> None:
        preview = self.make(10)
        preview.to_bottom(5)
        preview.raw_text = "short"
        preview.relayout(20)
        preview.clamp(5)
        self.assertEqual(preview.scroll, 0)

    def test_title_and_char_count(self) -> None:
        preview = PreviewModel(path=Path("a.md"), raw_text="abc", kind=KIND_HTML)
        self.assertEqual(preview.title, "HTML Preview: a.md")
        self.assertEqual(preview.char_count, 3)


if __name__ == "__main__":
    unittest.main()
