"""Preview state: the source text of one document and its rendered lines.

Lines are derived data. They are regenerated wholesale from ``raw_text`` on
open and on every width change; ``scroll`` is re-clamped afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..layout import Line
from ..ui_theme import DEFAULT_THEME, UITheme
from .source import KIND_MARKDOWN, render_document


@dataclass
class PreviewModel:
    path: Path
    raw_text: str = ""
    kind: str = KIND_MARKDOWN
    error: str | None = None
    lines: list[Line] = field(default_factory=list)
    scroll: int = 0
    width: int = 0

    @property
    def title(self) -> str:
        prefix = "HTML Preview: " if self.kind != KIND_MARKDOWN else ""
        return f"{prefix}{self.path}"

    @property
    def char_count(self) -> int:
        return len(self.raw_text)

    def relayout(self, width: int, theme: UITheme = DEFAULT_THEME) -> None:
        """Re-parse ``raw_text`` and lay it out at ``width`` columns."""
        self.width = max(1, width)
        self.lines = render_document(self.raw_text, self.kind, self.width, theme, error=self.error)

    def max_scroll(self, viewport_rows: int) -> int:
        return max(0, len(self.lines) - max(1, viewport_rows))

    def clamp(self, viewport_rows: int) -> None:
        self.scroll = max(0, min(self.scroll, self.max_scroll(viewport_rows)))

    def scroll_by(self, delta: int, viewport_rows: int) -> bool:
        """Scroll by ``delta`` lines within bounds. Returns whether the offset changed."""
        previous = self.scroll
        self.scroll += delta
        self.clamp(viewport_rows)
        return self.scroll != previous

    def to_top(self) -> bool:
        previous = self.scroll
        self.scroll = 0
        return self.scroll != previous

    def to_bottom(self, viewport_rows: int) -> bool:
        previous = self.scroll
        self.scroll = self.max_scroll(viewport_rows)
        return self.scroll != previous

    def visible_lines(self, viewport_rows: int) -> list[Line]:
        return self.lines[self.scroll : self.scroll + max(0, viewport_rows)]
