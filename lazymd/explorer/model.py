"""Explorer state: one directory snapshot, a cursor, and navigation history.

Cursor movement clamps at both ends of the listing; there is no wraparound.
Listing failures leave the model untouched so the last valid listing stays
on screen.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

MAX_HISTORY = 64


@dataclass(frozen=True)
class ExplorerEntry:
    name: str
    is_dir: bool
    path: Path

    @property
    def label(self) -> str:
        return f"{self.name}/" if self.is_dir else self.name


Lister = Callable[[Path, bool], list[ExplorerEntry]]


@dataclass
class ExplorerModel:
    directory: Path
    entries: list[ExplorerEntry] = field(default_factory=list)
    cursor: int = 0
    history: list[tuple[Path, int]] = field(default_factory=list)
    show_hidden: bool = False
    list_start: int = 0

    def load(self, directory: Path, lister: Lister) -> None:
        """Replace the listing with ``directory``'s entries, cursor at the top.

        Raises ``IoError`` from ``lister`` without modifying the model.
        """
        directory = directory.resolve()
        entries = lister(directory, self.show_hidden)
        self.directory = directory
        self.entries = entries
        self.cursor = 0
        self.list_start = 0

    def refresh(self, lister: Lister) -> None:
        """Re-read the current directory, keeping the selection when it still exists."""
        selected = self.selected()
        entries = lister(self.directory, self.show_hidden)
        self.entries = entries
        self.cursor = 0
        if selected is not None:
            for idx, entry in enumerate(entries):
                if entry.path == selected.path:
                    self.cursor = idx
                    break
        self.clamp()

    def selected(self) -> ExplorerEntry | None:
        if not self.entries:
            return None
        return self.entries[self.cursor]

    def clamp(self) -> None:
        if not self.entries:
            self.cursor = 0
            return
        self.cursor = max(0, min(self.cursor, len(self.entries) - 1))

    def move(self, delta: int) -> bool:
        """Move the cursor by ``delta`` rows, clamped to the listing. Returns whether it moved."""
        previous = self.cursor
        self.cursor += delta
        self.clamp()
        return self.cursor != previous

    def to_top(self) -> bool:
        return self.move(-len(self.entries))

    def to_bottom(self) -> bool:
        return self.move(len(self.entries))

    def _remember(self, origin: tuple[Path, int]) -> None:
        self.history.append(origin)
        overflow = len(self.history) - MAX_HISTORY
        if overflow > 0:
            del self.history[:overflow]

    def enter(self, directory: Path, lister: Lister) -> None:
        """Descend into ``directory``, remembering where we came from."""
        origin = (self.directory, self.cursor)
        self.load(directory, lister)
        self._remember(origin)

    def go_up(self, lister: Lister) -> bool:
        """Move to the parent directory. Returns ``False`` at the filesystem root.

        When the most recent history entry is the parent it is popped and its
        cursor restored; otherwise the cursor lands on the directory we left.
        """
        parent = self.directory.parent
        if parent == self.directory:
            return False
        child = self.directory

        if self.history and self.history[-1][0] == parent:
            _path, saved_cursor = self.history[-1]
            self.load(parent, lister)
            self.history.pop()
            self.cursor = saved_cursor
            self.clamp()
            return True

        self.load(parent, lister)
        for idx, entry in enumerate(self.entries):
            if entry.path == child:
                self.cursor = idx
                break
        return True

    def scroll_into_view(self, rows: int) -> None:
        """Adjust ``list_start`` so the cursor row is visible in ``rows`` rows."""
        rows = max(1, rows)
        if self.cursor < self.list_start:
            self.list_start = self.cursor
        elif self.cursor >= self.list_start + rows:
            self.list_start = self.cursor - rows + 1
        max_start = max(0, len(self.entries) - rows)
        self.list_start = max(0, min(self.list_start, max_start))
