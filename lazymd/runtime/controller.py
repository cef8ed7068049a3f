"""Explorer/Preview state machine.

``AppController.handle`` consumes one event at a time and mutates the single
``AppState`` it owns. Parsing and layout run synchronously inside the event
that triggers them. Filesystem failures surface as status messages (listing)
or an error block in the preview (reading); no user input can reach an
unrecoverable state.
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..errors import EncodingError, IoError
from ..explorer import ExplorerEntry, ExplorerModel, is_markdown_path, list_directory, read_file
from ..explorer.model import Lister
from ..preview import KIND_HTML, KIND_MARKDOWN, PreviewModel, load_document
from ..preview.source import Reader
from ..ui_theme import DEFAULT_THEME, UITheme
from .events import Event, KeyPress, Quit, Resize

log = logging.getLogger(__name__)

EXPLORER_HINT = "j/k or ↓/↑: Move | Enter: Open | h or Backspace: Up | :<command> Enter: Run"
PREVIEW_HINT = "q: back"
NOT_MARKDOWN_MESSAGE = "Only Markdown files can be previewed."
# Explorer screen: one header row and one status row around the listing.
EXPLORER_CHROME_ROWS = 2
# Preview screen: one footer row below the document.
PREVIEW_CHROME_ROWS = 1
WHEEL_STEP = 3


class Mode(Enum):
    EXPLORER = "explorer"
    PREVIEW = "preview"


@dataclass
class AppState:
    explorer: ExplorerModel
    width: int = 80
    height: int = 24
    mode: Mode = Mode.EXPLORER
    preview: PreviewModel | None = None
    status_message: str = ""
    status_is_error: bool = False
    command_active: bool = False
    command_buffer: str = ""
    running: bool = True

    def explorer_rows(self) -> int:
        return max(1, self.height - EXPLORER_CHROME_ROWS)

    def preview_rows(self) -> int:
        return max(1, self.height - PREVIEW_CHROME_ROWS)


class AppController:
    """Route events to explorer, preview, and command-prompt handlers."""

    def __init__(
        self,
        state: AppState,
        *,
        lister: Lister = list_directory,
        reader: Reader = read_file,
        theme: UITheme = DEFAULT_THEME,
    ) -> None:
        self.state = state
        self.lister = lister
        self.reader = reader
        self.theme = theme

    @classmethod
    def start(
        cls,
        directory: Path,
        width: int,
        height: int,
        *,
        show_hidden: bool = False,
        lister: Lister = list_directory,
        reader: Reader = read_file,
        theme: UITheme = DEFAULT_THEME,
    ) -> "AppController":
        """Build a controller in Explorer mode rooted at ``directory``.

        An unreadable start directory yields an empty listing plus an error
        status rather than an exception.
        """
        explorer = ExplorerModel(directory=directory.resolve(), show_hidden=show_hidden)
        state = AppState(explorer=explorer, width=max(1, width), height=max(1, height))
        controller = cls(state, lister=lister, reader=reader, theme=theme)
        try:
            explorer.load(directory, lister)
        except IoError as exc:
            controller._error(str(exc))
        return controller

    # Event dispatch

    def handle(self, event: Event) -> bool:
        """Apply one event. Returns ``False`` once the loop should stop."""
        if isinstance(event, Quit):
            self.state.running = False
        elif isinstance(event, Resize):
            self.resize(event.width, event.height)
        elif isinstance(event, KeyPress):
            self.handle_key(event.code)
        else:
            raise TypeError(f"unknown event: {event!r}")
        return self.state.running

    def handle_key(self, key: str) -> None:
        if key == "CTRL_C":
            self.state.running = False
            return
        if self.state.command_active:
            self._command_key(key)
        elif self.state.mode is Mode.PREVIEW:
            self._preview_key(key)
        else:
            self._explorer_key(key)

    # Status bar

    def _info(self, message: str) -> None:
        self.state.status_message = message
        self.state.status_is_error = False

    def _error(self, message: str) -> None:
        self.state.status_message = message
        self.state.status_is_error = True

    def _clear_status(self) -> None:
        self.state.status_message = ""
        self.state.status_is_error = False

    # Explorer mode

    def _explorer_key(self, key: str) -> None:
        state = self.state
        explorer = state.explorer
        self._clear_status()
        if key in {"j", "DOWN"}:
            explorer.move(1)
        elif key in {"k", "UP"}:
            explorer.move(-1)
        elif key in {"g", "HOME"}:
            explorer.to_top()
        elif key in {"G", "END"}:
            explorer.to_bottom()
        elif key in {"PGDN", "CTRL_D"}:
            explorer.move(state.explorer_rows())
        elif key in {"PGUP", "CTRL_U"}:
            explorer.move(-state.explorer_rows())
        elif key.startswith("MOUSE_WHEEL_DOWN"):
            explorer.move(WHEEL_STEP)
        elif key.startswith("MOUSE_WHEEL_UP"):
            explorer.move(-WHEEL_STEP)
        elif key in {"ENTER", "l", "RIGHT"}:
            entry = explorer.selected()
            if entry is not None:
                self.open_entry(entry)
        elif key in {"h", "LEFT", "BACKSPACE"}:
            self.go_up()
        elif key == ".":
            self.toggle_hidden()
        elif key == "p":
            self.resume_preview()
        elif key == ":":
            state.command_active = True
            state.command_buffer = ""
        elif key == "?":
            self._info(EXPLORER_HINT)
        elif key == "q":
            state.running = False
        explorer.scroll_into_view(state.explorer_rows())

    def open_entry(self, entry: ExplorerEntry) -> None:
        if entry.is_dir:
            self.enter_directory(entry.path)
        elif is_markdown_path(entry.path):
            self.open_file(entry.path)
        else:
            self._error(NOT_MARKDOWN_MESSAGE)

    def enter_directory(self, directory: Path) -> None:
        try:
            self.state.explorer.enter(directory, self.lister)
        except IoError as exc:
            self._error(str(exc))

    def go_up(self) -> None:
        try:
            self.state.explorer.go_up(self.lister)
        except IoError as exc:
            self._error(str(exc))

    def toggle_hidden(self) -> None:
        explorer = self.state.explorer
        explorer.show_hidden = not explorer.show_hidden
        try:
            explorer.refresh(self.lister)
        except IoError as exc:
            explorer.show_hidden = not explorer.show_hidden
            self._error(str(exc))
            return
        self._info("Showing hidden files" if explorer.show_hidden else "Hiding hidden files")

    def open_file(self, path: Path, kind: str = KIND_MARKDOWN) -> None:
        """Read, parse, and lay out ``path`` then switch to Preview.

        Read failures still switch to Preview, showing an error block.
        """
        raw_text, error = load_document(path, self.reader)
        self._show_document(path, raw_text, kind, error)

    def _show_document(self, path: Path, raw_text: str, kind: str, error: str | None = None) -> None:
        preview = PreviewModel(path=path, raw_text=raw_text, kind=kind, error=error)
        preview.relayout(self.state.width, self.theme)
        log.debug("opened %s (%s): %d lines at width %d", path, kind, len(preview.lines), preview.width)
        self.state.preview = preview
        self.state.mode = Mode.PREVIEW

    def resume_preview(self) -> None:
        preview = self.state.preview
        if preview is None:
            self._info("No document opened yet")
            return
        if preview.width != self.state.width:
            preview.relayout(self.state.width, self.theme)
        preview.clamp(self.state.preview_rows())
        self.state.mode = Mode.PREVIEW

    # Preview mode

    def _preview_key(self, key: str) -> None:
        state = self.state
        preview = state.preview
        if preview is None:
            state.mode = Mode.EXPLORER
            return
        rows = state.preview_rows()
        if key in {"j", "DOWN"}:
            preview.scroll_by(1, rows)
        elif key in {"k", "UP"}:
            preview.scroll_by(-1, rows)
        elif key in {" ", "f", "PGDN"}:
            preview.scroll_by(rows, rows)
        elif key in {"b", "PGUP"}:
            preview.scroll_by(-rows, rows)
        elif key == "CTRL_D":
            preview.scroll_by(max(1, rows // 2), rows)
        elif key == "CTRL_U":
            preview.scroll_by(-max(1, rows // 2), rows)
        elif key in {"g", "HOME"}:
            preview.to_top()
        elif key in {"G", "END"}:
            preview.to_bottom(rows)
        elif key.startswith("MOUSE_WHEEL_DOWN"):
            preview.scroll_by(WHEEL_STEP, rows)
        elif key.startswith("MOUSE_WHEEL_UP"):
            preview.scroll_by(-WHEEL_STEP, rows)
        elif key in {"q", "ESC", "h", "LEFT", "BACKSPACE"}:
            state.mode = Mode.EXPLORER
        elif key == "Q":
            state.running = False

    # Command prompt

    def _command_key(self, key: str) -> None:
        state = self.state
        if key == "ENTER":
            command = state.command_buffer.strip()
            state.command_active = False
            state.command_buffer = ""
            self._clear_status()
            self.run_command(command)
        elif key == "ESC":
            state.command_active = False
            state.command_buffer = ""
        elif key == "BACKSPACE":
            state.command_buffer = state.command_buffer[:-1]
        elif len(key) == 1 and key.isprintable():
            state.command_buffer += key

    def run_command(self, command: str) -> None:
        """Run one ``:`` command (``q``, ``hp <file>``, ``cd <dir>``)."""
        try:
            parts = shlex.split(command)
        except ValueError:
            parts = command.split()
        if not parts:
            return
        name, args = parts[0], parts[1:]
        base = self.state.explorer.directory
        if name == "q" and not args:
            self.state.running = False
        elif name == "hp" and len(args) == 1:
            target = base / args[0]
            try:
                raw_text = self.reader(target)
            except (IoError, EncodingError) as exc:
                log.info("html preview of %s failed: %s", target, exc)
                self._error(f"Cannot open {args[0]}: {exc.reason}")
                return
            self._show_document(target, raw_text, KIND_HTML)
        elif name == "cd" and len(args) == 1:
            self.enter_directory(base / Path(args[0]).expanduser())
            self.state.mode = Mode.EXPLORER
        else:
            self._error(f"Unknown command: {command}")

    # Resize

    def resize(self, width: int, height: int) -> None:
        """Record the new viewport; re-render the preview when it is showing."""
        state = self.state
        width = max(1, width)
        height = max(1, height)
        state.width = width
        state.height = height
        if state.mode is Mode.PREVIEW and state.preview is not None:
            if state.preview.width != width:
                state.preview.relayout(width, self.theme)
                log.debug("re-rendered %s at width %d", state.preview.path, width)
            state.preview.clamp(state.preview_rows())
        state.explorer.scroll_into_view(state.explorer_rows())
