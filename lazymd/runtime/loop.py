"""Main interactive event loop for the terminal UI.

Polls the terminal size and the keyboard, feeds events to the controller one
at a time, and redraws whenever something changed.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

from ..input import KEY_EOF, read_key
from ..ui_theme import DEFAULT_THEME, UITheme
from . import config
from .controller import AppController
from .events import Event, KeyPress, Quit, Resize
from .screen import compose_frame, draw
from .terminal import TerminalController, terminal_size

log = logging.getLogger(__name__)

# Poll interval for noticing terminal resizes between keystrokes.
RESIZE_POLL_MS = 100


def iter_events(
    fd: int,
    size: tuple[int, int],
    size_fn: Callable[[], tuple[int, int]] = terminal_size,
    poll_ms: int = RESIZE_POLL_MS,
) -> Iterator[Event]:
    """Yield events until input reaches end of file.

    ``size`` is the viewport the consumer already knows about; a ``Resize`` is
    produced only when ``size_fn`` reports something different.
    """
    last_size = size
    while True:
        current = size_fn()
        if current != last_size:
            last_size = current
            yield Resize(*current)
        key = read_key(fd, timeout_ms=poll_ms)
        if key == KEY_EOF:
            yield Quit()
            return
        if key:
            yield KeyPress(key)


def run_app(
    directory: Path,
    theme: UITheme = DEFAULT_THEME,
    *,
    show_hidden: bool = False,
) -> None:
    """Run the Explorer/Preview UI rooted at ``directory`` until quit."""
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("lazymd needs an interactive terminal (use --render to print a file).")

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    width, height = terminal_size()
    controller = AppController.start(
        directory,
        width,
        height,
        show_hidden=show_hidden,
        theme=theme,
    )
    state = controller.state
    terminal = TerminalController(stdin_fd, stdout_fd)
    log.info("session started in %s at %dx%d", state.explorer.directory, width, height)

    with terminal.raw_mode():
        draw(compose_frame(state, theme), stdout_fd)
        for event in iter_events(stdin_fd, (state.width, state.height)):
            running = controller.handle(event)
            if not running:
                break
            draw(compose_frame(state, theme), stdout_fd)

    if state.explorer.show_hidden != show_hidden:
        config.save_show_hidden(state.explorer.show_hidden)
    log.info("session ended")
