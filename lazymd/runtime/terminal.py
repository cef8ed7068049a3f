"""Terminal session setup for the interactive UI.

Switches the tty into raw mode on the alternate screen with wheel reporting,
and puts everything back afterwards.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

# Alternate screen, hidden cursor, cleared; SGR mouse reports for the wheel.
ENTER_TUI = b"\x1b[?1049h\x1b[?25l\x1b[2J"
MOUSE_ON = b"\x1b[?1000h\x1b[?1006h"
MOUSE_OFF = b"\x1b[?1000l\x1b[?1006l"
EXIT_TUI = b"\x1b[0m\x1b[?25h\x1b[?1049l"


def terminal_size(fallback: tuple[int, int] = (80, 24)) -> tuple[int, int]:
    """Return ``(columns, lines)``, never smaller than one cell each way."""
    size = shutil.get_terminal_size(fallback)
    return max(1, size.columns), max(1, size.lines)


class TerminalController:
    """Raw-mode lifecycle for one session on a pair of file descriptors."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_TUI + MOUSE_ON)

    def disable_tui_mode(self) -> None:
        """Leave the alternate screen and restore the tty attributes saved at construction."""
        os.write(self.stdout_fd, MOUSE_OFF + EXIT_TUI)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Run the body in TUI mode; the terminal is restored even if it raises."""
        self.enable_tui_mode()
        try:
            yield self
        finally:
            self.disable_tui_mode()
