"""Terminal column widths and SGR escape helpers.

Cells measure themselves with ``char_display_width``; frame rows are styled
with sequences built by ``sgr``.
"""

from __future__ import annotations

import unicodedata

RESET = "\033[0m"

_WIDE = frozenset({"W", "F"})


def char_display_width(ch: str) -> int:
    """Columns one character occupies: 0 for combining marks, 2 for East Asian wide."""
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in _WIDE else 1


def sgr(
    fg: tuple[int, int, int] | None,
    bg: tuple[int, int, int] | None,
    codes: tuple[int, ...] = (),
) -> str:
    """Build one SGR sequence that resets, then applies attribute codes and truecolor fg/bg."""
    params = ["0", *(str(code) for code in codes)]
    if fg is not None:
        params.append("38;2;{};{};{}".format(*fg))
    if bg is not None:
        params.append("48;2;{};{};{}".format(*bg))
    return f"\033[{';'.join(params)}m"
