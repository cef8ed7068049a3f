"""Input events consumed by the controller, one at a time."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class KeyPress:
    """A decoded key: a printable character or a name such as ``"UP"``."""

    code: str


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class Quit:
    pass


Event = KeyPress | Resize | Quit
