"""Error taxonomy for filesystem collaborators.

``IoError`` and ``EncodingError`` are raised by listing/reading helpers and
converted into visible feedback at the open-file seam. Markdown parsing and
layout never raise; reduced layout fidelity is only logged.
"""

from __future__ import annotations

from pathlib import Path


class LazyMdError(Exception):
    """Base class for recoverable lazymd failures."""


class IoError(LazyMdError):
    """Listing or reading a path failed (missing, permission denied, ...)."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class EncodingError(LazyMdError):
    """File content cannot be decoded as text."""

    def __init__(self, path: Path, reason: str = "not a text file") -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
