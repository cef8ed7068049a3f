"""Filesystem collaborators: directory listing and text file reads."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import EncodingError, IoError
from .model import ExplorerEntry

log = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown", ".mdown", ".mkd", ".mkdn"})


def is_markdown_path(path: Path) -> bool:
    return path.suffix.lower() in MARKDOWN_SUFFIXES


def list_directory(directory: Path, show_hidden: bool = False) -> list[ExplorerEntry]:
    """Return a sorted snapshot of ``directory``: directories first, then by name.

    Raises ``IoError`` when the directory cannot be scanned.
    """
    entries: list[ExplorerEntry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False
                entries.append(ExplorerEntry(name=name, is_dir=is_dir, path=Path(child.path)))
    except OSError as exc:
        log.info("cannot list %s: %s", directory, exc)
        raise IoError(directory, exc.strerror or str(exc)) from exc

    entries.sort(key=lambda entry: (not entry.is_dir, entry.name.casefold(), entry.name))
    return entries


def read_file(path: Path) -> str:
    """Read ``path`` as text.

    UTF-8 (with or without BOM) is accepted. NUL bytes or undecodable content
    raise ``EncodingError``; filesystem failures raise ``IoError``.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        log.info("cannot read %s: %s", path, exc)
        raise IoError(path, exc.strerror or str(exc)) from exc

    if b"\x00" in data:
        raise EncodingError(path, "binary content (NUL bytes)")
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise EncodingError(path, f"not valid UTF-8 at byte {exc.start}") from exc
