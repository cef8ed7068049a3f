"""Pytest bootstrap for local source imports and per-user state.

The ``pytest`` console script can run with a sys.path that excludes the
repository root, so the root is prepended to make ``import lazymd`` resolve
to the local package. Every test also gets a throwaway config file so nothing
touches the real per-user config directory.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT_STR = str(Path(__file__).resolve().parent.parent)

if PROJECT_ROOT_STR not in sys.path:
    sys.path.insert(0, PROJECT_ROOT_STR)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    from lazymd.runtime import config

    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "config" / config.CONFIG_FILENAME)
    yield
