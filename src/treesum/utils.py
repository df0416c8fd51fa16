"""Shared utility functions."""

from __future__ import annotations

import os
from pathlib import Path


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def display_name(name: str | os.PathLike[str]) -> str:
    """Return *name* as printable text.

    Bytes that are not valid UTF-8 come back from the filesystem as lone
    surrogates; they are shown as U+FFFD instead.
    """
    return os.fsencode(name).decode("utf-8", "replace")
