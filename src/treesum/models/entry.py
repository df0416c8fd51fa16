"""Per-entry and per-level value types."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DirLevel:
    """Directories to visit at one depth below the current root."""

    depth: int
    directories: tuple[Path, ...] = ()


@dataclass(slots=True)
class EntryRecord:
    """One reported filesystem entry.

    Computed fresh for every path and never reused.  ``extra`` holds the
    type-specific suffix (symlink target, ``/`` marker, mountpoint flag).
    """

    perms: str = ""
    length: int = 0
    owner: str = ""
    timestamp: str = ""
    hash: str = ""
    name: str = "?"
    extra: str = ""

    def format_line(self) -> str:
        """Render the fixed-width report line."""
        return (
            f"{self.perms:10} {self.length:10} {self.owner:17} "
            f"{self.timestamp:16} {self.hash:8} {self.name}{self.extra}"
        )
