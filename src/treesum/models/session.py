"""Scan configuration and per-invocation session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import click

DEFAULT_MAXSUMSIZE = 3
DEFAULT_HASHLEN = 8


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Validated options supplied by the CLI layer."""

    debug: bool = False
    maxsumsize: int = DEFAULT_MAXSUMSIZE
    hashlen: int = DEFAULT_HASHLEN

    @property
    def max_hash_bytes(self) -> int:
        """Files of this size or larger are never hashed."""
        return self.maxsumsize * 1024 * 1024


@dataclass
class ScanSession:
    """State owned by one scan invocation.

    The name caches live for the whole run.  ``root``, ``dev`` and ``count``
    only describe the root currently being traversed and are reset by
    :meth:`start_root`.
    """

    config: ScanConfig = field(default_factory=ScanConfig)
    users: dict[int, str] = field(default_factory=dict)
    groups: dict[int, str] = field(default_factory=dict)
    root: Path | None = None
    dev: int = 0
    count: int = 0
    totals: list[tuple[Path, int]] = field(default_factory=list)
    out: Callable[[str], None] = click.echo

    def start_root(self, root: Path, dev: int) -> None:
        """Begin bookkeeping for a new root."""
        self.root = root
        self.dev = dev
        self.count = 0

    def finish_root(self) -> int:
        """Record the byte total of the current root and return it."""
        self.totals.append((self.root, self.count))
        return self.count
