"""Level-by-level traversal of scan roots."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Callable

import click

from treesum.core.reporter import EntryReporter, read_metadata
from treesum.models.entry import DirLevel
from treesum.models.session import ScanConfig, ScanSession
from treesum.utils import display_name

log = logging.getLogger(__name__)

ROOT_SEPARATOR = "-" * 40


class ScanError(Exception):
    """Raised when a scan root cannot be established."""


def device_of(path: Path) -> int | None:
    """Return the device id of *path* (following links), or None."""
    try:
        return os.stat(path).st_dev
    except OSError:
        return None


def is_plain_dir(path: Path) -> bool:
    """True for a directory that is not reached through a symlink."""
    try:
        return stat.S_ISDIR(os.lstat(path).st_mode)
    except OSError:
        return False


def list_children(directory: Path) -> list[Path]:
    """Return the immediate children of *directory* sorted by file name.

    Names are compared as encoded bytes so the order does not depend on
    the locale.
    """
    with os.scandir(directory) as it:
        names = [entry.name for entry in it]
    names.sort(key=os.fsencode)
    return [directory / name for name in names]


class LevelScanner:
    """Walks roots one directory level at a time.

    Each directory's children are reported as one contiguous block; the
    same-device subdirectories found in that block are then scanned at the
    next depth.  Symlinked directories and mountpoints are reported but
    never entered.
    """

    def __init__(self, session: ScanSession, reporter: EntryReporter | None = None) -> None:
        self.session = session
        self.reporter = reporter or EntryReporter(session)

    def scan(self, depth: int, directories: list[Path]) -> None:
        """Scan *directories*, all located *depth* levels below their root.

        At depth 0 every directory is a new root.

        Raises:
            ScanError: If a root's metadata cannot be read.
        """
        self._scan_level(DirLevel(depth, tuple(directories)))

    def _scan_level(self, level: DirLevel) -> None:
        for directory in level.directories:
            if level.depth == 0:
                self._start_root(directory)
            else:
                self._subdir_header(directory)

            subdirs = self._visit(directory)
            self._scan_level(DirLevel(level.depth + 1, tuple(subdirs)))

            if level.depth == 0:
                total = self.session.finish_root()
                self.session.out(f"total bytes: {total}")
                log.info("Finished %s: %d bytes", display_name(directory), total)

    def _start_root(self, root: Path) -> None:
        try:
            st = os.stat(root)
        except OSError as e:
            raise ScanError(f"Cannot read metadata of root {display_name(root)}: {e.strerror or e!r}") from e
        if self.session.config.debug:
            log.debug("root %s: %r", root, st)

        log.info("Scanning root %s", display_name(root))
        self.session.start_root(root, st.st_dev)
        self.session.out(ROOT_SEPARATOR)
        self.session.out(f"(root) {display_name(root)}:")

    def _subdir_header(self, directory: Path) -> None:
        session = self.session
        if session.config.debug:
            log.debug("dir %s: %r", directory, read_metadata(directory))

        session.out("")
        try:
            rel = directory.relative_to(session.root)
        except ValueError:
            return
        session.out(f"{display_name(rel)}/:")

    def _visit(self, directory: Path) -> list[Path]:
        """Report the children of *directory* and return those to descend into."""
        session = self.session
        try:
            children = list_children(directory)
        except NotADirectoryError:
            return []
        except OSError as e:
            log.debug("Cannot list %s: %s", directory, e)
            session.out(f"err {e!r}")
            return []

        subdirs: list[Path] = []
        for child in children:
            if session.config.debug:
                log.debug("visit %s: %r", child, read_metadata(child))
            self.reporter.report(child)
            if is_plain_dir(child) and device_of(child) == session.dev:
                subdirs.append(child)
        return subdirs


def scan_roots(
    paths: list[Path],
    config: ScanConfig | None = None,
    out: Callable[[str], None] = click.echo,
) -> ScanSession:
    """Scan every root in *paths* with a fresh session and return it.

    Raises:
        ScanError: If a root's metadata cannot be read.
    """
    session = ScanSession(config=config or ScanConfig(), out=out)
    LevelScanner(session).scan(0, list(paths))
    return session
