"""CLI interface for Treesum."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from treesum import __version__
from treesum.core.scanner import ScanError, scan_roots
from treesum.models.session import DEFAULT_HASHLEN, DEFAULT_MAXSUMSIZE, ScanConfig
from treesum.settings import Settings

log = logging.getLogger(__name__)

# MD5 yields 32 hex digits.
MAX_HASHLEN = 32


def _setup_logging(verbosity: int, debug: bool) -> None:
    level = logging.WARNING
    if verbosity >= 2 or debug:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _build_config(debug: bool, maxsumsize: int | None, hashlen: int | None) -> ScanConfig:
    settings = Settings()
    if maxsumsize is None:
        maxsumsize = settings.get_int("scan.maxsumsize", DEFAULT_MAXSUMSIZE)
    if hashlen is None:
        hashlen = min(settings.get_int("scan.hashlen", DEFAULT_HASHLEN, minimum=1), MAX_HASHLEN)
    return ScanConfig(debug=debug, maxsumsize=maxsumsize, hashlen=hashlen)


@click.command()
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.option("-d", "--debug", is_flag=True, help="Log raw metadata of every entry visited")
@click.option(
    "-m", "--maxsumsize", type=click.IntRange(min=0), default=None,
    help=f"Only hash files smaller than this many MiB [default: {DEFAULT_MAXSUMSIZE}]",
)
@click.option(
    "--hashlen", type=click.IntRange(1, MAX_HASHLEN), default=None,
    help=f"Hex digits of the hash to show [default: {DEFAULT_HASHLEN}]",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.version_option(__version__, prog_name="treesum")
def main(
    paths: tuple[Path, ...],
    debug: bool,
    maxsumsize: int | None,
    hashlen: int | None,
    verbose: int,
) -> None:
    """Deterministic filesystem scan summaries.

    Lists every entry below each PATH (default: the current directory)
    one directory at a time, with permissions, size, owner, modification
    time and a short content hash.
    """
    _setup_logging(verbose, debug)
    config = _build_config(debug, maxsumsize, hashlen)
    roots = list(paths) or [Path(".")]
    log.debug("Scanning %d root(s) with %s", len(roots), config)

    try:
        scan_roots(roots, config)
    except ScanError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
