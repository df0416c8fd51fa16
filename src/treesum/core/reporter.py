"""Per-entry metadata collection and line formatting."""

from __future__ import annotations

import hashlib
import logging
import os
import stat
from datetime import datetime, timezone
from pathlib import Path

from treesum.core.names import fit_name, lookup_group_name, lookup_user_name
from treesum.models.entry import EntryRecord
from treesum.models.session import ScanSession
from treesum.utils import display_name

log = logging.getLogger(__name__)

# Read size for content hashing; a shorter read ends the stream.
HASH_CHUNK = 64 * 1024

NO_META = "no meta"
TIME_FORMAT = "%Y-%m-%dT%H:%M"


def read_metadata(path: Path) -> os.stat_result | None:
    """Stat *path* without following a final symlink.

    For anything but a symlink this is the same as a following stat.
    """
    try:
        return os.lstat(path)
    except OSError:
        return None


def format_mtime(st: os.stat_result) -> str:
    """Format the modification time as UTC minutes, ``?`` if unusable."""
    try:
        mtime = datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return "?"
    return mtime.strftime(TIME_FORMAT)


def content_hash(path: Path) -> str:
    """Return the hex MD5 digest of the file at *path*.

    A file that cannot be opened hashes as empty input, and a read error
    stops the stream early; neither is raised.
    """
    md5 = hashlib.md5()
    try:
        with open(path, "rb") as f:
            while True:
                chunk = f.read(HASH_CHUNK)
                md5.update(chunk)
                if len(chunk) < HASH_CHUNK:
                    break
    except OSError as e:
        log.debug("Could not hash %s: %s", path, e)
    return md5.hexdigest()


def read_link_target(path: Path) -> str:
    """Return the printable target of the symlink at *path*, ``?`` if unreadable."""
    try:
        return display_name(os.readlink(path))
    except OSError:
        return "?"


class EntryReporter:
    """Builds and emits one report line per filesystem entry."""

    def __init__(self, session: ScanSession) -> None:
        self.session = session

    def report(self, path: Path) -> EntryRecord:
        """Report *path* and update the running byte total.

        Never raises for filesystem problems: failures show up as
        placeholder fields in the emitted line.
        """
        session = self.session
        record = EntryRecord(name=display_name(path.name) or "?")

        st = read_metadata(path)
        other_dev = False
        if st is None:
            record.perms = NO_META
            mode = 0
        else:
            mode = st.st_mode
            record.perms = stat.filemode(mode)
            record.length = st.st_size
            other_dev = st.st_dev != session.dev
            record.timestamp = format_mtime(st)
            user = self.user_name(st.st_uid)
            group = self.group_name(st.st_gid)
            record.owner = f"{fit_name(user)} {fit_name(group)}"

        if stat.S_ISLNK(mode):
            record.extra = " -> " + read_link_target(path)
            session.count += record.length
        elif stat.S_ISDIR(mode):
            record.extra = "/"
            record.timestamp = ""
            record.hash = ""
            record.length = 0
            if other_dev:
                record.extra += " (mountpoint)"
        elif stat.S_ISREG(mode):
            session.count += record.length
            record.hash = self._file_hash(path, record.length)

        session.out(record.format_line())
        return record

    def user_name(self, uid: int) -> str:
        """Resolve *uid* once per session and reuse the cached name."""
        users = self.session.users
        if uid not in users:
            users[uid] = lookup_user_name(uid)
        return users[uid]

    def group_name(self, gid: int) -> str:
        """Resolve *gid* once per session and reuse the cached name."""
        groups = self.session.groups
        if gid not in groups:
            groups[gid] = lookup_group_name(gid)
        return groups[gid]

    def _file_hash(self, path: Path, length: int) -> str:
        config = self.session.config
        if 0 < length < config.max_hash_bytes:
            return content_hash(path)[: config.hashlen]
        return "-" * config.hashlen
