"""Owner and group name resolution."""

from __future__ import annotations

import grp
import pwd

NAME_WIDTH = 8
UNKNOWN_NAME = "?"


def lookup_user_name(uid: int) -> str:
    """Return the login name for *uid*, or ``?`` if it has none."""
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return UNKNOWN_NAME


def lookup_group_name(gid: int) -> str:
    """Return the group name for *gid*, or ``?`` if it has none."""
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return UNKNOWN_NAME


def fit_name(name: str, width: int = NAME_WIDTH) -> str:
    """Fit *name* into a fixed column.

    Names longer than *width* keep their last ``width - 1`` characters
    behind a ``~`` marker::

        fit_name("postgres")        # 'postgres'
        fit_name("systemd-network") # '~network'
    """
    if len(name) > width:
        name = "~" + name[-(width - 1):]
    return f"{name:{width}}"
