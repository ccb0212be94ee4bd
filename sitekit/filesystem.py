"""Filesystem checks that hold up on platforms where ``os.access`` is unreliable."""

from __future__ import annotations

import os
from pathlib import Path
from secrets import token_hex


def _trusts_access_checks() -> bool:
    return os.sep == "/"


def _can_append(path: Path) -> bool:
    try:
        with path.open("ab"):
            pass
    except OSError:
        return False
    return True


def is_really_writable(path: str | os.PathLike[str]) -> bool:
    """
    Return True when ``path`` can actually be written to.

    POSIX systems trust ``os.access``. On Windows the read-only attribute is
    not reflected there, so a scratch file is written inside directories and
    regular files are opened for appending.
    """

    target = Path(path)
    if _trusts_access_checks():
        return os.access(target, os.W_OK)

    if target.is_dir():
        scratch = target / token_hex(8)
        if not _can_append(scratch):
            return False
        scratch.unlink(missing_ok=True)
        return True

    return target.is_file() and _can_append(target)
