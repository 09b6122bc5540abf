"""Directory scanning.

Lists the immediate child directories of a root path.  Hidden entries
(leading ``.``) and anything that is not a directory are skipped.  Symlinks
are followed, so a link to a directory counts as a directory and a broken
link is skipped.  Nested directories are never walked.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from loguru import logger

HIDDEN_PREFIX = "."


class PathError(ValueError):
    """Raised when the scan root is missing or is not a directory."""


def is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


def check_root(root: str | Path) -> Path:
    """Return ``root`` as a ``Path``.  Raises ``PathError`` if unusable."""
    path = Path(root)
    if not path.exists():
        msg = f"Scan path not found: {path}"
        raise PathError(msg)
    if not path.is_dir():
        msg = f"Scan path is not a directory: {path}"
        raise PathError(msg)
    return path


def iter_directories(root: str | Path) -> Iterator[str]:
    """Yield child directory names in the order the filesystem reports them.

    The root is validated before the first item is produced.  The directory
    handle is released when the iterator is exhausted or closed.
    """
    path = check_root(root)
    with os.scandir(path) as entries:
        for entry in entries:
            if is_hidden(entry.name):
                logger.debug("Skipping hidden entry {}", entry.name)
                continue
            try:
                is_dir = entry.is_dir()
            except OSError:
                is_dir = False
            if not is_dir:
                logger.debug("Skipping non-directory entry {}", entry.name)
                continue
            yield entry.name


def scan_directories(root: str | Path, *, sort: bool = True) -> list[str]:
    """Child directory names of ``root``, sorted lexicographically by default."""
    names = list(iter_directories(root))
    if sort:
        names.sort()
    logger.debug("Found {} folder(s) under {}", len(names), root)
    return names
