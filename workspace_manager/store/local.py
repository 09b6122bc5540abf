"""Local filesystem persistence for workspace files.

Reads an existing ``.code-workspace`` file into a ``WorkspaceDocument`` and
writes documents back as pretty-printed JSON.

Writes are atomic: data is written to a temporary file in the same directory,
then moved over the target path.  A crash mid-write leaves the previous file
intact instead of a truncated one.  Concurrent runs against the same file are
not coordinated; the last writer wins.
"""

from __future__ import annotations

import contextlib
import json
import os
import shutil
import tempfile
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from workspace_manager.models.workspace import WorkspaceDocument


class ParseError(ValueError):
    """Raised when an existing workspace file is not a valid workspace document."""


class WorkspaceIOError(OSError):
    """Raised when a workspace file cannot be read or written."""


# -- Read ----------------------------------------------------------------------


def load_workspace(path: str | Path) -> WorkspaceDocument | None:
    """Load the workspace file at ``path``.

    Returns ``None`` when the file does not exist or holds only whitespace.
    Raises ``ParseError`` for malformed content and ``WorkspaceIOError`` when
    the file exists but cannot be read.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except UnicodeDecodeError as exc:
        msg = f"Workspace file {path} is not valid UTF-8: {exc}"
        raise ParseError(msg) from None
    except OSError as exc:
        msg = f"Cannot read workspace file {path}: {exc}"
        raise WorkspaceIOError(msg) from exc

    if not raw.strip():
        logger.warning("Workspace file {} is empty; treating it as new", path)
        return None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in workspace file {path}: {exc}"
        raise ParseError(msg) from None

    if not isinstance(data, dict):
        msg = f"Workspace file {path} must contain a JSON object, got {type(data).__name__}"
        raise ParseError(msg)

    try:
        return WorkspaceDocument.model_validate(data)
    except ValidationError as exc:
        msg = f"Workspace file {path} is not a valid workspace: {exc}"
        raise ParseError(msg) from None


# -- Write ---------------------------------------------------------------------


def dump_workspace(document: WorkspaceDocument, *, indent: int = 2) -> str:
    """Serialize ``document`` deterministically, with a trailing newline."""
    return json.dumps(document.to_json_dict(), indent=indent, ensure_ascii=False) + "\n"


def save_workspace(path: str | Path, document: WorkspaceDocument, *, indent: int = 2) -> Path:
    """Write ``document`` to ``path`` atomically.  Raises ``WorkspaceIOError``."""
    path = Path(path)
    data = dump_workspace(document, indent=indent)
    try:
        _atomic_write(path, data)
    except OSError as exc:
        msg = f"Cannot write workspace file {path}: {exc}"
        raise WorkspaceIOError(msg) from exc
    logger.info("Wrote {} folder(s) to {}", len(document.folders), path)
    return path


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + replace.

    The temp file is created in the target directory so the final
    ``os.replace`` never crosses filesystems.  An existing target keeps its
    permission bits.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(data)
        if path.exists():
            shutil.copymode(path, tmp_path)
        else:
            os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise
