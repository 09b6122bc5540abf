"""Workspace document construction and merging.

Turns a scanned folder list into a ``WorkspaceDocument``:

- **Build** (no workspace file yet): folders plus the default tasks block.
- **Merge** (file exists): missing folders are appended after the existing
  ones.  Nothing is pruned, entries keep their extra fields, and ``tasks`` is
  replaced as a whole only when asked to.

Everything except ``update_workspace`` is a pure function over explicit
inputs; ``update_workspace`` is the single place that touches the disk.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from workspace_manager.models.workspace import TASKS_VERSION, WorkspaceDocument, WorkspaceFolder
from workspace_manager.scanner import check_root, scan_directories
from workspace_manager.settings import PROGRAM_NAME, WorkspaceSettings, get_settings
from workspace_manager.store.local import load_workspace, save_workspace

FALLBACK_WORKSPACE_NAME = "workspace"

# ---------------------------------------------------------------------------
# Naming and paths
# ---------------------------------------------------------------------------


def workspace_file_name(root: str | Path, name: str | None = None, extension: str = ".code-workspace") -> str:
    """``<name><extension>``, where name defaults to the root directory's base name."""
    return f"{workspace_name(root, name)}{extension}"


def workspace_name(root: str | Path, name: str | None = None) -> str:
    if name:
        return name
    return Path(os.path.abspath(root)).name or FALLBACK_WORKSPACE_NAME


def relative_folder_path(target: Path, workspace_dir: Path) -> str:
    """Path of ``target`` as seen from the workspace file's directory.

    Symlinks are not followed, so a linked child keeps its own name.  Uses
    forward slashes.  Falls back to the absolute path when no relative path
    exists (different Windows drives).
    """
    target = Path(os.path.abspath(target))
    try:
        relative = os.path.relpath(target, os.path.abspath(workspace_dir))
    except ValueError:
        return target.as_posix()
    return Path(relative).as_posix()


def _label(icon: str, name: str) -> str:
    return f"{icon} {name}" if icon else name


# ---------------------------------------------------------------------------
# Folders
# ---------------------------------------------------------------------------


def dedupe_folders(folders: Iterable[WorkspaceFolder]) -> list[WorkspaceFolder]:
    """Drop repeated paths, keeping the first occurrence of each."""
    seen: set[str] = set()
    unique: list[WorkspaceFolder] = []
    for folder in folders:
        if folder.key in seen:
            continue
        seen.add(folder.key)
        unique.append(folder)
    return unique


def target_folders(
    root: str | Path,
    workspace_dir: str | Path,
    names: Iterable[str],
    *,
    workspace_name: str,
    include_current: bool = True,
    folder_icon: str = "📦",
    root_icon: str = "🏗️",
) -> list[WorkspaceFolder]:
    """Folders a workspace for ``root`` should list, in display order.

    The root itself comes first when ``include_current`` is set, followed by
    one entry per child directory name.
    """
    root = Path(root)
    workspace_dir = Path(workspace_dir)
    folders: list[WorkspaceFolder] = []
    if include_current:
        folders.append(
            WorkspaceFolder(
                path=relative_folder_path(root, workspace_dir),
                name=_label(root_icon, workspace_name),
            )
        )
    for child in names:
        folders.append(
            WorkspaceFolder(
                path=relative_folder_path(root / child, workspace_dir),
                name=_label(folder_icon, child),
            )
        )
    return dedupe_folders(folders)


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


def task_args(
    *,
    path: str,
    name: str | None = None,
    include_current: bool = True,
    output_dir: str | None = None,
    include_by_default: bool = True,
) -> list[str]:
    """Command-line arguments that reproduce the current invocation.

    ``--include-current`` is only emitted when it differs from the configured
    default.
    """
    args: list[str] = []
    if name:
        args.extend(["--name", name])
    if not include_current:
        args.append("--exclude-current")
    elif not include_by_default:
        args.append("--include-current")
    if output_dir is not None:
        args.extend(["--output-dir", output_dir])
    args.extend(["--path", path])
    return args


def resolve_task_command(command: str | None = None) -> str:
    if command:
        return command
    return shutil.which(PROGRAM_NAME) or PROGRAM_NAME


def default_tasks(args: list[str], *, command: str, label: str = "Update Workspace") -> dict[str, Any]:
    """The tasks block this tool writes: one task that re-runs the tool."""
    return {
        "version": TASKS_VERSION,
        "tasks": [
            {
                "label": label,
                "type": "process",
                "command": command,
                "args": list(args),
            }
        ],
    }


# ---------------------------------------------------------------------------
# Build / merge
# ---------------------------------------------------------------------------


def build_workspace(folders: Iterable[WorkspaceFolder], *, tasks: dict[str, Any] | None = None) -> WorkspaceDocument:
    """A fresh document for a workspace file that does not exist yet."""
    document = WorkspaceDocument(folders=[folder.model_copy(deep=True) for folder in dedupe_folders(folders)])
    if tasks is not None:
        document.tasks = tasks
    return document


def merge_workspace(
    existing: WorkspaceDocument,
    folders: Iterable[WorkspaceFolder],
    *,
    tasks: dict[str, Any] | None = None,
    update_tasks: bool = False,
) -> WorkspaceDocument:
    """Merge ``folders`` into a copy of ``existing``.

    Existing entries are kept as they are, in their order, even when their
    directory is gone.  New paths are appended.  ``tasks`` replaces the
    existing block only when ``update_tasks`` is set.
    """
    merged = existing.model_copy(deep=True)
    merged.folders = dedupe_folders(merged.folders)
    known = merged.folder_keys()
    for folder in folders:
        if folder.key in known:
            continue
        logger.debug("Adding folder {}", folder.path)
        merged.folders.append(folder.model_copy(deep=True))
        known.add(folder.key)

    if update_tasks:
        logger.debug("Replacing tasks block")
        merged.tasks = tasks
    return merged


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


@dataclass
class WorkspaceUpdate:
    """Outcome of ``update_workspace``."""

    path: Path
    document: WorkspaceDocument
    created: bool
    added: list[str] = field(default_factory=list)
    written: bool = True


def update_workspace(
    root: str | Path = ".",
    *,
    workspace_dir: str | Path | None = None,
    name: str | None = None,
    include_current: bool | None = None,
    update_tasks: bool = False,
    write: bool = True,
    settings: WorkspaceSettings | None = None,
) -> WorkspaceUpdate:
    """Scan ``root`` and create or update its workspace file.

    The file is written to ``workspace_dir`` (default: the current directory).
    Raises ``PathError`` for a bad root, ``ParseError`` for an existing file
    that is not a workspace (the file is left untouched), and
    ``WorkspaceIOError`` when reading or writing fails.
    """
    settings = settings or get_settings()
    if include_current is None:
        include_current = settings.include_current

    root_path = check_root(root)
    output_dir = str(workspace_dir) if workspace_dir is not None else None
    workspace_dir = Path(workspace_dir) if workspace_dir is not None else Path.cwd()
    ws_name = workspace_name(root_path, name)
    target = workspace_dir / workspace_file_name(root_path, name, settings.extension)

    names = scan_directories(root_path, sort=settings.sort_folders)
    folders = target_folders(
        root_path,
        workspace_dir,
        names,
        workspace_name=ws_name,
        include_current=include_current,
        folder_icon=settings.folder_icon,
        root_icon=settings.root_icon,
    )
    tasks = default_tasks(
        task_args(
            path=str(root),
            name=name,
            include_current=include_current,
            output_dir=output_dir,
            include_by_default=settings.include_current,
        ),
        command=resolve_task_command(settings.task_command),
        label=settings.task_label,
    )

    existing = load_workspace(target)
    if existing is None:
        logger.info("Creating workspace file {}", target)
        document = build_workspace(folders, tasks=tasks)
        added = [folder.path for folder in document.folders]
    else:
        logger.info("Merging into existing workspace file {}", target)
        known = existing.folder_keys()
        document = merge_workspace(existing, folders, tasks=tasks, update_tasks=update_tasks)
        added = [folder.path for folder in document.folders if folder.key not in known]

    if write:
        save_workspace(target, document, indent=settings.indent)
    return WorkspaceUpdate(path=target, document=document, created=existing is None, added=added, written=write)
