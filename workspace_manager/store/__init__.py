"""Workspace file persistence."""

from workspace_manager.store.local import (
    ParseError,
    WorkspaceIOError,
    dump_workspace,
    load_workspace,
    save_workspace,
)

__all__ = ["ParseError", "WorkspaceIOError", "dump_workspace", "load_workspace", "save_workspace"]
