"""Data models for workspace files."""

from workspace_manager.models.workspace import (
    TASKS_VERSION,
    WorkspaceDocument,
    WorkspaceFolder,
    normalize_folder_path,
)

__all__ = [
    "TASKS_VERSION",
    "WorkspaceDocument",
    "WorkspaceFolder",
    "normalize_folder_path",
]
