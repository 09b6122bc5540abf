"""Workspace file data model.

A workspace file is the JSON document VS Code opens as a multi-root project
(``<name>.code-workspace``).  Only ``folders`` is interpreted here; ``tasks``
and ``settings`` are editor-owned blocks carried as untyped JSON, and any
other top-level key is kept through ``extra="allow"`` so user configuration
survives a rewrite.
"""

from __future__ import annotations

from pathlib import PurePath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

TASKS_VERSION = "2.0.0"
"""Schema version VS Code expects on a tasks block."""


def normalize_folder_path(path: str) -> str:
    """Comparison key for a folder path: ``./a``, ``a/`` and ``a`` are equal."""
    return PurePath(path).as_posix()


class WorkspaceFolder(BaseModel):
    """One entry of the ``folders`` array."""

    model_config = ConfigDict(extra="allow")

    path: str
    name: str | None = None

    @property
    def key(self) -> str:
        return normalize_folder_path(self.path)


class WorkspaceDocument(BaseModel):
    """A whole ``.code-workspace`` file."""

    model_config = ConfigDict(extra="allow")

    folders: list[WorkspaceFolder] = Field(default_factory=list)
    tasks: dict[str, Any] | None = Field(default=None, description="Opaque tasks block, replaced only as a unit")
    settings: dict[str, Any] | None = Field(default=None, description="Opaque editor settings, passed through")

    def folder_keys(self) -> set[str]:
        return {folder.key for folder in self.folders}

    def to_json_dict(self) -> dict[str, Any]:
        """Plain JSON mapping with never-set optional fields left out.

        An explicit ``null`` read from an existing file is written back as is.
        """
        data = self.model_dump(mode="json")
        for key in ("tasks", "settings"):
            if data.get(key) is None and key not in self.model_fields_set:
                data.pop(key, None)
        for folder, raw in zip(self.folders, data["folders"]):
            if folder.name is None and "name" not in folder.model_fields_set:
                raw.pop("name", None)
        return data
