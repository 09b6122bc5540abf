"""Tool configuration loaded from WSM_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

PROGRAM_NAME = "workspace-manager"


class WorkspaceSettings(BaseSettings):
    """workspace-manager settings.

    All fields are read from environment variables with the ``WSM_`` prefix.
    For example, ``WSM_INCLUDE_CURRENT=false`` maps to ``include_current``.
    Command-line options always win over these values.
    """

    model_config = SettingsConfigDict(
        env_prefix="WSM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "WARNING"

    # -- Folders ---------------------------------------------------------------
    include_current: bool = True
    """List the scanned root itself as the first workspace folder."""

    sort_folders: bool = True
    folder_icon: str = "📦"
    root_icon: str = "🏗️"

    # -- Output ----------------------------------------------------------------
    extension: str = ".code-workspace"
    indent: int = 2

    # -- Tasks -----------------------------------------------------------------
    task_label: str = "Update Workspace"
    task_command: str | None = None
    """Executable the generated task runs.  Defaults to ``workspace-manager``
    as found on ``PATH``."""


@lru_cache(maxsize=1)
def get_settings() -> WorkspaceSettings:
    """Return a cached settings instance.

    Call ``get_settings.cache_clear()`` in tests after overriding env vars.
    """
    return WorkspaceSettings()
