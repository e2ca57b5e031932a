"""Package configuration loaded from PULUMI_AUTOMATION_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class AutomationSettings(BaseSettings):
    """Automation workspace settings.

    All fields are read from environment variables with the ``PULUMI_AUTOMATION_``
    prefix.  For example, ``PULUMI_AUTOMATION_PULUMI_COMMAND=/opt/pulumi/bin/pulumi``
    maps to ``pulumi_command``.

    Engine variables (``PULUMI_HOME``, ``PULUMI_CONFIG_PASSPHRASE``, ...) are
    **not** managed here -- pass them per workspace via ``environment_variables``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PULUMI_AUTOMATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Engine ----------------------------------------------------------------
    pulumi_command: str = "pulumi"
    """Executable used by ``LocalPulumiCmd``; a bare name is looked up on PATH."""

    skip_update_check: bool = True
    """Export ``PULUMI_SKIP_UPDATE_CHECK=true`` to every invocation."""

    # -- Working directories ---------------------------------------------------
    temp_dir: str | None = None
    """Parent directory for auto-created work dirs.  ``None`` uses the OS default."""

    temp_dir_prefix: str = "automation-"


@lru_cache(maxsize=1)
def get_settings() -> AutomationSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``get_settings.cache_clear()`` in tests to force a
    re-read after overriding env vars.
    """
    return AutomationSettings()
