"""Settings store interface for project and stack settings files.

The store owns file discovery and persistence for one working directory.
The interface is async so file I/O never blocks the event loop.

Layout::

    {work_dir}/Pulumi.{yaml|yml|json}
    {work_dir}/Pulumi.{settings_name}.{yaml|yml|json}
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pulumi_automation.models.project import ProjectSettings
from pulumi_automation.models.stack import StackSettings


@runtime_checkable
class SettingsStore(Protocol):
    """Async protocol for reading and writing settings documents."""

    async def get_project_settings(self) -> ProjectSettings | None:
        """Read project settings.  Returns ``None`` if no settings file exists."""
        ...

    async def save_project_settings(self, settings: ProjectSettings) -> None:
        """Overwrite the project settings file, reusing its current extension."""
        ...

    async def get_stack_settings(self, stack_name: str) -> StackSettings | None:
        """Read a stack's settings.  Returns ``None`` if no settings file exists."""
        ...

    async def save_stack_settings(self, stack_name: str, settings: StackSettings) -> None:
        """Overwrite a stack's settings file, reusing its current extension."""
        ...
