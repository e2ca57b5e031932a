"""Construction options for ``LocalWorkspace`` and the stack helpers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field

from pulumi_automation.models.project import ProjectSettings
from pulumi_automation.models.stack import StackSettings

PulumiFn = Callable[..., Any]
"""An in-process Pulumi program."""


class LocalWorkspaceOptions(BaseModel):
    """Options used to configure a ``LocalWorkspace``.

    ``project_settings`` and ``stack_settings`` are written to the working
    directory before the workspace reports ready, overwriting existing files.
    """

    work_dir: str | None = Field(default=None, description="Blank means a temporary directory owned by the workspace")
    pulumi_home: str | None = None
    program: PulumiFn | None = None
    secrets_provider: str | None = None
    environment_variables: dict[str, str] | None = None
    project_settings: ProjectSettings | None = None
    stack_settings: dict[str, StackSettings] | None = None


class InlineProgramArgs(LocalWorkspaceOptions):
    """Stack helper arguments for an in-process program.

    ``program`` is the in-process program the stack belongs to.  The helpers
    attach it to the returned stack as ``workspace.program``; running it is up
    to the caller.  ``project_settings`` is also required by the helpers, since
    an inline program has no ``Pulumi.yaml`` on disk; it is validated before
    any directory or command work happens.
    """

    stack_name: str
    program: PulumiFn


class LocalProgramArgs(LocalWorkspaceOptions):
    """Stack helper arguments for a program already on disk at ``work_dir``."""

    stack_name: str
    work_dir: str
