"""Local automation workspace for the Pulumi CLI.

Quick start::

    from pulumi_automation import LocalWorkspace, LocalWorkspaceOptions, ProjectSettings

    async with LocalWorkspace(
        LocalWorkspaceOptions(project_settings=ProjectSettings(name="proj", runtime="python"))
    ) as ws:
        await ws.create_stack("dev")
"""

from loguru import logger

from pulumi_automation.errors import (
    CommandError,
    ConcurrentUpdateError,
    SettingsDecodeError,
    StackAlreadyExistsError,
    StackNotFoundError,
)
from pulumi_automation.models import (
    ConfigValue,
    InlineProgramArgs,
    LocalProgramArgs,
    LocalWorkspaceOptions,
    PluginInfo,
    PluginKind,
    ProjectRuntime,
    ProjectSettings,
    StackSettings,
    StackSummary,
    WhoAmIResult,
)
from pulumi_automation.workspace import (
    LocalWorkspace,
    Workspace,
    WorkspaceStack,
    create_or_select_stack,
    create_stack,
    select_stack,
)

# Silent unless the application opts in via log.setup_logging().
logger.disable("pulumi_automation")

__all__ = [
    "CommandError",
    "ConcurrentUpdateError",
    "ConfigValue",
    "InlineProgramArgs",
    "LocalProgramArgs",
    "LocalWorkspace",
    "LocalWorkspaceOptions",
    "PluginInfo",
    "PluginKind",
    "ProjectRuntime",
    "ProjectSettings",
    "SettingsDecodeError",
    "StackAlreadyExistsError",
    "StackNotFoundError",
    "StackSettings",
    "StackSummary",
    "WhoAmIResult",
    "Workspace",
    "WorkspaceStack",
    "create_or_select_stack",
    "create_stack",
    "select_stack",
]
