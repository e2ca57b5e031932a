"""Data models for the automation workspace."""

from pulumi_automation.models.config import ConfigValue
from pulumi_automation.models.enums import PluginKind, ProjectRuntimeName
from pulumi_automation.models.options import (
    InlineProgramArgs,
    LocalProgramArgs,
    LocalWorkspaceOptions,
    PulumiFn,
)
from pulumi_automation.models.plugin import PluginInfo, WhoAmIResult
from pulumi_automation.models.project import (
    ProjectBackend,
    ProjectRuntime,
    ProjectRuntimeOptions,
    ProjectSettings,
    ProjectSettingsModel,
    ProjectTemplate,
    ProjectTemplateConfigValue,
)
from pulumi_automation.models.stack import StackSettings, StackSettingsConfigValue, StackSummary

__all__ = [
    # Config
    "ConfigValue",
    # Options
    "InlineProgramArgs",
    "LocalProgramArgs",
    "LocalWorkspaceOptions",
    # Plugins
    "PluginInfo",
    # Enums
    "PluginKind",
    # Project
    "ProjectBackend",
    "ProjectRuntime",
    "ProjectRuntimeName",
    "ProjectRuntimeOptions",
    "ProjectSettings",
    "ProjectSettingsModel",
    "ProjectTemplate",
    "ProjectTemplateConfigValue",
    "PulumiFn",
    # Stack
    "StackSettings",
    "StackSettingsConfigValue",
    "StackSummary",
    "WhoAmIResult",
]
