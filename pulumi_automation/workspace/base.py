"""Workspace contract.

A workspace is the execution context for one Pulumi project: a working
directory, its settings files, and the stacks and config the engine keeps
for it.  ``LocalWorkspace`` is the implementation backed by a local directory
and the ``pulumi`` CLI; other providers can implement the same surface.
"""

from __future__ import annotations

import abc
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING

from loguru import logger

from pulumi_automation.models.enums import PluginKind

if TYPE_CHECKING:
    from pulumi_automation.commands.base import CommandResult, PulumiCmd
    from pulumi_automation.models.config import ConfigValue
    from pulumi_automation.models.options import PulumiFn
    from pulumi_automation.models.plugin import PluginInfo, WhoAmIResult
    from pulumi_automation.models.project import ProjectSettings
    from pulumi_automation.models.stack import StackSettings, StackSummary

PULUMI_HOME_ENV = "PULUMI_HOME"


class Workspace(abc.ABC):
    """Abstract workspace: settings persistence, config, stacks and plugins.

    Subclasses provide the identity properties and the operations; this base
    owns how engine commands are issued (environment assembly and logging).
    """

    def __init__(self, cmd: PulumiCmd) -> None:
        self._cmd = cmd
        self.program: PulumiFn | None = None
        self.environment_variables: dict[str, str] = {}

    # -- Identity --------------------------------------------------------------

    @property
    @abc.abstractmethod
    def work_dir(self) -> str:
        """Directory holding the project and stack settings files."""

    @property
    @abc.abstractmethod
    def pulumi_home(self) -> str | None:
        """Override for ``$PULUMI_HOME`` (plugins, credentials)."""

    @property
    @abc.abstractmethod
    def secrets_provider(self) -> str | None:
        """Secrets provider passed to ``stack init``."""

    # -- Settings --------------------------------------------------------------

    @abc.abstractmethod
    async def get_project_settings(self) -> ProjectSettings | None: ...

    @abc.abstractmethod
    async def save_project_settings(self, settings: ProjectSettings) -> None: ...

    @abc.abstractmethod
    async def get_stack_settings(self, stack_name: str) -> StackSettings | None: ...

    @abc.abstractmethod
    async def save_stack_settings(self, stack_name: str, settings: StackSettings) -> None: ...

    # -- Config ----------------------------------------------------------------

    @abc.abstractmethod
    async def get_config_value(self, stack_name: str, key: str) -> ConfigValue: ...

    @abc.abstractmethod
    async def get_config(self, stack_name: str) -> dict[str, ConfigValue]: ...

    @abc.abstractmethod
    async def set_config_value(self, stack_name: str, key: str, value: ConfigValue) -> None: ...

    @abc.abstractmethod
    async def set_config(self, stack_name: str, config: Mapping[str, ConfigValue]) -> None: ...

    @abc.abstractmethod
    async def remove_config_value(self, stack_name: str, key: str) -> None: ...

    @abc.abstractmethod
    async def remove_config(self, stack_name: str, keys: Iterable[str]) -> None: ...

    @abc.abstractmethod
    async def refresh_config(self, stack_name: str) -> dict[str, ConfigValue]: ...

    # -- Stacks ----------------------------------------------------------------

    @abc.abstractmethod
    async def who_am_i(self) -> WhoAmIResult: ...

    @abc.abstractmethod
    async def create_stack(self, stack_name: str) -> None: ...

    @abc.abstractmethod
    async def select_stack(self, stack_name: str) -> None: ...

    @abc.abstractmethod
    async def remove_stack(self, stack_name: str) -> None: ...

    @abc.abstractmethod
    async def list_stacks(self) -> list[StackSummary]: ...

    # -- Plugins ---------------------------------------------------------------

    @abc.abstractmethod
    async def install_plugin(self, name: str, version: str, kind: PluginKind = PluginKind.RESOURCE) -> None: ...

    @abc.abstractmethod
    async def remove_plugin(
        self,
        name: str | None = None,
        version_range: str | None = None,
        kind: PluginKind = PluginKind.RESOURCE,
    ) -> None: ...

    @abc.abstractmethod
    async def list_plugins(self) -> list[PluginInfo]: ...

    # -- Lifecycle -------------------------------------------------------------

    def close(self) -> None:  # noqa: B027
        """Release resources held by the workspace.  Default: nothing to release."""

    # -- Command plumbing ------------------------------------------------------

    def command_env(self) -> dict[str, str]:
        """Environment overrides passed to every engine invocation."""
        env = dict(self.environment_variables)
        if self.pulumi_home:
            env[PULUMI_HOME_ENV] = self.pulumi_home
        return env

    async def run_command(self, args: Sequence[str]) -> CommandResult:
        logger.debug("pulumi {} (cwd={})", " ".join(_redact(args)), self.work_dir)
        return await self._cmd.run(list(args), self.work_dir, self.command_env())


def _redact(args: Sequence[str]) -> list[str]:
    """Hide the value of ``config set <key> <value> --secret`` in log output."""
    shown = list(args)
    if shown[:2] == ["config", "set"] and "--secret" in shown and len(shown) > 3:
        shown[3] = "[secret]"
    return shown
