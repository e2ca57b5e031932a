"""Local workspace: a directory on disk driven through the ``pulumi`` CLI.

``Pulumi.yaml`` and ``Pulumi.<stack>.yaml`` in the working directory are the
intermediate format for project and stack settings, exactly as with a
CLI-driven project.  Saving project settings rewrites the project file;
setting config on a stack goes through the CLI, which rewrites the stack file.

Construction is two-phase:

1. ``LocalWorkspace(options)`` resolves the working directory synchronously
   (creating and owning a temporary one when none is given) and records the
   settings documents to persist.
2. ``await ws.ready()`` writes those documents concurrently and joins them.

``await LocalWorkspace.create(options)`` and ``async with LocalWorkspace(...)``
do both.  Every operation also awaits ``ready()`` before touching the
directory or the CLI, so a workspace used without the factory still observes
the initial settings.
"""

from __future__ import annotations

import asyncio
import os
import shutil
import tempfile
from collections.abc import Awaitable, Callable, Iterable, Mapping
from functools import partial
from typing import TYPE_CHECKING

from loguru import logger

from pulumi_automation.commands.local import LocalPulumiCmd
from pulumi_automation.models.config import ConfigValue
from pulumi_automation.models.enums import PluginKind
from pulumi_automation.models.options import LocalWorkspaceOptions
from pulumi_automation.models.plugin import PluginInfo, WhoAmIResult
from pulumi_automation.models.stack import StackSummary
from pulumi_automation.serialization import LocalSerializer
from pulumi_automation.settings import get_settings
from pulumi_automation.store.local import LocalSettingsStore
from pulumi_automation.workspace.base import Workspace

if TYPE_CHECKING:
    from types import TracebackType

    from pulumi_automation.commands.base import PulumiCmd
    from pulumi_automation.models.project import ProjectSettings
    from pulumi_automation.models.stack import StackSettings


class LocalWorkspace(Workspace):
    """Workspace backed by a local directory and the ``pulumi`` CLI.

    Config operations select the target stack and then issue the config
    command.  The selected stack is state shared by everything using this
    workspace: concurrent config calls for *different* stacks on the same
    instance can interleave their ``stack select`` calls and act on the wrong
    stack.  Use one workspace per concurrently managed stack, or serialise
    the calls.
    """

    def __init__(
        self,
        options: LocalWorkspaceOptions | None = None,
        *,
        cmd: PulumiCmd | None = None,
    ) -> None:
        super().__init__(cmd or LocalPulumiCmd())
        options = options or LocalWorkspaceOptions()

        work_dir = options.work_dir if options.work_dir and options.work_dir.strip() else None
        if work_dir is None:
            settings = get_settings()
            work_dir = tempfile.mkdtemp(prefix=settings.temp_dir_prefix, dir=settings.temp_dir)
            self._owns_work_dir = True
        else:
            self._owns_work_dir = False

        self._work_dir = work_dir
        self._pulumi_home = options.pulumi_home
        self._secrets_provider = options.secrets_provider
        self.program = options.program
        if options.environment_variables:
            self.environment_variables = dict(options.environment_variables)

        self._serializer = LocalSerializer()
        self._store = LocalSettingsStore(work_dir, self._serializer)

        # Initial settings are written by ready(), after the directory is fixed.
        self._pending_writes: list[Callable[[], Awaitable[None]]] = []
        if options.project_settings is not None:
            self._pending_writes.append(partial(self._store.save_project_settings, options.project_settings))
        for stack_name, stack_settings in (options.stack_settings or {}).items():
            self._pending_writes.append(partial(self._store.save_stack_settings, stack_name, stack_settings))
        self._ready_task: asyncio.Task[None] | None = None

    @classmethod
    async def create(
        cls,
        options: LocalWorkspaceOptions | None = None,
        *,
        cmd: PulumiCmd | None = None,
    ) -> LocalWorkspace:
        """Build a workspace and wait until its initial settings are on disk."""
        ws = cls(options, cmd=cmd)
        try:
            await ws.ready()
        except BaseException:
            ws.close()
            raise
        return ws

    # -- Identity --------------------------------------------------------------

    @property
    def work_dir(self) -> str:
        return self._work_dir

    @property
    def pulumi_home(self) -> str | None:
        return self._pulumi_home

    @property
    def secrets_provider(self) -> str | None:
        return self._secrets_provider

    @property
    def owns_work_dir(self) -> bool:
        """True when the working directory was created by this workspace."""
        return self._owns_work_dir

    # -- Readiness -------------------------------------------------------------

    async def ready(self) -> None:
        """Wait until every initial settings write has finished.

        The writes run concurrently.  If any of them failed, the first failure
        is raised here, and again on every later call.

        Cancelling a caller only cancels its wait: the writes keep running for
        the other callers.  If the shared task itself was cancelled, the next
        call starts the writes again.
        """
        if self._ready_task is None or self._ready_task.cancelled():
            self._ready_task = asyncio.create_task(self._write_initial_settings())
        await asyncio.shield(self._ready_task)

    async def _write_initial_settings(self) -> None:
        if not self._pending_writes:
            return
        results = await asyncio.gather(*(write() for write in self._pending_writes), return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
        logger.debug("Workspace ready: {} ({} settings files written)", self._work_dir, len(results))

    # -- Settings --------------------------------------------------------------

    async def get_project_settings(self) -> ProjectSettings | None:
        await self.ready()
        return await self._store.get_project_settings()

    async def save_project_settings(self, settings: ProjectSettings) -> None:
        await self.ready()
        await self._store.save_project_settings(settings)

    async def get_stack_settings(self, stack_name: str) -> StackSettings | None:
        await self.ready()
        return await self._store.get_stack_settings(stack_name)

    async def save_stack_settings(self, stack_name: str, settings: StackSettings) -> None:
        await self.ready()
        await self._store.save_stack_settings(stack_name, settings)

    # -- Config ----------------------------------------------------------------

    async def get_config_value(self, stack_name: str, key: str) -> ConfigValue:
        await self.select_stack(stack_name)
        result = await self.run_command(["config", "get", key, "--json"])
        return self._serializer.deserialize_json(result.stdout, ConfigValue)

    async def get_config(self, stack_name: str) -> dict[str, ConfigValue]:
        await self.select_stack(stack_name)
        return await self._get_selected_config()

    async def set_config_value(self, stack_name: str, key: str, value: ConfigValue) -> None:
        await self.select_stack(stack_name)
        await self._set_selected_config_value(key, value)

    async def set_config(self, stack_name: str, config: Mapping[str, ConfigValue]) -> None:
        # The CLI cannot mutate one stack's config concurrently: one key at a time.
        await self.select_stack(stack_name)
        for key, value in config.items():
            await self._set_selected_config_value(key, value)

    async def remove_config_value(self, stack_name: str, key: str) -> None:
        await self.select_stack(stack_name)
        await self.run_command(["config", "rm", key])

    async def remove_config(self, stack_name: str, keys: Iterable[str]) -> None:
        # Sequential for the same reason as set_config.
        await self.select_stack(stack_name)
        for key in keys:
            await self.run_command(["config", "rm", key])

    async def refresh_config(self, stack_name: str) -> dict[str, ConfigValue]:
        await self.select_stack(stack_name)
        await self.run_command(["config", "refresh", "--force"])
        return await self._get_selected_config()

    async def _get_selected_config(self) -> dict[str, ConfigValue]:
        result = await self.run_command(["config", "--show-secrets", "--json"])
        return self._serializer.deserialize_json(result.stdout, dict[str, ConfigValue])

    async def _set_selected_config_value(self, key: str, value: ConfigValue) -> None:
        secret_arg = "--secret" if value.is_secret else "--plaintext"
        await self.run_command(["config", "set", key, value.value, secret_arg])

    # -- Stacks ----------------------------------------------------------------

    async def who_am_i(self) -> WhoAmIResult:
        await self.ready()
        result = await self.run_command(["whoami"])
        return WhoAmIResult(user=result.stdout.strip())

    async def create_stack(self, stack_name: str) -> None:
        _require_stack_name(stack_name)
        await self.ready()
        args = ["stack", "init", stack_name]
        if self._secrets_provider and self._secrets_provider.strip():
            args.extend(["--secrets-provider", self._secrets_provider])
        await self.run_command(args)
        logger.info("Stack created: {} (work_dir={})", stack_name, self._work_dir)

    async def select_stack(self, stack_name: str) -> None:
        _require_stack_name(stack_name)
        await self.ready()
        await self.run_command(["stack", "select", stack_name])

    async def remove_stack(self, stack_name: str) -> None:
        _require_stack_name(stack_name)
        await self.ready()
        await self.run_command(["stack", "rm", "--yes", stack_name])
        logger.info("Stack removed: {}", stack_name)

    async def list_stacks(self) -> list[StackSummary]:
        await self.ready()
        result = await self.run_command(["stack", "ls", "--json"])
        return self._serializer.deserialize_json(result.stdout, list[StackSummary] | None) or []

    # -- Plugins ---------------------------------------------------------------

    async def install_plugin(self, name: str, version: str, kind: PluginKind = PluginKind.RESOURCE) -> None:
        await self.ready()
        await self.run_command(["plugin", "install", PluginKind(kind).value, name, version])

    async def remove_plugin(
        self,
        name: str | None = None,
        version_range: str | None = None,
        kind: PluginKind = PluginKind.RESOURCE,
    ) -> None:
        await self.ready()
        args = ["plugin", "rm", PluginKind(kind).value]
        if name and name.strip():
            args.append(name)
        if version_range and version_range.strip():
            args.append(version_range)
        args.append("--yes")
        await self.run_command(args)

    async def list_plugins(self) -> list[PluginInfo]:
        await self.ready()
        result = await self.run_command(["plugin", "ls", "--json"])
        return self._serializer.deserialize_json(result.stdout, list[PluginInfo] | None) or []

    # -- Lifecycle -------------------------------------------------------------

    def close(self) -> None:
        """Delete the working directory if this workspace created it.

        Never raises: a directory that cannot be removed (open handles,
        permissions) is left for the OS temp cleaner.
        """
        if self._ready_task is not None and not self._ready_task.done():
            self._ready_task.cancel()
        if not self._owns_work_dir or not self._work_dir or not os.path.isdir(self._work_dir):
            return
        try:
            shutil.rmtree(self._work_dir)
        except OSError:
            logger.opt(exception=True).debug("Could not remove work dir {}", self._work_dir)

    async def __aenter__(self) -> LocalWorkspace:
        try:
            await self.ready()
        except BaseException:
            self.close()
            raise
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _require_stack_name(stack_name: str) -> None:
    if not stack_name or not stack_name.strip():
        msg = "stack_name must not be blank"
        raise ValueError(msg)
