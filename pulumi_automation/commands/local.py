"""Local command runner: spawns the Pulumi CLI as a subprocess.

Uses ``anyio.run_process`` so that the child process is terminated when the
awaiting task is cancelled.  Every invocation gets ``--non-interactive`` and
the current process environment, layered with the caller's overrides.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence

import anyio
from loguru import logger

from pulumi_automation.commands.base import CommandResult
from pulumi_automation.errors import create_command_error
from pulumi_automation.settings import get_settings

NON_INTERACTIVE_FLAG = "--non-interactive"


class LocalPulumiCmd:
    """``PulumiCmd`` implementation backed by a local ``pulumi`` binary."""

    def __init__(self, command: str | None = None, *, skip_update_check: bool | None = None) -> None:
        settings = get_settings()
        self._command = command or settings.pulumi_command
        self._skip_update_check = settings.skip_update_check if skip_update_check is None else skip_update_check

    @property
    def command(self) -> str:
        return self._command

    def build_env(self, overrides: Mapping[str, str]) -> dict[str, str]:
        """Process environment + update-check suppression + caller overrides."""
        env = dict(os.environ)
        if self._skip_update_check:
            env["PULUMI_SKIP_UPDATE_CHECK"] = "true"
        env.update(overrides)
        return env

    async def run(
        self,
        args: Sequence[str],
        work_dir: str,
        env: Mapping[str, str],
    ) -> CommandResult:
        argv = [self._command, *args, NON_INTERACTIVE_FLAG]
        completed = await anyio.run_process(
            argv,
            cwd=work_dir,
            env=self.build_env(env),
            check=False,
        )
        result = CommandResult(
            stdout=completed.stdout.decode("utf-8", errors="replace"),
            stderr=completed.stderr.decode("utf-8", errors="replace"),
            code=completed.returncode,
            command=tuple(argv),
        )
        if result.code != 0:
            logger.debug("pulumi exited with code {} (cwd={})", result.code, work_dir)
            raise create_command_error(result)
        return result
