"""Command runner interface for invoking the Pulumi CLI.

The workspace never spawns processes itself; it hands an argument vector, a
working directory and an environment to a ``PulumiCmd``.  The interface is
async so that tests can substitute an in-memory recorder for the real binary.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of a single CLI invocation."""

    stdout: str
    stderr: str
    code: int
    command: tuple[str, ...] = field(default_factory=tuple)


@runtime_checkable
class PulumiCmd(Protocol):
    """Async protocol for running the engine's CLI."""

    async def run(
        self,
        args: Sequence[str],
        work_dir: str,
        env: Mapping[str, str],
    ) -> CommandResult:
        """Run ``pulumi <args>`` in ``work_dir``.

        ``env`` holds the overrides to layer on top of the process environment.
        Raises ``CommandError`` (or a subclass) on a non-zero exit.
        """
        ...
