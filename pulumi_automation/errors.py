"""Domain exceptions raised by the workspace.

Command failures keep the captured output unmodified so callers can inspect
it.  A few well-known engine failures are mapped to dedicated subclasses by
matching stderr.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pulumi_automation.commands.base import CommandResult

_NOT_FOUND_RE = re.compile(r"no stack named.*found")
_ALREADY_EXISTS_RE = re.compile(r"stack '.*' already exists")
_CONFLICT_TEXT = "[409] Conflict: Another update is currently in progress."


class CommandError(RuntimeError):
    """Raised when the Pulumi CLI exits with a non-zero status."""

    def __init__(self, result: CommandResult) -> None:
        self.result = result
        super().__init__(f"code: {result.code}\n stdout: {result.stdout}\n stderr: {result.stderr}\n")

    @property
    def stdout(self) -> str:
        return self.result.stdout

    @property
    def stderr(self) -> str:
        return self.result.stderr

    @property
    def code(self) -> int:
        return self.result.code

    @property
    def command(self) -> tuple[str, ...]:
        return self.result.command


class StackNotFoundError(CommandError):
    """The selected stack does not exist."""


class StackAlreadyExistsError(CommandError):
    """``stack init`` targeted a name that is already taken."""


class ConcurrentUpdateError(CommandError):
    """Another update holds the stack lock."""


class SettingsDecodeError(ValueError):
    """Malformed YAML/JSON in a settings file or in command output."""


def create_command_error(result: CommandResult) -> CommandError:
    """Pick the most specific ``CommandError`` subclass for a failed result."""
    if _NOT_FOUND_RE.search(result.stderr):
        return StackNotFoundError(result)
    if _ALREADY_EXISTS_RE.search(result.stderr):
        return StackAlreadyExistsError(result)
    if _CONFLICT_TEXT in result.stderr:
        return ConcurrentUpdateError(result)
    return CommandError(result)
