"""Shared test fixtures: a recording command runner and settings isolation.

Unit tests never touch a real ``pulumi`` binary.  ``RecordingCmd`` captures
every argument vector and answers from a table of canned outputs keyed by
the command's leading words.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field

import pytest

from pulumi_automation.commands.base import CommandResult
from pulumi_automation.errors import create_command_error
from pulumi_automation.settings import get_settings


@dataclass
class RecordedCall:
    args: list[str]
    work_dir: str
    env: dict[str, str]


@dataclass
class RecordingCmd:
    """In-memory ``PulumiCmd`` that records calls instead of spawning processes."""

    outputs: dict[tuple[str, ...], str] = field(default_factory=dict)
    failures: dict[tuple[str, ...], tuple[int, str]] = field(default_factory=dict)
    calls: list[RecordedCall] = field(default_factory=list)

    def reply(self, prefix: Sequence[str], stdout: str) -> None:
        self.outputs[tuple(prefix)] = stdout

    def fail(self, prefix: Sequence[str], stderr: str, code: int = 255) -> None:
        self.failures[tuple(prefix)] = (code, stderr)

    @property
    def argvs(self) -> list[list[str]]:
        return [c.args for c in self.calls]

    async def run(self, args: Sequence[str], work_dir: str, env: Mapping[str, str]) -> CommandResult:
        argv = list(args)
        self.calls.append(RecordedCall(args=argv, work_dir=work_dir, env=dict(env)))

        failure = _longest_match(self.failures, argv)
        if failure is not None:
            code, stderr = failure
            raise create_command_error(CommandResult(stdout="", stderr=stderr, code=code, command=tuple(argv)))

        stdout = _longest_match(self.outputs, argv)
        return CommandResult(stdout=stdout or "", stderr="", code=0, command=tuple(argv))


def _longest_match(table: dict[tuple[str, ...], object], argv: list[str]) -> object | None:
    best: tuple[str, ...] | None = None
    for prefix in table:
        if tuple(argv[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best)):
            best = prefix
    return table[best] if best is not None else None


@pytest.fixture
def cmd() -> RecordingCmd:
    return RecordingCmd()


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> Iterator[None]:
    """Point auto-created work dirs at a per-test temp root and reset the settings cache."""
    temp_root = tmp_path_factory.mktemp("workdirs")
    monkeypatch.setenv("PULUMI_AUTOMATION_TEMP_DIR", str(temp_root))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
