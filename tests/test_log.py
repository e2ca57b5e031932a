"""Tests for logging setup and package settings."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from loguru import logger

from pulumi_automation.log import setup_logging
from pulumi_automation.models.config import ConfigValue
from pulumi_automation.models.options import LocalWorkspaceOptions
from pulumi_automation.settings import AutomationSettings, get_settings
from pulumi_automation.workspace.local import LocalWorkspace

if TYPE_CHECKING:
    from conftest import RecordingCmd


@pytest.fixture
def captured() -> Iterator[list[str]]:
    setup_logging("debug")
    messages: list[str] = []
    sink_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(sink_id)
    logger.disable("pulumi_automation")
    logging.basicConfig(handlers=[], force=True)


def test_stdlib_logging_is_intercepted(captured: list[str]) -> None:
    logging.getLogger("some.library").warning("hello from stdlib")

    assert any("hello from stdlib" in m for m in captured)


async def test_secret_config_values_are_redacted(captured: list[str], tmp_path: Path, cmd: RecordingCmd) -> None:
    ws = await LocalWorkspace.create(LocalWorkspaceOptions(work_dir=str(tmp_path)), cmd=cmd)

    await ws.set_config_value("dev", "proj:password", ConfigValue(value="hunter2", is_secret=True))
    await ws.set_config_value("dev", "proj:region", ConfigValue(value="us-west-2"))

    joined = "\n".join(captured)
    assert "hunter2" not in joined
    assert "config set proj:password [secret] --secret" in joined
    assert "config set proj:region us-west-2 --plaintext" in joined
    # The engine still receives the real value.
    assert ["config", "set", "proj:password", "hunter2", "--secret"] in cmd.argvs


def test_setup_logging_level_from_settings(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("PULUMI_AUTOMATION_LOG_LEVEL", "warning")
    get_settings.cache_clear()

    setup_logging()
    try:
        logger.debug("quiet detail")
        logger.warning("loud problem")
    finally:
        logger.remove()
        logger.disable("pulumi_automation")
        logging.basicConfig(handlers=[], force=True)

    err = capsys.readouterr().err
    assert "loud problem" in err
    assert "quiet detail" not in err


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PULUMI_AUTOMATION_TEMP_DIR", raising=False)
    settings = AutomationSettings(_env_file=None)

    assert settings.pulumi_command == "pulumi"
    assert settings.temp_dir is None
    assert settings.temp_dir_prefix == "automation-"
    assert settings.skip_update_check is True
    assert settings.log_level == "INFO"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PULUMI_AUTOMATION_TEMP_DIR_PREFIX", "ws-")
    monkeypatch.setenv("PULUMI_AUTOMATION_SKIP_UPDATE_CHECK", "false")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.temp_dir_prefix == "ws-"
    assert settings.skip_update_check is False
    assert get_settings() is settings
