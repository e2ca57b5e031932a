"""Unit tests for LocalSettingsStore.

No pulumi binary required -- uses a temporary directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from pulumi_automation.errors import SettingsDecodeError
from pulumi_automation.models.project import ProjectRuntime, ProjectRuntimeOptions, ProjectSettings
from pulumi_automation.models.stack import StackSettings, StackSettingsConfigValue
from pulumi_automation.store.local import LocalSettingsStore, stack_settings_name


@pytest.fixture
def store(tmp_path: Path) -> LocalSettingsStore:
    return LocalSettingsStore(tmp_path)


@pytest.fixture(
    params=[
        ProjectSettings(
            name="proj",
            runtime=ProjectRuntime(name="nodejs", options=ProjectRuntimeOptions(typescript=False)),
            description="A test project",
            main="src/",
        ),
        ProjectSettings(name="proj", runtime="python", description=""),
        ProjectSettings(name="proj", runtime=ProjectRuntime(name="python", options=ProjectRuntimeOptions())),
    ],
    ids=["full", "empty-description", "empty-runtime-options"],
)
def project(request: pytest.FixtureRequest) -> ProjectSettings:
    return request.param


@pytest.fixture
def stack() -> StackSettings:
    return StackSettings(
        secrets_provider="passphrase",
        encryption_salt="v1:salt",
        config={
            "aws:region": StackSettingsConfigValue(value="us-west-2"),
            "proj:password": StackSettingsConfigValue(value="v1:cipher", is_secure=True),
        },
    )


# ---------------------------------------------------------------------------
# Stack settings name
# ---------------------------------------------------------------------------


def test_stack_settings_name_qualified() -> None:
    assert stack_settings_name("org/proj/dev") == "dev"


def test_stack_settings_name_bare() -> None:
    assert stack_settings_name("dev") == "dev"


# ---------------------------------------------------------------------------
# Project settings
# ---------------------------------------------------------------------------


async def test_project_settings_absent(store: LocalSettingsStore) -> None:
    assert await store.get_project_settings() is None


async def test_project_settings_default_to_yaml(store: LocalSettingsStore, tmp_path: Path) -> None:
    await store.save_project_settings(ProjectSettings(name="proj", runtime="python"))

    assert (tmp_path / "Pulumi.yaml").is_file()
    assert not (tmp_path / "Pulumi.json").exists()
    assert "runtime: python" in (tmp_path / "Pulumi.yaml").read_text()


@pytest.mark.parametrize("ext", [".yaml", ".yml", ".json"])
async def test_project_settings_roundtrip(
    store: LocalSettingsStore, tmp_path: Path, project: ProjectSettings, ext: str
) -> None:
    """An existing file's extension is kept and the value survives a round trip."""
    (tmp_path / f"Pulumi{ext}").write_text("{}" if ext == ".json" else "name: old\nruntime: go\n")

    await store.save_project_settings(project)

    assert await store.get_project_settings() == project
    assert sorted(p.name for p in tmp_path.iterdir()) == [f"Pulumi{ext}"]


async def test_project_settings_yaml_wins_over_json(store: LocalSettingsStore, tmp_path: Path) -> None:
    (tmp_path / "Pulumi.yaml").write_text("name: from-yaml\nruntime: python\n")
    (tmp_path / "Pulumi.json").write_text('{"name": "from-json", "runtime": "go"}')

    result = await store.get_project_settings()
    assert result is not None
    assert result.name == "from-yaml"

    await store.save_project_settings(ProjectSettings(name="updated", runtime="python"))
    assert "updated" in (tmp_path / "Pulumi.yaml").read_text()
    assert "from-json" in (tmp_path / "Pulumi.json").read_text()


async def test_project_settings_yml_wins_over_json(store: LocalSettingsStore, tmp_path: Path) -> None:
    (tmp_path / "Pulumi.yml").write_text("name: from-yml\nruntime: python\n")
    (tmp_path / "Pulumi.json").write_text('{"name": "from-json", "runtime": "go"}')

    result = await store.get_project_settings()
    assert result is not None
    assert result.name == "from-yml"


async def test_project_settings_yaml_runtime_mapping(store: LocalSettingsStore, tmp_path: Path) -> None:
    """Runtime given as a mapping without options collapses to the bare name."""
    (tmp_path / "Pulumi.yaml").write_text("name: 42\nruntime:\n  name: python\ndescription:\n")

    result = await store.get_project_settings()
    assert result == ProjectSettings(name="42", runtime="python")


async def test_project_settings_json_bare_runtime(store: LocalSettingsStore, tmp_path: Path) -> None:
    (tmp_path / "Pulumi.json").write_text('{"name": "proj", "runtime": "dotnet", "backend": {"url": "file://~"}}')

    result = await store.get_project_settings()
    assert result is not None
    assert result.runtime == ProjectRuntime(name="dotnet")
    assert result.backend is not None
    assert result.backend.url == "file://~"


async def test_project_settings_malformed_yaml(store: LocalSettingsStore, tmp_path: Path) -> None:
    (tmp_path / "Pulumi.yaml").write_text("name: [unclosed\n")

    with pytest.raises(SettingsDecodeError):
        await store.get_project_settings()


async def test_project_settings_missing_runtime(store: LocalSettingsStore, tmp_path: Path) -> None:
    (tmp_path / "Pulumi.yaml").write_text("name: proj\n")

    with pytest.raises(SettingsDecodeError):
        await store.get_project_settings()


async def test_project_settings_malformed_json(store: LocalSettingsStore, tmp_path: Path) -> None:
    (tmp_path / "Pulumi.json").write_text("{not json")

    with pytest.raises(SettingsDecodeError):
        await store.get_project_settings()


# ---------------------------------------------------------------------------
# Stack settings
# ---------------------------------------------------------------------------


async def test_stack_settings_absent(store: LocalSettingsStore) -> None:
    assert await store.get_stack_settings("dev") is None


@pytest.mark.parametrize("ext", [".yaml", ".yml", ".json"])
async def test_stack_settings_roundtrip(
    store: LocalSettingsStore, tmp_path: Path, stack: StackSettings, ext: str
) -> None:
    (tmp_path / f"Pulumi.dev{ext}").write_text("{}")

    await store.save_stack_settings("dev", stack)

    assert await store.get_stack_settings("dev") == stack
    assert sorted(p.name for p in tmp_path.iterdir()) == [f"Pulumi.dev{ext}"]


async def test_stack_settings_qualified_name_uses_last_segment(
    store: LocalSettingsStore, tmp_path: Path, stack: StackSettings
) -> None:
    await store.save_stack_settings("acme/proj/dev", stack)

    assert (tmp_path / "Pulumi.dev.yaml").is_file()
    assert await store.get_stack_settings("dev") == stack
    assert await store.get_stack_settings("other-org/proj/dev") == stack


async def test_stack_settings_yaml_document_shape(store: LocalSettingsStore, tmp_path: Path) -> None:
    """Secure entries are written as ``{secure: ...}``; aliases are used as keys."""
    await store.save_stack_settings(
        "dev",
        StackSettings(
            secrets_provider="awskms://alias/key",
            config={"proj:token": StackSettingsConfigValue(value="v1:abc", is_secure=True)},
        ),
    )

    text = (tmp_path / "Pulumi.dev.yaml").read_text()
    assert "secretsprovider: awskms://alias/key" in text
    assert "secure: v1:abc" in text


async def test_stack_settings_scalar_config_values(store: LocalSettingsStore, tmp_path: Path) -> None:
    (tmp_path / "Pulumi.dev.yaml").write_text("config:\n  proj:count: 3\n  proj:enabled: true\n")

    result = await store.get_stack_settings("dev")
    assert result is not None
    assert result.config == {
        "proj:count": StackSettingsConfigValue(value="3"),
        "proj:enabled": StackSettingsConfigValue(value="true"),
    }


async def test_empty_stack_settings_roundtrip(store: LocalSettingsStore) -> None:
    await store.save_stack_settings("dev", StackSettings())

    assert await store.get_stack_settings("dev") == StackSettings()


async def test_stacks_isolated(store: LocalSettingsStore) -> None:
    await store.save_stack_settings("dev", StackSettings(secrets_provider="a"))
    await store.save_stack_settings("prod", StackSettings(secrets_provider="b"))

    dev = await store.get_stack_settings("dev")
    prod = await store.get_stack_settings("prod")
    assert dev is not None
    assert prod is not None
    assert dev.secrets_provider == "a"
    assert prod.secrets_provider == "b"
