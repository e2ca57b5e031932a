"""Local filesystem settings store.

Discovers and persists settings files in a workspace directory::

    {work_dir}/Pulumi.yaml                 project settings
    {work_dir}/Pulumi.{settings_name}.yaml stack settings

Extensions are probed in the fixed order ``.yaml``, ``.yml``, ``.json``.  Reads
use the first file found; writes reuse that file's extension, or ``.yaml``
when there is none.  Writes replace the whole file.

Uses ``anyio.to_thread.run_sync`` for non-blocking file I/O.  Writes are
atomic: data is written to a temporary file in the same directory, then
renamed over the target.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from functools import partial
from pathlib import Path
from typing import Any

from anyio import to_thread

from pulumi_automation.errors import SettingsDecodeError
from pulumi_automation.models.project import ProjectSettings, ProjectSettingsModel
from pulumi_automation.models.stack import StackSettings
from pulumi_automation.serialization import LocalSerializer

SETTINGS_EXTENSIONS: tuple[str, ...] = (".yaml", ".yml", ".json")
DEFAULT_EXTENSION = ".yaml"


def stack_settings_name(stack_name: str) -> str:
    """File-name component for a stack: the segment after the last ``/``.

    ``"org/proj/dev"`` -> ``"dev"``; ``"dev"`` -> ``"dev"``.
    """
    return stack_name.rsplit("/", 1)[-1]


class LocalSettingsStore:
    """Local filesystem implementation of the SettingsStore protocol."""

    def __init__(self, work_dir: str | Path, serializer: LocalSerializer | None = None) -> None:
        self._work_dir = Path(work_dir)
        self._serializer = serializer or LocalSerializer()

    @property
    def work_dir(self) -> Path:
        return self._work_dir

    def _candidates(self, stem: str) -> list[Path]:
        return [self._work_dir / f"{stem}{ext}" for ext in SETTINGS_EXTENSIONS]

    @staticmethod
    def _stack_stem(stack_name: str) -> str:
        return f"Pulumi.{stack_settings_name(stack_name)}"

    # -- Project ---------------------------------------------------------------

    async def get_project_settings(self) -> ProjectSettings | None:
        found = await to_thread.run_sync(partial(_find_existing, self._candidates("Pulumi")))
        if found is None:
            return None

        content = await to_thread.run_sync(partial(_read_file, found))
        if found.suffix == ".json":
            return self._serializer.deserialize_json(content, ProjectSettings)

        model = self._serializer.deserialize_yaml(content, ProjectSettingsModel)
        return _convert(model, found)

    async def save_project_settings(self, settings: ProjectSettings) -> None:
        await self._save("Pulumi", settings.to_document())

    # -- Stack -----------------------------------------------------------------

    async def get_stack_settings(self, stack_name: str) -> StackSettings | None:
        found = await to_thread.run_sync(partial(_find_existing, self._candidates(self._stack_stem(stack_name))))
        if found is None:
            return None

        content = await to_thread.run_sync(partial(_read_file, found))
        if found.suffix == ".json":
            return self._serializer.deserialize_json(content, StackSettings)
        return self._serializer.deserialize_yaml(content, StackSettings)

    async def save_stack_settings(self, stack_name: str, settings: StackSettings) -> None:
        await self._save(self._stack_stem(stack_name), settings.to_document())

    # -- Shared ----------------------------------------------------------------

    async def _save(self, stem: str, document: dict[str, Any]) -> None:
        found = await to_thread.run_sync(partial(_find_existing, self._candidates(stem)))
        path = found or self._work_dir / f"{stem}{DEFAULT_EXTENSION}"

        if path.suffix == ".json":
            data = self._serializer.serialize_json(document)
        else:
            data = self._serializer.serialize_yaml(document)
        await to_thread.run_sync(partial(_atomic_write, path, data))


def _convert(model: ProjectSettingsModel, path: Path) -> ProjectSettings:
    try:
        return model.convert()
    except ValueError as exc:
        # pydantic.ValidationError is a ValueError
        msg = f"Invalid project settings in {path.name}: {exc}"
        raise SettingsDecodeError(msg) from exc


# -- Sync helpers (run in thread pool) -----------------------------------------


def _find_existing(candidates: list[Path]) -> Path | None:
    """First candidate that exists on disk, in precedence order."""
    for path in candidates:
        if path.is_file():
            return path
    return None


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename.

    Ensures readers never see a partially-written file.  The temp file is
    created in the same directory so ``os.replace`` is atomic on POSIX.
    """
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _read_file(path: Path) -> str:
    return path.read_text(encoding="utf-8")
