"""Project settings models (``Pulumi.yaml`` / ``Pulumi.json``).

``ProjectSettings`` is the in-memory shape handed to callers.  The on-disk YAML
is looser: scalars may come back as numbers, ``runtime`` may be a bare string or
a mapping, and empty keys decode as ``null``.  ``ProjectSettingsModel`` accepts
that shape and ``convert()`` normalises it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

# -- Runtime -----------------------------------------------------------------


class ProjectRuntimeOptions(BaseModel):
    """Language-specific runtime options."""

    typescript: bool | None = None
    binary: str | None = None
    virtualenv: str | None = None


class ProjectRuntime(BaseModel):
    """Runtime declaration.  Serialised as a bare name when there are no options."""

    name: str
    options: ProjectRuntimeOptions | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data

    @model_serializer(mode="wrap")
    def _collapse_bare_name(self, handler: Any) -> Any:
        if self.options is None:
            return str(self.name)
        return handler(self)


# -- Template ----------------------------------------------------------------


class ProjectTemplateConfigValue(BaseModel):
    description: str | None = None
    default: str | None = None
    secret: bool | None = None


class ProjectTemplate(BaseModel):
    """Template metadata used by ``pulumi new``."""

    description: str | None = None
    quickstart: str | None = None
    config: dict[str, ProjectTemplateConfigValue] | None = None
    important: bool | None = None


class ProjectBackend(BaseModel):
    url: str | None = None


# -- Top-level settings ------------------------------------------------------


class ProjectSettings(BaseModel):
    """Project-level settings document."""

    model_config = ConfigDict(extra="ignore")

    name: str
    runtime: ProjectRuntime
    main: str | None = None
    description: str | None = None
    author: str | None = None
    website: str | None = None
    license: str | None = None
    config: str | None = Field(default=None, description="Directory holding stack settings files")
    template: ProjectTemplate | None = None
    backend: ProjectBackend | None = None

    def to_document(self) -> dict[str, Any]:
        """On-disk mapping shared by the YAML and JSON encoders."""
        return self.model_dump(mode="json", exclude_none=True)


class ProjectSettingsModel(BaseModel):
    """Loose YAML-side shape of ``Pulumi.yaml``."""

    model_config = ConfigDict(extra="ignore")

    name: Any = None
    runtime: Any = None
    main: Any = None
    description: Any = None
    author: Any = None
    website: Any = None
    license: Any = None
    config: Any = None
    template: dict[str, Any] | None = None
    backend: dict[str, Any] | None = None

    def convert(self) -> ProjectSettings:
        """Normalise into ``ProjectSettings``.

        Raises ``pydantic.ValidationError`` when ``name`` or ``runtime`` are missing.
        """
        runtime = self.runtime
        if isinstance(runtime, dict) and runtime.get("options") is None:
            runtime = runtime.get("name")

        return ProjectSettings.model_validate(
            {
                "name": _scalar(self.name),
                "runtime": runtime,
                "main": _scalar(self.main),
                "description": _scalar(self.description),
                "author": _scalar(self.author),
                "website": _scalar(self.website),
                "license": _scalar(self.license),
                "config": _scalar(self.config),
                "template": self.template,
                "backend": self.backend,
            }
        )


def _scalar(value: Any) -> str | None:
    """YAML may hand back ints/floats/bools for string fields."""
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)
