"""Shared enumerations used across the automation workspace."""

from __future__ import annotations

from enum import StrEnum

# -- Plugins -----------------------------------------------------------------


class PluginKind(StrEnum):
    """Plugin kinds understood by ``pulumi plugin``."""

    ANALYZER = "analyzer"
    LANGUAGE = "language"
    RESOURCE = "resource"


# -- Projects ----------------------------------------------------------------


class ProjectRuntimeName(StrEnum):
    """Well-known language runtimes.

    ``ProjectRuntime.name`` is a plain string so that runtimes not listed here
    still round-trip through the settings files.
    """

    NODEJS = "nodejs"
    PYTHON = "python"
    GO = "go"
    DOTNET = "dotnet"
    JAVA = "java"
    YAML = "yaml"

