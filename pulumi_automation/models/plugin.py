"""Read-only snapshots returned by introspection commands."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from pulumi_automation.models.enums import PluginKind


class PluginInfo(BaseModel):
    """One row of ``pulumi plugin ls --json``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    kind: PluginKind
    version: str | None = None
    path: str | None = None
    size: int = 0
    install_time: datetime | None = Field(default=None, alias="installTime")
    last_used_time: datetime | None = Field(default=None, alias="lastUsedTime")
    server_url: str | None = Field(default=None, alias="serverURL")


class WhoAmIResult(BaseModel):
    """Output of ``pulumi whoami``."""

    model_config = ConfigDict(frozen=True)

    user: str
