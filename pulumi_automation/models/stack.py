"""Stack settings and stack listing models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator


class StackSettingsConfigValue(BaseModel):
    """One entry of a stack settings ``config`` block.

    On disk an entry is either a plain scalar (``aws:region: us-west-2``) or an
    encrypted mapping (``db:password: {secure: v1:abc...}``).
    """

    value: str
    is_secure: bool = False

    @model_validator(mode="before")
    @classmethod
    def _from_document(cls, data: Any) -> Any:
        if isinstance(data, dict):
            if "secure" in data:
                return {"value": data["secure"], "is_secure": True}
            return data
        if isinstance(data, bool):
            return {"value": str(data).lower()}
        if isinstance(data, int | float | str):
            return {"value": str(data)}
        return data

    @model_serializer
    def _to_document(self) -> Any:
        if self.is_secure:
            return {"secure": self.value}
        return self.value


class StackSettings(BaseModel):
    """Per-stack settings document (``Pulumi.<stack>.yaml``)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    secrets_provider: str | None = Field(default=None, alias="secretsprovider")
    encrypted_key: str | None = Field(default=None, alias="encryptedkey")
    encryption_salt: str | None = Field(default=None, alias="encryptionsalt")
    config: dict[str, StackSettingsConfigValue] | None = None

    def to_document(self) -> dict[str, Any]:
        """On-disk mapping shared by the YAML and JSON encoders."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class StackSummary(BaseModel):
    """One row of ``pulumi stack ls --json``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    current: bool = False
    last_update: datetime | None = Field(default=None, alias="lastUpdate")
    update_in_progress: bool = Field(default=False, alias="updateInProgress")
    resource_count: int | None = Field(default=None, alias="resourceCount")
    url: str | None = None
