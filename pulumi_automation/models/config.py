"""Configuration values exchanged with ``pulumi config``."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ConfigValue(BaseModel):
    """A single stack configuration entry.

    Decoded from the engine's JSON output, e.g. ``{"value": "x", "secret": true}``.
    When ``is_secret`` is set the value is stored encrypted by the engine; callers
    must not log or persist it in plaintext.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    value: str = ""
    is_secret: bool = Field(default=False, alias="secret")

    def __repr__(self) -> str:
        shown = "[secret]" if self.is_secret else repr(self.value)
        return f"ConfigValue(value={shown}, is_secret={self.is_secret})"

    __str__ = __repr__
