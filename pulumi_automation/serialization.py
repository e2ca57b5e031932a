"""YAML/JSON codec for settings files and command output.

YAML goes through PyYAML's safe loader/dumper; JSON and model validation go
through pydantic.  All decode failures surface as ``SettingsDecodeError``.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

import yaml
from pydantic import TypeAdapter, ValidationError

from pulumi_automation.errors import SettingsDecodeError

T = TypeVar("T")


class LocalSerializer:
    """Encode/decode settings documents and engine JSON payloads."""

    # -- Encode ----------------------------------------------------------------

    def serialize_json(self, document: dict[str, Any]) -> str:
        return json.dumps(document, indent=4) + "\n"

    def serialize_yaml(self, document: dict[str, Any]) -> str:
        return yaml.safe_dump(document, sort_keys=False, default_flow_style=False, allow_unicode=True)

    # -- Decode ----------------------------------------------------------------

    def deserialize_json(self, content: str, tp: type[T] | Any) -> T:
        """Decode JSON text into ``tp`` (a model class or any type ``TypeAdapter`` accepts)."""
        try:
            return TypeAdapter(tp).validate_json(content)
        except ValidationError as exc:
            msg = f"Invalid JSON for {_type_name(tp)}: {exc}"
            raise SettingsDecodeError(msg) from exc

    def deserialize_yaml(self, content: str, tp: type[T] | Any) -> T:
        """Decode YAML text into ``tp``.  An empty document decodes as ``{}``."""
        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            msg = f"Invalid YAML for {_type_name(tp)}: {exc}"
            raise SettingsDecodeError(msg) from exc
        return self.validate(data, tp)

    def validate(self, data: Any, tp: type[T] | Any) -> T:
        try:
            return TypeAdapter(tp).validate_python(data)
        except ValidationError as exc:
            msg = f"Invalid document for {_type_name(tp)}: {exc}"
            raise SettingsDecodeError(msg) from exc


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or str(tp)
