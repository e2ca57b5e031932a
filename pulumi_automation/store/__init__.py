"""Settings store implementations for workspace persistence."""

from pulumi_automation.store.base import SettingsStore
from pulumi_automation.store.local import SETTINGS_EXTENSIONS, LocalSettingsStore, stack_settings_name

__all__ = ["SETTINGS_EXTENSIONS", "LocalSettingsStore", "SettingsStore", "stack_settings_name"]
