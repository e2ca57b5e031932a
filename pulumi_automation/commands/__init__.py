"""Command runners for the Pulumi CLI."""

from pulumi_automation.commands.base import CommandResult, PulumiCmd
from pulumi_automation.commands.local import LocalPulumiCmd

__all__ = ["CommandResult", "LocalPulumiCmd", "PulumiCmd"]
