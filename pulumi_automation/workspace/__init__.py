"""Workspaces and stack handles."""

from pulumi_automation.workspace.base import Workspace
from pulumi_automation.workspace.helpers import create_or_select_stack, create_stack, select_stack
from pulumi_automation.workspace.local import LocalWorkspace
from pulumi_automation.workspace.stack import WorkspaceStack

__all__ = [
    "LocalWorkspace",
    "Workspace",
    "WorkspaceStack",
    "create_or_select_stack",
    "create_stack",
    "select_stack",
]
