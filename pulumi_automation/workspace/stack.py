"""Stack handle bound to a workspace.

A ``WorkspaceStack`` is obtained through ``create``, ``select`` or
``create_or_select``; each makes sure the stack exists (and is selected) in
the engine before returning the handle.  Config helpers delegate to the
workspace with the stack's name.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from loguru import logger

from pulumi_automation.errors import StackNotFoundError

if TYPE_CHECKING:
    from pulumi_automation.models.config import ConfigValue
    from pulumi_automation.workspace.base import Workspace


class WorkspaceStack:
    """An isolated, independently configurable instance of a Pulumi program."""

    def __init__(self, name: str, workspace: Workspace) -> None:
        self.name = name
        self.workspace = workspace

    def __repr__(self) -> str:
        return f"WorkspaceStack(name={self.name!r}, work_dir={self.workspace.work_dir!r})"

    # -- Constructors ----------------------------------------------------------

    @classmethod
    async def create(cls, stack_name: str, workspace: Workspace) -> WorkspaceStack:
        """Create a new stack.  Raises ``StackAlreadyExistsError`` if it exists."""
        await workspace.create_stack(stack_name)
        return cls(stack_name, workspace)

    @classmethod
    async def select(cls, stack_name: str, workspace: Workspace) -> WorkspaceStack:
        """Select an existing stack.  Raises ``StackNotFoundError`` if missing."""
        await workspace.select_stack(stack_name)
        return cls(stack_name, workspace)

    @classmethod
    async def create_or_select(cls, stack_name: str, workspace: Workspace) -> WorkspaceStack:
        """Select the stack, creating it first if it does not exist."""
        try:
            await workspace.select_stack(stack_name)
        except StackNotFoundError:
            logger.debug("Stack {} not found, creating it", stack_name)
            await workspace.create_stack(stack_name)
        return cls(stack_name, workspace)

    # -- Config ----------------------------------------------------------------

    async def get_config_value(self, key: str) -> ConfigValue:
        return await self.workspace.get_config_value(self.name, key)

    async def get_config(self) -> dict[str, ConfigValue]:
        return await self.workspace.get_config(self.name)

    async def set_config_value(self, key: str, value: ConfigValue) -> None:
        await self.workspace.set_config_value(self.name, key, value)

    async def set_config(self, config: Mapping[str, ConfigValue]) -> None:
        await self.workspace.set_config(self.name, config)

    async def remove_config_value(self, key: str) -> None:
        await self.workspace.remove_config_value(self.name, key)

    async def remove_config(self, keys: Iterable[str]) -> None:
        await self.workspace.remove_config(self.name, keys)

    async def refresh_config(self) -> dict[str, ConfigValue]:
        return await self.workspace.refresh_config(self.name)
