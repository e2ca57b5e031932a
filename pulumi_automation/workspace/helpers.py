"""Stack helpers: build a ``LocalWorkspace`` and create/select a stack in one call.

Inline programs (``InlineProgramArgs``) run in process and need explicit
project settings, which are written to the (usually temporary) working
directory.  The program itself is attached to the returned stack as
``workspace.program``.  Local programs (``LocalProgramArgs``) already live on
disk at ``work_dir`` and pick up the settings files found there.

The returned stack's workspace is ready; the caller owns it and must call
``stack.workspace.close()`` when done.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from pulumi_automation.models.options import InlineProgramArgs, LocalProgramArgs
from pulumi_automation.workspace.local import LocalWorkspace
from pulumi_automation.workspace.stack import WorkspaceStack

if TYPE_CHECKING:
    from pulumi_automation.commands.base import PulumiCmd
    from pulumi_automation.workspace.base import Workspace

StackInit = Callable[[str, "Workspace"], Awaitable[WorkspaceStack]]


async def create_stack(
    args: InlineProgramArgs | LocalProgramArgs,
    *,
    cmd: PulumiCmd | None = None,
) -> WorkspaceStack:
    """Create a new stack.  Raises ``StackAlreadyExistsError`` if it exists."""
    return await _stack_helper(args, WorkspaceStack.create, cmd)


async def select_stack(
    args: InlineProgramArgs | LocalProgramArgs,
    *,
    cmd: PulumiCmd | None = None,
) -> WorkspaceStack:
    """Select an existing stack.  Raises ``StackNotFoundError`` if missing."""
    return await _stack_helper(args, WorkspaceStack.select, cmd)


async def create_or_select_stack(
    args: InlineProgramArgs | LocalProgramArgs,
    *,
    cmd: PulumiCmd | None = None,
) -> WorkspaceStack:
    """Select the stack, creating it if it does not exist."""
    return await _stack_helper(args, WorkspaceStack.create_or_select, cmd)


async def _stack_helper(
    args: InlineProgramArgs | LocalProgramArgs,
    init: StackInit,
    cmd: PulumiCmd | None,
) -> WorkspaceStack:
    # Validate before any directory is created.
    if isinstance(args, InlineProgramArgs) and args.project_settings is None:
        msg = "project_settings is required for inline programs"
        raise ValueError(msg)
    if not args.stack_name or not args.stack_name.strip():
        msg = "stack_name must not be blank"
        raise ValueError(msg)

    ws = await LocalWorkspace.create(args, cmd=cmd)
    try:
        return await init(args.stack_name, ws)
    except BaseException:
        ws.close()
        raise
