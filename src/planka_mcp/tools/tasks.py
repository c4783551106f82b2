"""Task tool: checklist items on a card."""

from __future__ import annotations

from typing import Any, Literal

from planka_mcp.lifespan import get_planka_client
from planka_mcp.planka.errors import ToolValidationError
from planka_mcp.planka.models import TaskCreate, TaskUpdate
from planka_mcp.server import mcp
from planka_mcp.tools.validation import present, require

TaskAction = Literal["get_all", "create", "batch_create", "get_one", "update", "delete", "complete_task"]


async def task_manager(
    action: TaskAction,
    id: str | None = None,
    card_id: str | None = None,
    name: str | None = None,
    is_completed: bool | None = None,
    position: int | float | None = None,
    tasks: list[TaskCreate] | None = None,
) -> Any:
    """Manage kanban tasks.

    Args:
        action: The action to perform.
        id: The ID of the task (get_one, update, delete, complete_task).
        card_id: The ID of the card (get_all, create).
        name: The name of the task.
        is_completed: Whether the task is completed (update).
        position: The position of the task.
        tasks: Tasks to create with batch_create, each with cardId, name and optional position.
            They are created in order and creation stops at the first failure.
    """
    client = get_planka_client()

    if action == "get_all":
        require(action, card_id=card_id)
        return await client.get_tasks(card_id)

    if action == "create":
        require(action, card_id=card_id, name=name)
        return await client.create_task(card_id, name, position=position)

    if action == "batch_create":
        require(action, tasks=tasks)
        return await client.batch_create_tasks(tasks)

    if action == "get_one":
        require(action, id=id)
        return await client.get_task(id)

    if action == "update":
        require(action, id=id)
        update = TaskUpdate(**present(name=name, position=position, is_completed=is_completed))
        if update.is_empty():
            raise ToolValidationError(
                "one of name, position, is_completed is required for update action"
            )
        return await client.update_task(id, update)

    if action == "complete_task":
        require(action, id=id)
        return await client.update_task(id, TaskUpdate(is_completed=True))

    if action == "delete":
        require(action, id=id)
        return await client.delete_task(id)

    raise ValueError(f"Unknown action: {action}")


mcp.tool(name="mcp_kanban_task_manager")(task_manager)
