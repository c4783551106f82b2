"""List tool: create, read, rename/reorder and delete lists on a board."""

from __future__ import annotations

from typing import Any, Literal

from planka_mcp.lifespan import get_planka_client
from planka_mcp.planka.models import ListUpdate
from planka_mcp.server import mcp
from planka_mcp.tools.validation import clean_name, require

ListAction = Literal["get_all", "create", "get_one", "update", "delete"]


async def list_manager(
    action: ListAction,
    id: str | None = None,
    board_id: str | None = None,
    name: str | None = None,
    position: int | float | None = None,
) -> Any:
    """Manage kanban lists.

    Args:
        action: The action to perform.
        id: The ID of the list (get_one, update, delete).
        board_id: The ID of the board (get_all, create).
        name: The name of the list (create, update).
        position: The position of the list (create, update).
    """
    client = get_planka_client()

    if action == "get_all":
        require(action, board_id=board_id)
        return await client.get_lists(board_id)

    if action == "create":
        require(action, board_id=board_id, name=name, position=position)
        return await client.create_list(board_id, clean_name("List", name), position)

    if action == "get_one":
        require(action, id=id)
        return await client.get_list(id)

    if action == "update":
        require(action, id=id, name=name, position=position)
        return await client.update_list(id, ListUpdate(name=clean_name("List", name), position=position))

    if action == "delete":
        require(action, id=id)
        return await client.delete_list(id)

    raise ValueError(f"Unknown action: {action}")


mcp.tool(name="mcp_kanban_list_manager")(list_manager)
