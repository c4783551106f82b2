"""Label tool: board labels and their assignment to cards."""

from __future__ import annotations

from typing import Any, Literal

from planka_mcp.lifespan import get_planka_client
from planka_mcp.planka.models import LabelColor, LabelUpdate
from planka_mcp.server import mcp
from planka_mcp.tools.validation import require

LabelAction = Literal["get_all", "create", "update", "delete", "add_to_card", "remove_from_card"]


async def label_manager(
    action: LabelAction,
    id: str | None = None,
    board_id: str | None = None,
    card_id: str | None = None,
    label_id: str | None = None,
    name: str | None = None,
    color: LabelColor | None = None,
    position: int | float | None = None,
) -> Any:
    """Manage kanban labels.

    Args:
        action: The action to perform.
        id: The ID of the label (update, delete).
        board_id: The ID of the board (get_all, create).
        card_id: The ID of the card (add_to_card, remove_from_card).
        label_id: The ID of the label to attach or detach.
        name: The name of the label (create, update).
        color: The color of the label (create, update).
        position: The position of the label (create, update).
    """
    client = get_planka_client()

    if action == "get_all":
        require(action, board_id=board_id)
        return await client.get_labels(board_id)

    if action == "create":
        require(action, board_id=board_id, name=name, color=color, position=position)
        return await client.create_label(board_id, name, color, position)

    if action == "update":
        require(action, id=id, name=name, color=color, position=position)
        return await client.update_label(id, LabelUpdate(name=name, color=color, position=position))

    if action == "delete":
        require(action, id=id)
        return await client.delete_label(id)

    if action == "add_to_card":
        require(action, card_id=card_id, label_id=label_id)
        return await client.add_label_to_card(card_id, label_id)

    if action == "remove_from_card":
        require(action, card_id=card_id, label_id=label_id)
        return await client.remove_label_from_card(card_id, label_id)

    raise ValueError(f"Unknown action: {action}")


mcp.tool(name="mcp_kanban_label_manager")(label_manager)
