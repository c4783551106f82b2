"""Comment tool: add, read, edit and delete comments on cards."""

from __future__ import annotations

from typing import Any, Literal

from planka_mcp.lifespan import get_planka_client
from planka_mcp.planka.models import CommentUpdate
from planka_mcp.server import mcp
from planka_mcp.tools.validation import require

CommentAction = Literal["get_all", "create", "get_one", "update", "delete"]


async def comment_manager(
    action: CommentAction,
    id: str | None = None,
    card_id: str | None = None,
    text: str | None = None,
) -> Any:
    """Manage card comments.

    Args:
        action: The action to perform.
        id: The ID of the comment (get_one, update, delete).
        card_id: The ID of the card (get_all, create).
        text: The comment text (create, update).
    """
    client = get_planka_client()

    if action == "get_all":
        require(action, card_id=card_id)
        return await client.get_comments(card_id)

    if action == "create":
        require(action, card_id=card_id, text=text)
        return await client.create_comment(card_id, text)

    if action == "get_one":
        require(action, id=id)
        return await client.get_comment(id)

    if action == "update":
        require(action, id=id, text=text)
        return await client.update_comment(id, CommentUpdate(text=text))

    if action == "delete":
        require(action, id=id)
        return await client.delete_comment(id)

    raise ValueError(f"Unknown action: {action}")


mcp.tool(name="mcp_kanban_comment_manager")(comment_manager)
