"""Board membership tool: who can see and edit a board."""

from __future__ import annotations

import logging
from typing import Any, Literal

from planka_mcp.lifespan import get_planka_client
from planka_mcp.planka.client import PlankaClient
from planka_mcp.planka.errors import PlankaError, ToolValidationError
from planka_mcp.planka.models import BoardMembershipUpdate, MembershipRole
from planka_mcp.server import mcp
from planka_mcp.tools.validation import present, require, require_any

logger = logging.getLogger("planka_mcp")

MembershipAction = Literal["get_all", "create", "get_one", "update", "delete"]


async def _lookup_user_id(
    client: PlankaClient, user_email: str | None, username: str | None
) -> str | None:
    """Best-effort lookup: a failed request is logged and treated as no match."""
    try:
        if user_email:
            return await client.find_user_id_by_email(user_email)
        return await client.find_user_id_by_username(username)
    except PlankaError as e:
        logger.warning("User lookup for %s failed: %s", user_email or username, e)
        return None


async def membership_manager(
    action: MembershipAction,
    id: str | None = None,
    board_id: str | None = None,
    user_id: str | None = None,
    user_email: str | None = None,
    username: str | None = None,
    role: MembershipRole | None = None,
    can_comment: bool | None = None,
) -> Any:
    """Manage board memberships.

    Args:
        action: The action to perform.
        id: The ID of the membership (get_one, update, delete).
        board_id: The ID of the board (get_all, create).
        user_id: The ID of the user to add (create).
        user_email: Email of the user to add, used when user_id is not known (create).
        username: Username of the user to add, used when user_id is not known (create).
        role: editor or viewer (create, update).
        can_comment: Whether a viewer may comment (create, update).
    """
    client = get_planka_client()

    if action == "get_all":
        require(action, board_id=board_id)
        return await client.get_board_memberships(board_id)

    if action == "create":
        require(action, board_id=board_id, role=role)
        require_any(action, user_id=user_id, user_email=user_email, username=username)
        if not user_id:
            user_id = await _lookup_user_id(client, user_email, username)
            if user_id is None:
                raise ToolValidationError(f"No Planka user found for {user_email or username}")
        return await client.create_board_membership(board_id, user_id, role, can_comment=can_comment)

    if action == "get_one":
        require(action, id=id)
        return await client.get_board_membership(id)

    if action == "update":
        require(action, id=id)
        update = BoardMembershipUpdate(**present(role=role, can_comment=can_comment))
        if update.is_empty():
            raise ToolValidationError("one of role, can_comment is required for update action")
        return await client.update_board_membership(id, update)

    if action == "delete":
        require(action, id=id)
        return await client.delete_board_membership(id)

    raise ValueError(f"Unknown action: {action}")


mcp.tool(name="mcp_kanban_membership_manager")(membership_manager)
