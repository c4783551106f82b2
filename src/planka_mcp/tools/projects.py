"""Project and board tool: list projects, manage boards, summarize a board."""

from __future__ import annotations

from typing import Any, Literal

from planka_mcp.lifespan import get_planka_client
from planka_mcp.planka.aggregators import get_board_summary
from planka_mcp.planka.models import BoardUpdate
from planka_mcp.server import mcp
from planka_mcp.tools.validation import clean_name, present, require

ProjectBoardAction = Literal[
    "get_projects",
    "get_project",
    "get_boards",
    "create_board",
    "get_board",
    "update_board",
    "delete_board",
    "get_board_summary",
]


async def project_board_manager(
    action: ProjectBoardAction,
    id: str | None = None,
    project_id: str | None = None,
    name: str | None = None,
    position: int | float | None = None,
    type: str | None = None,
    page: int | None = None,
    per_page: int | None = None,
    board_id: str | None = None,
    include_task_details: bool = False,
    include_comments: bool = False,
) -> Any:
    """Manage Planka projects and boards.

    Args:
        action: The action to perform.
        id: The ID of the project or board (get_project, get_board, update_board, delete_board).
        project_id: The ID of the project (get_boards, create_board).
        name: The name of the board (create_board, update_board).
        position: The position of the board (create_board, update_board).
        type: The type of the board (update_board, optional).
        page: Page number for get_projects, 1-indexed.
        per_page: Number of projects per page for get_projects.
        board_id: The ID of the board to summarize (get_board_summary).
        include_task_details: get_board_summary also fetches every card's tasks.
        include_comments: get_board_summary also fetches every card's comments.

    Returns:
        The Planka record(s) for the action.
    """
    client = get_planka_client()

    if action == "get_projects":
        require(action, page=page, per_page=per_page)
        return await client.get_projects(page, per_page)

    if action == "get_project":
        require(action, id=id)
        return await client.get_project(id)

    if action == "get_boards":
        require(action, project_id=project_id)
        return await client.get_boards(project_id)

    if action == "create_board":
        require(action, project_id=project_id, name=name, position=position)
        return await client.create_board(project_id, clean_name("Board", name), position)

    if action == "get_board":
        require(action, id=id)
        return await client.get_board(id)

    if action == "update_board":
        require(action, id=id, name=name, position=position)
        update = BoardUpdate(name=clean_name("Board", name), position=position, **present(type=type))
        return await client.update_board(id, update)

    if action == "delete_board":
        require(action, id=id)
        return await client.delete_board(id)

    if action == "get_board_summary":
        require(action, board_id=board_id)
        return await get_board_summary(
            client,
            board_id,
            include_task_details=include_task_details,
            include_comments=include_comments,
        )

    raise ValueError(f"Unknown action: {action}")


mcp.tool(name="mcp_kanban_project_board_manager")(project_board_manager)
