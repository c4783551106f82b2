"""Card tools: card CRUD, moves, composite card operations and the card stopwatch."""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Any, Literal

from planka_mcp.lifespan import get_planka_client
from planka_mcp.planka import stopwatch
from planka_mcp.planka.aggregators import create_card_with_tasks, get_card_details
from planka_mcp.planka.errors import ToolValidationError
from planka_mcp.planka.models import CardUpdate
from planka_mcp.server import mcp
from planka_mcp.tools.validation import clean_name, present, require

CardAction = Literal[
    "get_all",
    "create",
    "get_one",
    "update",
    "move",
    "duplicate",
    "delete",
    "create_with_tasks",
    "get_details",
    "add_attachment",
]

StopwatchAction = Literal["start", "stop", "get", "reset"]


def _card_update(
    name: str | None,
    description: str | None,
    position: int | float | None,
    due_date: str | None,
    is_completed: bool | None,
) -> CardUpdate:
    fields = present(
        name=clean_name("Card", name) if name is not None else None,
        description=description,
        position=position,
        is_completed=is_completed,
    )
    if due_date is not None:
        # An empty string clears the due date.
        fields["due_date"] = due_date or None
    return CardUpdate(**fields)


def _read_attachment(file_path: str) -> tuple[str, bytes, str]:
    path = Path(file_path).expanduser()
    if not path.is_file():
        raise ToolValidationError(f"File not found: {file_path}")
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return path.name, path.read_bytes(), content_type


async def card_manager(
    action: CardAction,
    id: str | None = None,
    list_id: str | None = None,
    board_id: str | None = None,
    project_id: str | None = None,
    name: str | None = None,
    description: str | None = None,
    position: int | float | None = None,
    due_date: str | None = None,
    is_completed: bool | None = None,
    tasks: list[str] | None = None,
    comment: str | None = None,
    card_id: str | None = None,
    file_path: str | None = None,
) -> Any:
    """Manage kanban cards.

    Args:
        action: The action to perform.
        id: The ID of the card (get_one, update, move, duplicate, delete, add_attachment).
        list_id: The ID of the list (get_all, create, create_with_tasks, and the target of move).
        board_id: The target board when moving between boards.
        project_id: The target project when moving between projects.
        name: The name of the card.
        description: The description of the card.
        position: The position of the card (required for move and duplicate).
        due_date: The due date in ISO format. An empty string clears it on update.
        is_completed: Whether the card is completed.
        tasks: Task descriptions to create with create_with_tasks, in order.
        comment: Comment to add with create_with_tasks.
        card_id: The ID of the card to describe with get_details.
        file_path: Local file to upload with add_attachment.
    """
    client = get_planka_client()

    if action == "get_all":
        require(action, list_id=list_id)
        return await client.get_cards(list_id)

    if action == "create":
        require(action, list_id=list_id, name=name)
        return await client.create_card(
            list_id,
            clean_name("Card", name),
            description=description or "",
            position=position or 0,
            due_date=due_date or None,
        )

    if action == "get_one":
        require(action, id=id)
        return await client.get_card(id)

    if action == "update":
        require(action, id=id)
        update = _card_update(name, description, position, due_date, is_completed)
        if update.is_empty():
            raise ToolValidationError(
                "one of name, description, position, due_date, is_completed is required for update action"
            )
        return await client.update_card(id, update)

    if action == "move":
        require(action, id=id, list_id=list_id, position=position)
        return await client.move_card(id, list_id, position, board_id=board_id, project_id=project_id)

    if action == "duplicate":
        require(action, id=id, position=position)
        return await client.duplicate_card(id, position)

    if action == "delete":
        require(action, id=id)
        return await client.delete_card(id)

    if action == "create_with_tasks":
        require(action, list_id=list_id, name=name)
        return await create_card_with_tasks(
            client,
            list_id,
            clean_name("Card", name),
            description=description,
            position=position,
            tasks=tasks,
            comment=comment,
        )

    if action == "get_details":
        require(action, card_id=card_id)
        return await get_card_details(client, card_id)

    if action == "add_attachment":
        require(action, id=id, file_path=file_path)
        filename, content, content_type = _read_attachment(file_path)
        return await client.add_attachment(id, filename, content, content_type)

    raise ValueError(f"Unknown action: {action}")


async def card_stopwatch(action: StopwatchAction, id: str) -> dict[str, Any]:
    """Manage a card's stopwatch for time tracking.

    Args:
        action: start, stop, get or reset.
        id: The ID of the card.

    Returns:
        The stopwatch state: isRunning, startedAt, totalSeconds, elapsedSeconds and
        a HH:MM:SS rendering of the elapsed time.
    """
    require(action, id=id)
    client = get_planka_client()

    if action == "start":
        return await stopwatch.start_card_stopwatch(client, id)
    if action == "stop":
        return await stopwatch.stop_card_stopwatch(client, id)
    if action == "get":
        return await stopwatch.get_card_stopwatch(client, id)
    if action == "reset":
        return await stopwatch.reset_card_stopwatch(client, id)

    raise ValueError(f"Unknown action: {action}")


mcp.tool(name="mcp_kanban_card_manager")(card_manager)
mcp.tool(name="mcp_kanban_stopwatch")(card_stopwatch)
