"""Operations that chain several Planka calls and merge the results.

The first failing call aborts the operation. Nothing already written to Planka
is rolled back.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from planka_mcp.planka.client import PlankaClient
from planka_mcp.planka.errors import CompositeOperationError, PlankaError
from planka_mcp.planka.models import Position
from planka_mcp.utils.timing import timed

logger = logging.getLogger("planka_mcp")

# Planka spaces sibling positions by this step.
POSITION_GAP = 65535


@timed
async def create_card_with_tasks(
    client: PlankaClient,
    list_id: str,
    name: str,
    description: str | None = None,
    position: Position | None = None,
    tasks: list[str] | None = None,
    comment: str | None = None,
) -> dict[str, Any]:
    """Create a card, then its tasks in order, then an optional comment.

    Returns ``{"card", "tasks", "comment"}``; ``tasks`` and ``comment`` are
    present only when requested. If a step after the card fails, raises
    CompositeOperationError whose ``partial`` holds the card and the tasks
    created so far.
    """
    card = await client.create_card(
        list_id,
        name,
        description=description or "",
        position=position if position is not None else 0,
    )
    card_id = card["id"]
    result: dict[str, Any] = {"card": card}

    if tasks:
        created: list[dict[str, Any]] = []
        result["tasks"] = created
        for index, task_name in enumerate(tasks):
            try:
                created.append(
                    await client.create_task(card_id, task_name, position=(index + 1) * POSITION_GAP)
                )
            except PlankaError as e:
                raise CompositeOperationError(
                    f"Card {card_id} was created but task {index + 1} of {len(tasks)} "
                    f"({task_name!r}) failed: {e}",
                    step=f"create_task[{index}]",
                    partial=result,
                ) from e

    if comment:
        try:
            result["comment"] = await client.create_comment(card_id, comment)
        except PlankaError as e:
            raise CompositeOperationError(
                f"Card {card_id} was created but adding the comment failed: {e}",
                step="create_comment",
                partial=result,
            ) from e

    logger.info(
        "Created card %s with %d task(s)%s",
        card_id,
        len(result.get("tasks", [])),
        " and a comment" if "comment" in result else "",
    )
    return result


def task_stats(tasks: list[dict[str, Any]]) -> dict[str, Any]:
    total = len(tasks)
    completed = sum(1 for task in tasks if task.get("isCompleted"))
    percent = round(completed * 100 / total) if total else 0
    return {"total": total, "completed": completed, "percentComplete": percent}


@timed
async def get_card_details(client: PlankaClient, card_id: str) -> dict[str, Any]:
    """Fetch a card together with its tasks, comments and labels."""
    card = await client.get_card(card_id)
    tasks, comments, labels = await asyncio.gather(
        client.get_tasks(card_id),
        client.get_comments(card_id),
        client.get_card_labels(card_id),
    )
    return {
        **card,
        "tasks": tasks,
        "comments": comments,
        "labels": labels,
        "taskStats": task_stats(tasks),
    }


@timed
async def get_board_summary(
    client: PlankaClient,
    board_id: str,
    include_task_details: bool = False,
    include_comments: bool = False,
) -> dict[str, Any]:
    """Fetch a board with its lists and cards, optionally with each card's tasks and comments.

    Lists and cards keep the order Planka returns them in. With a detail flag
    set, one extra request is issued per card.
    """
    board = await client.get_board(board_id)
    lists = await client.get_lists(board_id)

    stats: dict[str, int] = {"lists": len(lists), "cards": 0, "completedCards": 0}
    if include_task_details:
        stats.update(tasks=0, completedTasks=0)
    if include_comments:
        stats["comments"] = 0

    summary_lists = []
    for board_list in lists:
        cards = await client.get_cards(board_list["id"])
        summary_cards = []
        for card in cards:
            entry = dict(card)
            if include_task_details:
                tasks = await client.get_tasks(card["id"])
                entry["tasks"] = tasks
                entry["taskStats"] = task_stats(tasks)
                stats["tasks"] += len(tasks)
                stats["completedTasks"] += entry["taskStats"]["completed"]
            if include_comments:
                entry["comments"] = await client.get_comments(card["id"])
                stats["comments"] += len(entry["comments"])
            if card.get("isCompleted"):
                stats["completedCards"] += 1
            summary_cards.append(entry)
        stats["cards"] += len(summary_cards)
        summary_lists.append({**board_list, "cards": summary_cards})

    return {"board": board, "lists": summary_lists, "stats": stats}
