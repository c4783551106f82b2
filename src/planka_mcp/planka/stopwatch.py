"""Card stopwatch helpers.

Planka stores a card's stopwatch as ``{"startedAt": <ISO time or null>, "total": <seconds>}``.
``total`` holds the time accumulated by previous runs; while running, the time
since ``startedAt`` is added on top.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from planka_mcp.planka.client import PlankaClient
from planka_mcp.planka.models import CardStopwatch, CardUpdate


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_time(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _format_time(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_duration(seconds: int) -> str:
    hours, remainder = divmod(max(seconds, 0), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def stopwatch_state(card: dict[str, Any], now: datetime | None = None) -> dict[str, Any]:
    """Describe the stopwatch of a card as returned by Planka."""
    stopwatch = card.get("stopwatch") or {}
    started_at = stopwatch.get("startedAt")
    total = int(stopwatch.get("total") or 0)

    elapsed = total
    if started_at:
        running_for = ((now or _now()) - _parse_time(started_at)).total_seconds()
        elapsed += max(int(running_for), 0)

    return {
        "cardId": card.get("id"),
        "isRunning": bool(started_at),
        "startedAt": started_at,
        "totalSeconds": total,
        "elapsedSeconds": elapsed,
        "formatted": format_duration(elapsed),
    }


async def get_card_stopwatch(client: PlankaClient, card_id: str) -> dict[str, Any]:
    card = await client.get_card(card_id)
    return stopwatch_state(card)


async def start_card_stopwatch(client: PlankaClient, card_id: str) -> dict[str, Any]:
    """Start the stopwatch. A running stopwatch is left untouched."""
    card = await client.get_card(card_id)
    state = stopwatch_state(card)
    if state["isRunning"]:
        return state

    update = CardUpdate(
        stopwatch=CardStopwatch(started_at=_format_time(_now()), total=state["totalSeconds"])
    )
    return stopwatch_state(await client.update_card(card_id, update))


async def stop_card_stopwatch(client: PlankaClient, card_id: str) -> dict[str, Any]:
    """Stop the stopwatch and fold the running interval into its total."""
    card = await client.get_card(card_id)
    state = stopwatch_state(card)
    if not state["isRunning"]:
        return state

    update = CardUpdate(stopwatch=CardStopwatch(started_at=None, total=state["elapsedSeconds"]))
    return stopwatch_state(await client.update_card(card_id, update))


async def reset_card_stopwatch(client: PlankaClient, card_id: str) -> dict[str, Any]:
    """Clear the stopwatch entirely."""
    card = await client.update_card(card_id, CardUpdate(stopwatch=None))
    return stopwatch_state(card)
