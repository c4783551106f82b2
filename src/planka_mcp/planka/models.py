"""Pydantic models for Planka request payloads.

Update models track which fields the caller actually set: a field that was
never assigned is left out of the request body, while a field explicitly set to
None is sent as null so Planka clears it.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

LabelColor = Literal[
    "berry-red",
    "pumpkin-orange",
    "lagoon-blue",
    "pink-tulip",
    "light-mud",
    "orange-peel",
    "bright-moss",
    "antique-blue",
    "dark-granite",
    "lagune-blue",
    "sunny-grass",
    "morning-sky",
    "light-orange",
    "midnight-blue",
    "tank-green",
    "gun-metal",
    "wet-moss",
    "red-burgundy",
    "light-concrete",
    "apricot-red",
    "desert-sand",
    "navy-blue",
    "egg-yellow",
    "coral-green",
    "light-cocoa",
]

MembershipRole = Literal["editor", "viewer"]

Position = int | float


class PartialUpdate(BaseModel):
    """Base for PATCH bodies. Only fields set by the caller are serialized."""

    model_config = {"populate_by_name": True}

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)

    def is_empty(self) -> bool:
        return not self.model_fields_set


class BoardUpdate(PartialUpdate):
    name: str | None = None
    position: Position | None = None
    type: str | None = None


class ListUpdate(PartialUpdate):
    name: str | None = None
    position: Position | None = None


class CardStopwatch(BaseModel):
    started_at: str | None = Field(alias="startedAt", default=None)
    total: int = 0

    model_config = {"populate_by_name": True}


class CardUpdate(PartialUpdate):
    name: str | None = None
    description: str | None = None
    position: Position | None = None
    due_date: str | None = Field(alias="dueDate", default=None)
    is_completed: bool | None = Field(alias="isCompleted", default=None)
    list_id: str | None = Field(alias="listId", default=None)
    board_id: str | None = Field(alias="boardId", default=None)
    project_id: str | None = Field(alias="projectId", default=None)
    stopwatch: CardStopwatch | None = None


class TaskUpdate(PartialUpdate):
    name: str | None = None
    position: Position | None = None
    is_completed: bool | None = Field(alias="isCompleted", default=None)


class CommentUpdate(PartialUpdate):
    text: str | None = None


class LabelUpdate(PartialUpdate):
    name: str | None = None
    color: LabelColor | None = None
    position: Position | None = None


class BoardMembershipUpdate(PartialUpdate):
    role: MembershipRole | None = None
    can_comment: bool | None = Field(alias="canComment", default=None)


class TaskCreate(BaseModel):
    """One entry of a batch task creation."""

    card_id: str = Field(alias="cardId")
    name: str
    position: Position | None = None

    model_config = {"populate_by_name": True}
