"""Argument checks shared by the action-based tools. None of these touch the network."""

from __future__ import annotations

from typing import Any

from planka_mcp.planka.errors import ToolValidationError


def _missing(value: Any) -> bool:
    return value is None or value == "" or value == []


def require(action: str, **values: Any) -> None:
    """Raise ToolValidationError naming every argument ``action`` needs but did not get."""
    missing = [name for name, value in values.items() if _missing(value)]
    if not missing:
        return
    if len(missing) == 1:
        names = missing[0]
        verb = "is"
    else:
        names = ", ".join(missing[:-1]) + f" and {missing[-1]}"
        verb = "are"
    raise ToolValidationError(f"{names} {verb} required for {action} action")


def require_any(action: str, **values: Any) -> None:
    """Raise ToolValidationError unless at least one of ``values`` was given."""
    if all(_missing(value) for value in values.values()):
        raise ToolValidationError(
            f"one of {', '.join(values)} is required for {action} action"
        )


def clean_name(kind: str, name: str) -> str:
    sanitized = name.strip()
    if not sanitized:
        raise ToolValidationError(f"{kind} name cannot be empty")
    return sanitized


def present(**values: Any) -> dict[str, Any]:
    """Keep only the arguments the caller supplied."""
    return {key: value for key, value in values.items() if value is not None}
