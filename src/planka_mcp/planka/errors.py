"""Planka exception hierarchy."""

from __future__ import annotations

from typing import Any


class PlankaError(Exception):
    """Base exception for everything raised by planka-mcp."""


class ToolValidationError(PlankaError):
    """Raised when a tool call is missing an argument its action requires."""


class PlankaAuthenticationError(PlankaError):
    """Raised when credentials are missing or the login call is rejected."""

    def __init__(
        self,
        message: str = "Authentication failed. Check PLANKA_AGENT_EMAIL and PLANKA_AGENT_PASSWORD.",
    ):
        super().__init__(message)


class PlankaTransportError(PlankaError):
    """Raised when httpx fails the request without a usable response, such as a refused connection or a redirect loop."""

    def __init__(self, message: str, url: str):
        self.url = url
        super().__init__(message)


class PlankaAPIError(PlankaError):
    """Raised when Planka answers with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
        method: str | None = None,
        url: str | None = None,
    ):
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url
        super().__init__(message)


class PlankaBadRequestError(PlankaAPIError):
    """Raised when the request payload is rejected (400, 422)."""


class PlankaUnauthorizedError(PlankaAPIError):
    """Raised when the bearer token is not accepted (401)."""


class PlankaPermissionError(PlankaAPIError):
    """Raised when the agent user lacks access to the resource (403)."""


class PlankaNotFoundError(PlankaAPIError):
    """Raised when a resource is not found (404)."""


class PlankaConflictError(PlankaAPIError):
    """Raised when the request conflicts with the current remote state (409)."""


class CompositeOperationError(PlankaError):
    """Raised when a step of a multi-call operation fails.

    Steps that already succeeded are not rolled back; ``partial`` holds what was
    persisted remotely before the failure so the caller can inspect or clean it up.
    """

    def __init__(self, message: str, step: str, partial: dict[str, Any]):
        self.step = step
        self.partial = partial
        super().__init__(message)
