from planka_mcp.planka.client import PlankaClient
from planka_mcp.planka.errors import (
    CompositeOperationError,
    PlankaAPIError,
    PlankaAuthenticationError,
    PlankaBadRequestError,
    PlankaConflictError,
    PlankaError,
    PlankaNotFoundError,
    PlankaPermissionError,
    PlankaTransportError,
    PlankaUnauthorizedError,
    ToolValidationError,
)
from planka_mcp.planka.session import PlankaSession

__all__ = [
    "PlankaClient",
    "PlankaSession",
    "CompositeOperationError",
    "PlankaAPIError",
    "PlankaAuthenticationError",
    "PlankaBadRequestError",
    "PlankaConflictError",
    "PlankaError",
    "PlankaNotFoundError",
    "PlankaPermissionError",
    "PlankaTransportError",
    "PlankaUnauthorizedError",
    "ToolValidationError",
]
