"""Async Planka REST API client using httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from planka_mcp.planka.errors import (
    PlankaAPIError,
    PlankaAuthenticationError,
    PlankaBadRequestError,
    PlankaConflictError,
    PlankaError,
    PlankaNotFoundError,
    PlankaPermissionError,
    PlankaTransportError,
    PlankaUnauthorizedError,
)
from planka_mcp.planka.models import (
    BoardMembershipUpdate,
    BoardUpdate,
    CardUpdate,
    CommentUpdate,
    LabelUpdate,
    ListUpdate,
    Position,
    TaskCreate,
    TaskUpdate,
)
from planka_mcp.planka.session import PlankaSession
from planka_mcp.version import VERSION

logger = logging.getLogger("planka_mcp")

API_PREFIX = "/api/"
ACCESS_TOKENS_PATH = "/api/access-tokens"
USER_AGENT = f"planka-mcp/{VERSION} httpx/{httpx.__version__}"

_ERROR_MAP: dict[int, type[PlankaAPIError]] = {
    400: PlankaBadRequestError,
    401: PlankaUnauthorizedError,
    403: PlankaPermissionError,
    404: PlankaNotFoundError,
    409: PlankaConflictError,
    422: PlankaBadRequestError,
}


def normalize_path(path: str) -> str:
    """Return ``path`` rooted under the /api/ prefix."""
    if path.startswith(API_PREFIX):
        return path
    return API_PREFIX + path.lstrip("/")


def build_url(base_url: str, path: str) -> str:
    return base_url.rstrip("/") + normalize_path(path)


def unwrap(data: Any) -> Any:
    """Strip Planka's {"item": ...} / {"items": [...]} envelope, if present."""
    if isinstance(data, dict):
        if "item" in data:
            return data["item"]
        if "items" in data:
            return data["items"]
    return data


def _parse_body(response: httpx.Response) -> Any:
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type and response.content:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


class PlankaClient:
    """Async wrapper around the Planka REST API.

    Every call is a single attempt: non-success statuses raise a PlankaAPIError
    subclass, network failures raise PlankaTransportError.
    """

    def __init__(
        self,
        base_url: str,
        session: PlankaSession,
        timeout: int = 30,
        verify: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._client = httpx.AsyncClient(
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            timeout=timeout,
            verify=verify,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def session(self) -> PlankaSession:
        return self._session

    async def close(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def login(self) -> str:
        """Exchange the session's credentials for an access token and store it."""
        if not self._session.has_credentials:
            raise PlankaAuthenticationError(
                "PLANKA_AGENT_EMAIL and PLANKA_AGENT_PASSWORD environment variables are required"
            )

        logger.debug("Authenticating with Planka as %s", self._session.email)
        try:
            body = await self.request(
                ACCESS_TOKENS_PATH,
                "POST",
                json=self._session.login_payload(),
                skip_auth=True,
            )
        except PlankaError as e:
            raise PlankaAuthenticationError(
                f"Failed to authenticate agent with Planka: {e}"
            ) from e

        token = body.get("item") if isinstance(body, dict) else None
        if not token:
            raise PlankaAuthenticationError(
                "Failed to authenticate agent with Planka: response carried no access token"
            )

        self._session.token = token
        logger.info("Authenticated with Planka as %s", self._session.email)
        return token

    async def _get_token(self) -> str:
        if self._session.token is not None:
            return self._session.token
        return await self.login()

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    async def request(
        self,
        path: str,
        method: str = "GET",
        *,
        json: Any = None,
        files: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        skip_auth: bool = False,
    ) -> Any:
        """Perform one call against Planka and return the parsed body.

        ``files`` (with optional ``data`` form fields) is sent as multipart and
        httpx picks the boundary header; ``json`` is sent as application/json.
        JSON responses are decoded, anything else comes back as text.
        """
        url = build_url(self._base_url, path)
        request_headers = dict(headers or {})

        if not skip_auth:
            try:
                token = await self._get_token()
            except PlankaAuthenticationError as e:
                raise PlankaAuthenticationError(
                    f"Failed to get authentication token for {method} {url}: {e}"
                ) from e
            request_headers["Authorization"] = f"Bearer {token}"

        kwargs: dict[str, Any] = {}
        if files is not None:
            kwargs["files"] = files
            if data is not None:
                kwargs["data"] = data
        elif json is not None:
            kwargs["json"] = json

        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v is not None}

        try:
            response = await self._client.request(method, url, headers=request_headers, **kwargs)
        except httpx.RequestError as e:
            raise PlankaTransportError(
                f"Failed to make Planka request to {url}: {e}", url=url
            ) from e

        body = _parse_body(response)
        if response.is_error:
            error_cls = _ERROR_MAP.get(response.status_code, PlankaAPIError)
            raise error_cls(
                f"Planka API {method} {url} failed ({response.status_code}): {body}",
                status_code=response.status_code,
                body=body,
                method=method,
                url=url,
            )
        return body

    async def _get(self, path: str, **params: Any) -> Any:
        return unwrap(await self.request(path, params=params))

    async def _post(self, path: str, json: Any) -> Any:
        return unwrap(await self.request(path, "POST", json=json))

    async def _patch(self, path: str, json: Any) -> Any:
        return unwrap(await self.request(path, "PATCH", json=json))

    async def _delete(self, path: str) -> Any:
        return unwrap(await self.request(path, "DELETE"))

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    async def get_projects(self, page: int | None = None, per_page: int | None = None) -> list[dict[str, Any]]:
        return await self._get("/api/projects", page=page, perPage=per_page)

    async def get_project(self, project_id: str) -> dict[str, Any]:
        return await self._get(f"/api/projects/{project_id}")

    # ------------------------------------------------------------------
    # Boards
    # ------------------------------------------------------------------

    async def get_boards(self, project_id: str) -> list[dict[str, Any]]:
        return await self._get(f"/api/projects/{project_id}/boards")

    async def create_board(
        self, project_id: str, name: str, position: Position, board_type: str | None = None
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"projectId": project_id, "name": name, "position": position}
        if board_type is not None:
            payload["type"] = board_type
        return await self._post(f"/api/projects/{project_id}/boards", json=payload)

    async def get_board(self, board_id: str) -> dict[str, Any]:
        return await self._get(f"/api/boards/{board_id}")

    async def update_board(self, board_id: str, update: BoardUpdate) -> dict[str, Any]:
        return await self._patch(f"/api/boards/{board_id}", json=update.to_payload())

    async def delete_board(self, board_id: str) -> dict[str, Any]:
        return await self._delete(f"/api/boards/{board_id}")

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    async def get_lists(self, board_id: str) -> list[dict[str, Any]]:
        return await self._get(f"/api/boards/{board_id}/lists")

    async def create_list(self, board_id: str, name: str, position: Position) -> dict[str, Any]:
        return await self._post(
            f"/api/boards/{board_id}/lists",
            json={"boardId": board_id, "name": name, "position": position},
        )

    async def get_list(self, list_id: str) -> dict[str, Any]:
        return await self._get(f"/api/lists/{list_id}")

    async def update_list(self, list_id: str, update: ListUpdate) -> dict[str, Any]:
        return await self._patch(f"/api/lists/{list_id}", json=update.to_payload())

    async def delete_list(self, list_id: str) -> dict[str, Any]:
        return await self._delete(f"/api/lists/{list_id}")

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    async def get_cards(self, list_id: str) -> list[dict[str, Any]]:
        return await self._get(f"/api/lists/{list_id}/cards")

    async def create_card(
        self,
        list_id: str,
        name: str,
        description: str = "",
        position: Position = 0,
        due_date: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "listId": list_id,
            "name": name,
            "description": description,
            "position": position,
        }
        if due_date is not None:
            payload["dueDate"] = due_date
        return await self._post(f"/api/lists/{list_id}/cards", json=payload)

    async def get_card(self, card_id: str) -> dict[str, Any]:
        return await self._get(f"/api/cards/{card_id}")

    async def update_card(self, card_id: str, update: CardUpdate) -> dict[str, Any]:
        return await self._patch(f"/api/cards/{card_id}", json=update.to_payload())

    async def move_card(
        self,
        card_id: str,
        list_id: str,
        position: Position,
        board_id: str | None = None,
        project_id: str | None = None,
    ) -> dict[str, Any]:
        fields: dict[str, Any] = {"list_id": list_id, "position": position}
        if board_id is not None:
            fields["board_id"] = board_id
        if project_id is not None:
            fields["project_id"] = project_id
        return await self.update_card(card_id, CardUpdate(**fields))

    async def duplicate_card(self, card_id: str, position: Position) -> dict[str, Any]:
        return await self._post(f"/api/cards/{card_id}/duplicate", json={"position": position})

    async def delete_card(self, card_id: str) -> dict[str, Any]:
        return await self._delete(f"/api/cards/{card_id}")

    async def add_attachment(
        self,
        card_id: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> dict[str, Any]:
        body = await self.request(
            f"/api/cards/{card_id}/attachments",
            "POST",
            files={"file": (filename, content, content_type)},
            data={"name": filename},
        )
        return unwrap(body)

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    async def get_tasks(self, card_id: str) -> list[dict[str, Any]]:
        return await self._get(f"/api/cards/{card_id}/tasks")

    async def create_task(
        self, card_id: str, name: str, position: Position | None = None
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"cardId": card_id, "name": name}
        if position is not None:
            payload["position"] = position
        return await self._post(f"/api/cards/{card_id}/tasks", json=payload)

    async def batch_create_tasks(self, tasks: list[TaskCreate]) -> list[dict[str, Any]]:
        """Create tasks one after another, stopping at the first failure."""
        created = []
        for task in tasks:
            created.append(await self.create_task(task.card_id, task.name, task.position))
        return created

    async def get_task(self, task_id: str) -> dict[str, Any]:
        return await self._get(f"/api/tasks/{task_id}")

    async def update_task(self, task_id: str, update: TaskUpdate) -> dict[str, Any]:
        return await self._patch(f"/api/tasks/{task_id}", json=update.to_payload())

    async def delete_task(self, task_id: str) -> dict[str, Any]:
        return await self._delete(f"/api/tasks/{task_id}")

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def get_comments(self, card_id: str) -> list[dict[str, Any]]:
        return await self._get(f"/api/cards/{card_id}/comments")

    async def create_comment(self, card_id: str, text: str) -> dict[str, Any]:
        return await self._post(
            f"/api/cards/{card_id}/comments", json={"cardId": card_id, "text": text}
        )

    async def get_comment(self, comment_id: str) -> dict[str, Any]:
        return await self._get(f"/api/comments/{comment_id}")

    async def update_comment(self, comment_id: str, update: CommentUpdate) -> dict[str, Any]:
        return await self._patch(f"/api/comments/{comment_id}", json=update.to_payload())

    async def delete_comment(self, comment_id: str) -> dict[str, Any]:
        return await self._delete(f"/api/comments/{comment_id}")

    # ------------------------------------------------------------------
    # Labels
    # ------------------------------------------------------------------

    async def get_labels(self, board_id: str) -> list[dict[str, Any]]:
        return await self._get(f"/api/boards/{board_id}/labels")

    async def create_label(
        self, board_id: str, name: str, color: str, position: Position
    ) -> dict[str, Any]:
        return await self._post(
            f"/api/boards/{board_id}/labels",
            json={"boardId": board_id, "name": name, "color": color, "position": position},
        )

    async def update_label(self, label_id: str, update: LabelUpdate) -> dict[str, Any]:
        return await self._patch(f"/api/labels/{label_id}", json=update.to_payload())

    async def delete_label(self, label_id: str) -> dict[str, Any]:
        return await self._delete(f"/api/labels/{label_id}")

    async def get_card_labels(self, card_id: str) -> list[dict[str, Any]]:
        return await self._get(f"/api/cards/{card_id}/labels")

    async def add_label_to_card(self, card_id: str, label_id: str) -> dict[str, Any]:
        return await self._post(f"/api/cards/{card_id}/labels", json={"labelId": label_id})

    async def remove_label_from_card(self, card_id: str, label_id: str) -> dict[str, Any]:
        return await self._delete(f"/api/cards/{card_id}/labels/{label_id}")

    # ------------------------------------------------------------------
    # Board memberships
    # ------------------------------------------------------------------

    async def get_board_memberships(self, board_id: str) -> list[dict[str, Any]]:
        return await self._get(f"/api/boards/{board_id}/memberships")

    async def create_board_membership(
        self,
        board_id: str,
        user_id: str,
        role: str,
        can_comment: bool | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"boardId": board_id, "userId": user_id, "role": role}
        if can_comment is not None:
            payload["canComment"] = can_comment
        return await self._post(f"/api/boards/{board_id}/memberships", json=payload)

    async def get_board_membership(self, membership_id: str) -> dict[str, Any]:
        return await self._get(f"/api/board-memberships/{membership_id}")

    async def update_board_membership(
        self, membership_id: str, update: BoardMembershipUpdate
    ) -> dict[str, Any]:
        return await self._patch(
            f"/api/board-memberships/{membership_id}", json=update.to_payload()
        )

    async def delete_board_membership(self, membership_id: str) -> dict[str, Any]:
        return await self._delete(f"/api/board-memberships/{membership_id}")

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def get_users(self) -> list[dict[str, Any]]:
        return await self._get("/api/users")

    async def find_user_id_by_email(self, email: str) -> str | None:
        """Return the id of the user with this email, or None if there is none."""
        for user in await self.get_users():
            if user.get("email") == email:
                return user.get("id")
        return None

    async def find_user_id_by_username(self, username: str) -> str | None:
        """Return the id of the user with this username, or None if there is none."""
        for user in await self.get_users():
            if user.get("username") == username:
                return user.get("id")
        return None
