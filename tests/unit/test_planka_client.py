"""Tests for PlankaClient using respx to mock httpx."""

import json

import httpx
import pytest
import respx
from httpx import Response

from planka_mcp.planka.client import PlankaClient, build_url, normalize_path, unwrap
from planka_mcp.planka.errors import (
    PlankaAPIError,
    PlankaBadRequestError,
    PlankaNotFoundError,
    PlankaTransportError,
)
from planka_mcp.planka.models import CardUpdate, TaskCreate
from planka_mcp.planka.session import PlankaSession

BASE_URL = "https://planka.test"
API = f"{BASE_URL}/api"


def echo_item(request: httpx.Request) -> Response:
    """Answer like Planka does for writes: the stored record inside an item envelope."""
    body = json.loads(request.content) if request.content else {}
    return Response(200, json={"item": {"id": "new-1", **body}})


def sent_json(route) -> dict:
    return json.loads(route.calls.last.request.content)


@pytest.fixture
async def client():
    session = PlankaSession("agent@example.com", "secret")
    session.token = "tok"
    c = PlankaClient(base_url=BASE_URL, session=session)
    yield c
    await c.close()


class TestUrls:
    def test_prefix_added(self):
        assert normalize_path("boards/1") == "/api/boards/1"
        assert normalize_path("/boards/1") == "/api/boards/1"

    def test_prefix_kept(self):
        assert normalize_path("/api/boards/1") == "/api/boards/1"

    def test_base_url_trailing_slash(self):
        assert build_url("https://planka.test/", "/api/cards/1") == "https://planka.test/api/cards/1"
        assert build_url("https://planka.test", "cards/1") == "https://planka.test/api/cards/1"

    def test_base_url_with_subpath(self):
        assert build_url("https://host/planka/", "/api/users") == "https://host/planka/api/users"

    def test_unwrap(self):
        assert unwrap({"item": {"id": "1"}}) == {"id": "1"}
        assert unwrap({"items": [{"id": "1"}], "included": {}}) == [{"id": "1"}]
        assert unwrap({"id": "1"}) == {"id": "1"}
        assert unwrap("plain") == "plain"


@respx.mock
@pytest.mark.asyncio
async def test_get_project(client):
    route = respx.get(f"{API}/projects/p1").mock(
        return_value=Response(200, json={"item": {"id": "p1", "name": "Roadmap"}, "included": {}})
    )
    result = await client.get_project("p1")
    assert result == {"id": "p1", "name": "Roadmap"}
    assert route.calls.last.request.headers["Authorization"] == "Bearer tok"


@respx.mock
@pytest.mark.asyncio
async def test_get_projects_passes_pagination(client):
    route = respx.get(f"{API}/projects").mock(
        return_value=Response(200, json={"items": [{"id": "p1"}]})
    )
    result = await client.get_projects(page=2, per_page=10)
    assert result == [{"id": "p1"}]
    params = route.calls.last.request.url.params
    assert params["page"] == "2"
    assert params["perPage"] == "10"


@respx.mock
@pytest.mark.asyncio
async def test_create_board_body(client):
    route = respx.post(f"{API}/projects/p1/boards").mock(side_effect=echo_item)
    result = await client.create_board("p1", "Backlog", 0)
    assert sent_json(route) == {"projectId": "p1", "name": "Backlog", "position": 0}
    assert "id" in result
    assert route.calls.last.request.headers["Content-Type"] == "application/json"


@respx.mock
@pytest.mark.asyncio
async def test_create_calls_keep_parent_ids(client):
    respx.post(f"{API}/boards/b1/lists").mock(side_effect=echo_item)
    respx.post(f"{API}/lists/l1/cards").mock(side_effect=echo_item)
    respx.post(f"{API}/cards/c1/tasks").mock(side_effect=echo_item)
    respx.post(f"{API}/cards/c1/comments").mock(side_effect=echo_item)
    respx.post(f"{API}/boards/b1/labels").mock(side_effect=echo_item)
    respx.post(f"{API}/boards/b1/memberships").mock(side_effect=echo_item)

    assert (await client.create_list("b1", "Todo", 1))["boardId"] == "b1"
    assert (await client.create_card("l1", "Card"))["listId"] == "l1"
    assert (await client.create_task("c1", "Task"))["cardId"] == "c1"
    assert (await client.create_comment("c1", "Hi"))["cardId"] == "c1"
    assert (await client.create_label("b1", "Bug", "berry-red", 1))["boardId"] == "b1"
    assert (await client.create_board_membership("b1", "u1", "editor"))["boardId"] == "b1"


@respx.mock
@pytest.mark.asyncio
async def test_create_card_defaults(client):
    route = respx.post(f"{API}/lists/l1/cards").mock(side_effect=echo_item)
    await client.create_card("l1", "Card")
    assert sent_json(route) == {"listId": "l1", "name": "Card", "description": "", "position": 0}


@respx.mock
@pytest.mark.asyncio
async def test_update_card_round_trip(client):
    route = respx.patch(f"{API}/cards/c1").mock(side_effect=echo_item)
    result = await client.update_card("c1", CardUpdate(name="X", position=3))
    assert sent_json(route) == {"name": "X", "position": 3}
    assert result["name"] == "X"
    assert result["position"] == 3


@respx.mock
@pytest.mark.asyncio
async def test_update_card_sends_explicit_null(client):
    route = respx.patch(f"{API}/cards/c1").mock(side_effect=echo_item)
    await client.update_card("c1", CardUpdate(due_date=None, is_completed=True))
    assert sent_json(route) == {"dueDate": None, "isCompleted": True}


@respx.mock
@pytest.mark.asyncio
async def test_move_card_sends_only_target_fields(client):
    route = respx.patch(f"{API}/cards/c1").mock(side_effect=echo_item)
    await client.move_card("c1", "l2", 1)
    assert route.call_count == 1
    assert sent_json(route) == {"listId": "l2", "position": 1}


@respx.mock
@pytest.mark.asyncio
async def test_move_card_across_boards(client):
    route = respx.patch(f"{API}/cards/c1").mock(side_effect=echo_item)
    await client.move_card("c1", "l2", 1, board_id="b2", project_id="p2")
    assert sent_json(route) == {"listId": "l2", "position": 1, "boardId": "b2", "projectId": "p2"}


@respx.mock
@pytest.mark.asyncio
async def test_duplicate_card(client):
    route = respx.post(f"{API}/cards/c1/duplicate").mock(side_effect=echo_item)
    await client.duplicate_card("c1", 5)
    assert sent_json(route) == {"position": 5}


@respx.mock
@pytest.mark.asyncio
async def test_delete_label_from_card(client):
    route = respx.delete(f"{API}/cards/c1/labels/lb1").mock(
        return_value=Response(200, json={"item": {"cardId": "c1", "labelId": "lb1"}})
    )
    result = await client.remove_label_from_card("c1", "lb1")
    assert route.called
    assert result["labelId"] == "lb1"


@respx.mock
@pytest.mark.asyncio
async def test_batch_create_tasks_in_order(client):
    respx.post(f"{API}/cards/c1/tasks").mock(side_effect=echo_item)
    respx.post(f"{API}/cards/c2/tasks").mock(side_effect=echo_item)
    result = await client.batch_create_tasks([
        TaskCreate(card_id="c1", name="first"),
        TaskCreate(cardId="c2", name="second", position=2),
    ])
    assert [t["name"] for t in result] == ["first", "second"]
    assert [t["cardId"] for t in result] == ["c1", "c2"]
    assert "position" not in result[0]


@respx.mock
@pytest.mark.asyncio
async def test_attachment_is_multipart(client):
    route = respx.post(f"{API}/cards/c1/attachments").mock(
        return_value=Response(200, json={"item": {"id": "a1", "name": "notes.txt"}})
    )
    result = await client.add_attachment("c1", "notes.txt", b"hello", "text/plain")
    request = route.calls.last.request
    assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert b"hello" in await request.aread()
    assert result["id"] == "a1"


@respx.mock
@pytest.mark.asyncio
async def test_non_json_response_returned_as_text(client):
    respx.delete(f"{API}/tasks/t1").mock(
        return_value=Response(200, text="OK", headers={"Content-Type": "text/plain"})
    )
    assert await client.delete_task("t1") == "OK"


@respx.mock
@pytest.mark.asyncio
async def test_not_found_error(client):
    respx.get(f"{API}/cards/missing").mock(
        return_value=Response(404, json={"code": "E_NOT_FOUND", "message": "Card not found"})
    )
    with pytest.raises(PlankaNotFoundError) as exc_info:
        await client.get_card("missing")
    err = exc_info.value
    assert err.status_code == 404
    assert err.body == {"code": "E_NOT_FOUND", "message": "Card not found"}
    assert err.url == f"{API}/cards/missing"
    assert err.method == "GET"


@respx.mock
@pytest.mark.asyncio
async def test_validation_error(client):
    respx.post(f"{API}/lists/l1/cards").mock(return_value=Response(400, text="Bad Request"))
    with pytest.raises(PlankaBadRequestError) as exc_info:
        await client.create_card("l1", "Card")
    assert exc_info.value.body == "Bad Request"


@respx.mock
@pytest.mark.asyncio
async def test_unmapped_status_is_generic_api_error(client):
    respx.get(f"{API}/boards/b1").mock(return_value=Response(503, text="down"))
    with pytest.raises(PlankaAPIError) as exc_info:
        await client.get_board("b1")
    assert type(exc_info.value) is PlankaAPIError
    assert exc_info.value.status_code == 503


@respx.mock
@pytest.mark.asyncio
async def test_transport_error_carries_url(client):
    route = respx.get(f"{API}/boards/b1").mock(side_effect=httpx.ConnectError("connection refused"))
    with pytest.raises(PlankaTransportError) as exc_info:
        await client.get_board("b1")
    assert exc_info.value.url == f"{API}/boards/b1"
    assert "connection refused" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert route.call_count == 1


@respx.mock
@pytest.mark.asyncio
async def test_redirect_loop_is_transport_error(client):
    respx.get(f"{API}/projects").mock(side_effect=httpx.TooManyRedirects("Exceeded maximum allowed redirects."))
    with pytest.raises(PlankaTransportError) as exc_info:
        await client.get_projects()
    assert exc_info.value.url == f"{API}/projects"
    assert isinstance(exc_info.value.__cause__, httpx.TooManyRedirects)


@respx.mock
@pytest.mark.asyncio
async def test_find_user_ids(client):
    respx.get(f"{API}/users").mock(
        return_value=Response(200, json={"items": [
            {"id": "u1", "email": "ann@example.com", "username": "ann"},
            {"id": "u2", "email": "bob@example.com", "username": "bob"},
        ]})
    )
    assert await client.find_user_id_by_email("bob@example.com") == "u2"
    assert await client.find_user_id_by_username("ann") == "u1"
    assert await client.find_user_id_by_email("nobody@example.com") is None


@respx.mock
@pytest.mark.asyncio
async def test_user_lookup_propagates_errors(client):
    respx.get(f"{API}/users").mock(return_value=Response(403, text="Forbidden"))
    with pytest.raises(PlankaAPIError):
        await client.find_user_id_by_username("ann")
