from __future__ import annotations

from collections.abc import Iterator

import pytest
from starlette.testclient import TestClient

from config import Settings
from conftest import make_module
from core import AppServer
from http_app import STATUS_TEXT, create_app


@pytest.fixture
def client() -> Iterator[TestClient]:
    app = create_app(AppServer(), Settings(json_response=True))
    with TestClient(app) as test_client:
        yield test_client


def test_status_returns_fixed_text(client: TestClient) -> None:
    response = client.get("/status")

    assert response.status_code == 200
    assert response.text == STATUS_TEXT


def test_tools_lists_descriptors(client: TestClient) -> None:
    response = client.get("/tools")

    tools = response.json()["tools"]
    assert [tool["name"] for tool in tools] == ["echo", "reverseEcho"]
    assert tools[0]["description"] == "Echoes the message back to the client."
    assert tools[0]["inputSchema"]["required"] == ["message"]


def test_listing_is_stable_between_calls(client: TestClient) -> None:
    assert client.get("/tools").json() == client.get("/tools").json()


def test_call_success_envelope(client: TestClient) -> None:
    response = client.post("/tools/call", json={"name": "echo", "arguments": {"message": "hi"}})

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "result": "hi"}


def test_call_accepts_tool_name_key(client: TestClient) -> None:
    response = client.post("/tools/call", json={"toolName": "reverseEcho", "arguments": {"message": "abc"}})

    assert response.json() == {"status": "ok", "result": "cba"}


def test_unknown_tool_envelope(client: TestClient) -> None:
    response = client.post("/tools/call", json={"name": "nope", "arguments": {}})

    assert response.status_code == 404
    assert response.json() == {"status": "error", "kind": "UnknownTool", "message": "Unknown tool: nope"}


def test_missing_parameter_envelope(client: TestClient) -> None:
    response = client.post("/tools/call", json={"name": "echo", "arguments": {}})

    assert response.status_code == 400
    body = response.json()
    assert body["kind"] == "InvalidArguments"
    assert body["message"] == "message: required parameter is missing"


def test_malformed_body_is_rejected(client: TestClient) -> None:
    response = client.post("/tools/call", content=b"{not-json", headers={"content-type": "application/json"})

    assert response.status_code == 400
    assert response.json()["kind"] == "InvalidArguments"


def test_missing_name_is_rejected(client: TestClient) -> None:
    response = client.post("/tools/call", json={"arguments": {"message": "hi"}})

    assert response.status_code == 400
    assert response.json()["message"] == "name: required string field is missing"


def test_unserialisable_payload_is_an_error_envelope() -> None:
    async def numbers(arguments: dict) -> set:
        return {1, 2}

    app = create_app(AppServer(tool_modules=[make_module("numbers", numbers)]), Settings(json_response=True))
    with TestClient(app) as test_client:
        response = test_client.post("/tools/call", json={"name": "numbers", "arguments": {}})

    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "error"
    assert body["kind"] == "HandlerError"


MCP_HEADERS = {"accept": "application/json, text/event-stream", "content-type": "application/json"}


def mcp_post(client: TestClient, request_id: int, method: str, params: dict) -> dict:
    response = client.post(
        "/mcp/",
        json={"jsonrpc": "2.0", "id": request_id, "method": method, "params": params},
        headers=MCP_HEADERS,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == request_id
    return body["result"]


def mcp_initialize(client: TestClient) -> dict:
    return mcp_post(
        client,
        1,
        "initialize",
        {
            "protocolVersion": "2025-03-26",
            "capabilities": {},
            "clientInfo": {"name": "test-client", "version": "0.0.1"},
        },
    )


def test_mcp_initialize_reports_server_info(client: TestClient) -> None:
    result = mcp_initialize(client)

    assert result["serverInfo"]["name"] == "mcp-echo-server"
    assert "tools" in result["capabilities"]


def test_mcp_tools_call_reverse_echo(client: TestClient) -> None:
    mcp_initialize(client)

    result = mcp_post(client, 2, "tools/call", {"name": "reverseEcho", "arguments": {"message": "abc"}})

    assert result["isError"] is False
    assert result["content"][0]["text"] == "cba"


def test_mcp_tools_call_missing_message_is_error_result(client: TestClient) -> None:
    mcp_initialize(client)

    result = mcp_post(client, 3, "tools/call", {"name": "echo", "arguments": {}})

    assert result["isError"] is True
    assert result["content"][0]["text"].startswith("InvalidArguments: message: ")


def test_mcp_tools_list(client: TestClient) -> None:
    mcp_initialize(client)

    result = mcp_post(client, 4, "tools/list", {})

    assert [tool["name"] for tool in result["tools"]] == ["echo", "reverseEcho"]
