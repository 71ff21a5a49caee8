import json
import sys
from io import StringIO

from gcloud_mcp.mcp_runtime import MCPServer, ToolResult, ToolSpec, _is_awaitable


def _run(monkeypatch, server: MCPServer, *requests) -> list[dict]:
    lines = [r if isinstance(r, str) else json.dumps(r) for r in requests]
    stdin = StringIO("\n".join(lines) + "\n")
    stdout = StringIO()
    monkeypatch.setattr(sys, "stdin", stdin)
    monkeypatch.setattr(sys, "stdout", stdout)

    server.run()

    return [json.loads(line) for line in stdout.getvalue().splitlines()]


def _text(text: str) -> ToolResult:
    return ToolResult(content=[{"type": "text", "text": text}])


def test_server_initialize(monkeypatch):
    server = MCPServer("test", "1.0", "inst")

    (msg,) = _run(monkeypatch, server, {"jsonrpc": "2.0", "id": 1, "method": "initialize"})

    assert msg["id"] == 1
    assert msg["result"]["serverInfo"] == {"name": "test", "version": "1.0"}
    assert msg["result"]["instructions"] == "inst"


def test_server_ignores_initialized_notification(monkeypatch):
    server = MCPServer("test", "1.0", "inst")

    out = _run(monkeypatch, server, {"jsonrpc": "2.0", "method": "notifications/initialized"})

    assert out == []


def test_server_tools_list(monkeypatch):
    server = MCPServer("test", "1.0", "inst")
    server.add_tool(ToolSpec("t1", "desc", {"type": "object"}, lambda x: _text("ok")))

    (msg,) = _run(monkeypatch, server, {"jsonrpc": "2.0", "id": 2, "method": "tools/list"})

    assert msg["result"]["tools"] == [
        {"name": "t1", "description": "desc", "inputSchema": {"type": "object"}}
    ]


def test_server_tools_call_sync_and_async(monkeypatch):
    async def async_handler(arguments):
        return ToolResult(
            content=[{"type": "text", "text": arguments["value"]}],
            is_error=True,
        )

    server = MCPServer("test", "1.0", "inst")
    server.add_tool(ToolSpec("sync", "desc", {}, lambda x: _text("ok")))
    server.add_tool(ToolSpec("async", "desc", {}, async_handler))

    first, second = _run(
        monkeypatch,
        server,
        {"id": 3, "method": "tools/call", "params": {"name": "sync", "arguments": {}}},
        {"id": 4, "method": "tools/call", "params": {"name": "async", "arguments": {"value": "v"}}},
    )

    assert first["result"]["content"] == [{"type": "text", "text": "ok"}]
    assert first["result"]["isError"] is False
    assert second["result"]["content"] == [{"type": "text", "text": "v"}]
    assert second["result"]["isError"] is True


def test_server_call_unknown(monkeypatch):
    server = MCPServer("test", "1.0", "inst")

    (msg,) = _run(monkeypatch, server, {"method": "tools/call", "params": {"name": "uk"}})

    assert "Unknown tool" in msg["error"]["message"]


def test_server_call_invalid_name(monkeypatch):
    server = MCPServer("test", "1.0", "inst")

    (msg,) = _run(monkeypatch, server, {"id": 9, "method": "tools/call", "params": {"name": 1}})

    assert msg["error"]["message"] == "Invalid tool name"


def test_server_call_error_is_masked(monkeypatch):
    def fail(x):
        raise ValueError("Fail")

    server = MCPServer("test", "1.0", "inst")
    server.add_tool(ToolSpec("t1", "desc", {}, fail))

    (msg,) = _run(monkeypatch, server, {"method": "tools/call", "params": {"name": "t1"}})

    # Exception details are masked; only a generic message reaches the client.
    assert msg["error"]["message"] == "Internal tool error"


def test_server_rejects_non_tool_result(monkeypatch):
    server = MCPServer("test", "1.0", "inst")
    server.add_tool(ToolSpec("t1", "desc", {}, lambda x: "plain"))

    (msg,) = _run(monkeypatch, server, {"method": "tools/call", "params": {"name": "t1"}})

    assert msg["error"]["message"] == "Internal tool error"


def test_server_invalid_json_and_requests(monkeypatch):
    server = MCPServer("test", "1.0", "inst")

    invalid, not_object, unsupported = _run(
        monkeypatch, server, "INVALID", "[1, 2]", {"id": 5, "method": "resources/list"}
    )

    assert invalid["error"]["message"] == "Invalid JSON"
    assert not_object["error"]["message"] == "Invalid JSON-RPC request"
    assert unsupported["error"]["message"] == "Unsupported method: resources/list"


def test_tools_property_is_a_copy():
    server = MCPServer("test", "1.0", "inst")
    server.add_tool(ToolSpec("t1", "desc", {}, lambda x: _text("ok")))

    server.tools.clear()

    assert list(server.tools) == ["t1"]


def test_is_awaitable():
    async def coro():
        return 1

    pending = coro()
    assert _is_awaitable(pending) is True
    pending.close()
    assert _is_awaitable(1) is False
