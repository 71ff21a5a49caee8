"""Minimal MCP runtime speaking line-delimited JSON-RPC over stdio."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import cast

from pydantic import BaseModel

logger = logging.getLogger(__name__)

_PROTOCOL_VERSION = "2024-11-05"


@dataclass
class ToolSpec:
    name: str
    description: str
    input_schema: dict[str, object]
    handler: Callable[[dict[str, object]], "ToolResult | Awaitable[ToolResult]"]


class ToolResult(BaseModel):
    content: list[dict[str, object]]
    structured_content: dict[str, object] | None = None
    is_error: bool = False


class MCPServer:
    def __init__(self, name: str, version: str, instructions: str) -> None:
        self._name = name
        self._version = version
        self._instructions = instructions
        self._tools: dict[str, ToolSpec] = {}

    @property
    def tools(self) -> dict[str, ToolSpec]:
        return dict(self._tools)

    def add_tool(self, tool: ToolSpec) -> None:
        self._tools[tool.name] = tool

    def run(self) -> None:
        loop = asyncio.new_event_loop()
        try:
            for line in sys.stdin:
                line = line.strip()
                if not line:
                    continue
                try:
                    request = json.loads(line)
                except json.JSONDecodeError:
                    self._write_error(None, "Invalid JSON")
                    continue
                if not isinstance(request, dict):
                    self._write_error(None, "Invalid JSON-RPC request")
                    continue
                self._dispatch(loop, request)
        finally:
            loop.close()

    def _dispatch(self, loop: asyncio.AbstractEventLoop, request: dict[str, object]) -> None:
        request_id = request.get("id")
        method = request.get("method")
        raw_params = request.get("params", {})
        params = raw_params if isinstance(raw_params, dict) else {}

        if method == "initialize":
            self._write_result(
                request_id,
                {
                    "protocolVersion": _PROTOCOL_VERSION,
                    "serverInfo": {"name": self._name, "version": self._version},
                    "instructions": self._instructions,
                    "capabilities": {"tools": {}},
                },
            )
        elif method == "notifications/initialized":
            return
        elif method == "tools/list":
            tools = [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "inputSchema": tool.input_schema,
                }
                for tool in self._tools.values()
            ]
            self._write_result(request_id, {"tools": tools})
        elif method == "tools/call":
            self._call_tool(loop, request_id, params)
        else:
            method_name = method if isinstance(method, str) else repr(method)
            self._write_error(request_id, f"Unsupported method: {method_name[:256]}")

    def _call_tool(
        self,
        loop: asyncio.AbstractEventLoop,
        request_id: object,
        params: dict[str, object],
    ) -> None:
        name = params.get("name")
        if not isinstance(name, str):
            self._write_error(request_id, "Invalid tool name")
            return
        raw_arguments = params.get("arguments", {})
        arguments = raw_arguments if isinstance(raw_arguments, dict) else {}
        if name not in self._tools:
            self._write_error(request_id, f"Unknown tool: {name}")
            return
        try:
            raw_result = self._tools[name].handler(arguments)
            if _is_awaitable(raw_result):
                tool_result = loop.run_until_complete(cast(Awaitable[ToolResult], raw_result))
            else:
                tool_result = cast(ToolResult, raw_result)
            if not isinstance(tool_result, ToolResult):
                raise TypeError("Tool handler did not return ToolResult")
        except (KeyboardInterrupt, SystemExit):
            raise
        except Exception as exc:
            logger.exception("Tool execution error: %s", exc)
            self._write_error(request_id, "Internal tool error")
            return
        self._write_result(
            request_id,
            {
                "content": tool_result.content,
                "structuredContent": tool_result.structured_content,
                "isError": tool_result.is_error,
            },
        )

    def _write_result(self, request_id: object, result: dict[str, object]) -> None:
        payload = {"jsonrpc": "2.0", "id": request_id, "result": result}
        sys.stdout.write(json.dumps(payload) + "\n")
        sys.stdout.flush()

    def _write_error(self, request_id: object, message: str) -> None:
        payload = {
            "jsonrpc": "2.0",
            "id": request_id,
            "error": {"code": -32000, "message": message},
        }
        sys.stdout.write(json.dumps(payload) + "\n")
        sys.stdout.flush()


def _is_awaitable(value: object) -> bool:
    try:
        return inspect.isawaitable(value)
    except TypeError:
        return False
