"""MCP stdio adapter for the tool dispatcher.

Architectural role:
- Registers the four tools with an MCP `Server`.
- Runs each blocking tool call in a worker thread, so the host may issue calls
  concurrently.
- Serializes dispatcher payloads into one JSON text content item.

Request lifecycle (`call_tool`):
1. Receive tool name and raw arguments from the host.
2. Forward them unchanged to `ToolDispatcher.dispatch` (which validates).
3. Wrap the returned payload as text content.

Error handling strategy:
- The dispatcher never raises, so every call yields a payload.
- Host-side schema validation is disabled; argument errors are reported as
  `{ok: false, error}` payloads like every other failure.

Side effects:
- Logs to stderr only; stdout carries the protocol.
"""

import asyncio
import json
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from image_beautifier import __version__
from image_beautifier.tools.dispatcher import ToolDispatcher
from image_beautifier.tools.schemas import tool_declarations

logger = logging.getLogger(__name__)

SERVER_NAME = "image-beautifier-mcp"


def list_tool_definitions() -> list[Tool]:
    """Return MCP `Tool` declarations for every registered tool."""
    return [Tool(**declaration) for declaration in tool_declarations()]


def render_payload(payload: dict) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload, indent=2))]


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Build an MCP server whose tools delegate to `dispatcher`."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return list_tool_definitions()

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        logger.debug("Tool call received: %s", name)
        payload = await asyncio.to_thread(dispatcher.dispatch, name, arguments)
        return render_payload(payload)

    return server


async def run_stdio(dispatcher: ToolDispatcher) -> None:
    """Serve `dispatcher` over stdio until the host closes the streams."""
    server = create_server(dispatcher)
    logger.info("MCP server running on stdio")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
