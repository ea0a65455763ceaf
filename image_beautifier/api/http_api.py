"""
HTTP API adapter for the tool dispatcher.

Architectural role:
- Expose the same four tools over HTTP for hosts that cannot speak stdio.
- Delegate validation, throttling and execution to `ToolDispatcher`.

Endpoint responsibilities:
- `GET /v1/tools`: list tool declarations (`name`, `description`, `inputSchema`).
- `POST /v1/tools/{name}`: run one tool with a JSON object of arguments.

Input validation behavior:
- Unknown tool name -> HTTP 404 with `{ok: false, error}`.
- Body that is not a JSON object -> HTTP 400 with `{ok: false, error}`.
- Argument errors are reported by the dispatcher with HTTP 200 and `ok: false`,
  matching the stdio payloads.

Side effects:
- `create_app()` without a dispatcher reads settings once and configures logging.

Serving:
- `uvicorn --factory image_beautifier.api.http_api:create_app` (`http` extra)
"""

import json
import logging

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from image_beautifier import __version__
from image_beautifier.core.logging_setup import configure_logging
from image_beautifier.core.settings import load_settings
from image_beautifier.tools.dispatcher import ToolDispatcher, create_dispatcher
from image_beautifier.tools.schemas import tool_declarations

logger = logging.getLogger(__name__)


def create_app(dispatcher: ToolDispatcher | None = None) -> FastAPI:
    """Build the FastAPI application around `dispatcher`."""
    if dispatcher is None:
        settings = load_settings()
        configure_logging(settings.log_level, secret=settings.provider.api_key or None)
        dispatcher = create_dispatcher(settings)

    app = FastAPI(title="image-beautifier-mcp", version=__version__)
    app.state.dispatcher = dispatcher

    @app.get("/v1/tools")
    def list_tools():
        """Return tool declarations in host-facing form."""
        return {"tools": tool_declarations()}

    @app.post("/v1/tools/{name}")
    async def call_tool(name: str, request: Request):
        """Run one tool; the payload's `ok` field carries the outcome."""
        if name not in dispatcher.tool_names:
            return JSONResponse(status_code=404, content={"ok": False, "error": f"Unknown tool: {name}"})

        raw = await request.body()
        try:
            arguments = json.loads(raw) if raw.strip() else {}
        except ValueError:
            return JSONResponse(status_code=400, content={"ok": False, "error": "Request body must be valid JSON"})

        if not isinstance(arguments, dict):
            return JSONResponse(status_code=400, content={"ok": False, "error": "Request body must be a JSON object"})

        return await run_in_threadpool(dispatcher.dispatch, name, arguments)

    return app
