import asyncio
import json

from fastapi.testclient import TestClient
from mcp import types

from image_beautifier.api import cli
from image_beautifier.api.http_api import create_app
from image_beautifier.api.mcp_server import create_server, list_tool_definitions, render_payload
from image_beautifier.prompting.prompt_builder import build_hero_prompt, build_icon_prompt
from image_beautifier.safety.rate_limiter import SlidingWindowRateLimiter
from image_beautifier.tools.dispatcher import ToolDispatcher
from image_beautifier.tools.schemas import tool_declarations

TOOL_NAMES = ["generate_image", "generate_icon", "generate_hero", "beautify_screenshot"]


# ------------------------------------------------------------
# Tool declarations / prompts
# ------------------------------------------------------------

def test_tool_declarations_carry_schemas():
    declarations = {d["name"]: d for d in tool_declarations()}

    assert list(declarations) == TOOL_NAMES
    image_schema = declarations["generate_image"]["inputSchema"]
    assert image_schema["required"] == ["prompt"]
    assert image_schema["properties"]["prompt"]["maxLength"] == 2000
    assert image_schema["properties"]["size"]["enum"] == ["1024x1024", "1024x1536", "1536x1024"]
    assert sorted(declarations["generate_hero"]["inputSchema"]["required"]) == ["product_name", "tagline"]


def test_prompt_builder():
    assert build_icon_prompt("a cat", "playful").startswith("A fun, colorful, rounded shapes, friendly icon")
    assert build_hero_prompt("Acme", "Go far", "") == (
        'Hero banner image for "Acme". Go far. Professional, eye-catching, suitable for website header.'
    )


# ------------------------------------------------------------
# HTTP
# ------------------------------------------------------------

def test_http_lists_tools(dispatcher):
    client = TestClient(create_app(dispatcher))

    response = client.get("/v1/tools")

    assert response.status_code == 200
    assert [tool["name"] for tool in response.json()["tools"]] == TOOL_NAMES


def test_http_runs_tool(dispatcher):
    client = TestClient(create_app(dispatcher))

    response = client.post("/v1/tools/generate_icon", json={"concept": "a rocket", "size": "256x256"})

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert (body["width"], body["height"]) == (256, 256)


def test_http_error_payloads(dispatcher):
    client = TestClient(create_app(dispatcher))

    missing = client.post("/v1/tools/paint_mural", json={})
    assert missing.status_code == 404
    assert missing.json() == {"ok": False, "error": "Unknown tool: paint_mural"}

    not_object = client.post("/v1/tools/generate_image", json=["prompt"])
    assert not_object.status_code == 400

    invalid = client.post("/v1/tools/generate_image", json={"prompt": ""})
    assert invalid.status_code == 200
    assert invalid.json()["ok"] is False


def test_http_throttles_per_tool(provider, guard, clock):
    dispatcher = ToolDispatcher(provider, SlidingWindowRateLimiter(capacity=1, clock=clock), guard)
    client = TestClient(create_app(dispatcher))

    assert client.post("/v1/tools/generate_image", json={"prompt": "x"}).json()["ok"] is True

    throttled = client.post("/v1/tools/generate_image", json={"prompt": "x"})
    assert throttled.status_code == 200
    assert throttled.json() == {"ok": False, "error": "Rate limit exceeded: max 1 requests per minute"}
    assert len(provider.calls) == 1


# ------------------------------------------------------------
# MCP
# ------------------------------------------------------------

def test_mcp_tool_definitions_and_payload_rendering():
    tools = list_tool_definitions()

    assert [tool.name for tool in tools] == TOOL_NAMES
    content = render_payload({"ok": False, "error": "boom"})
    assert content[0].type == "text"
    assert json.loads(content[0].text) == {"ok": False, "error": "boom"}


def test_mcp_call_tool_delegates_to_dispatcher(dispatcher):
    server = create_server(dispatcher)
    handler = server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(
            name="beautify_screenshot",
            arguments={"input_image_path": "outputs/shot.png", "goal": "cleaner"},
        ),
    )

    result = asyncio.run(handler(request))
    result = getattr(result, "root", result)

    payload = json.loads(result.content[0].text)
    assert payload["ok"] is True
    assert len(payload["suggested_steps"]) == 7


# ------------------------------------------------------------
# CLI
# ------------------------------------------------------------

def test_cli_tools_prints_declarations(capsys):
    assert cli.main(["tools"]) == 0

    printed = json.loads(capsys.readouterr().out)
    assert [tool["name"] for tool in printed] == TOOL_NAMES


def test_cli_call_hero_degraded_mode(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(cli, "load_settings", lambda: _settings(tmp_path))

    code = cli.main(["call", "generate_hero", "--args", '{"product_name": "Acme", "tagline": "Go"}'])

    assert code == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload["ok"] is False
    assert "suggested_prompt" in payload


def test_cli_call_rejects_bad_json(capsys):
    assert cli.main(["call", "generate_image", "--args", "{not json"]) == 2
    assert cli.main(["call", "generate_image", "--args", "[1, 2]"]) == 2


def _settings(tmp_path):
    from image_beautifier.core.settings import Settings

    return Settings.from_env({"PROJECT_ROOT": str(tmp_path)})
