"""
Command-line entrypoint for image-beautifier-mcp.

Architectural role:
- Starts the MCP stdio server (`serve`), the default when no command is given.
- Prints tool declarations (`tools`).
- Runs a single tool call from the terminal (`call`).

Request lifecycle (`call`):
1. Parse `--args` as a JSON object.
2. Build the dispatcher from environment settings.
3. Dispatch once and print the JSON payload to stdout.
4. Exit with 0 when the payload is `ok`, 1 otherwise.

Error handling strategy:
- Settings errors print a message to stderr and exit with 2.
- Malformed `--args` JSON exits with 2 without touching the dispatcher.
"""

import argparse
import asyncio
import json
import sys

from image_beautifier.api.mcp_server import run_stdio
from image_beautifier.core.errors import ConfigurationError
from image_beautifier.core.logging_setup import configure_logging
from image_beautifier.core.settings import load_settings
from image_beautifier.tools.dispatcher import create_dispatcher
from image_beautifier.tools.schemas import tool_declarations


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-beautifier-mcp",
        description="Image generation tools served over MCP stdio.",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("serve", help="Run the MCP server on stdio (default)")
    subparsers.add_parser("tools", help="Print tool declarations as JSON")

    call_parser = subparsers.add_parser("call", help="Run one tool and print its payload")
    call_parser.add_argument("tool", help="Tool name, e.g. generate_icon")
    call_parser.add_argument(
        "--args",
        dest="tool_args",
        default="{}",
        help="Tool arguments as a JSON object",
    )
    return parser


def _load_dispatcher():
    settings = load_settings()
    configure_logging(settings.log_level, secret=settings.provider.api_key or None)
    return create_dispatcher(settings)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    command = args.command or "serve"

    if command == "tools":
        print(json.dumps(tool_declarations(), indent=2))
        return 0

    if command == "call":
        try:
            tool_args = json.loads(args.tool_args)
        except ValueError as err:
            print(f"Invalid --args JSON: {err}", file=sys.stderr)
            return 2
        if not isinstance(tool_args, dict):
            print("--args must be a JSON object", file=sys.stderr)
            return 2

    try:
        dispatcher = _load_dispatcher()
    except ConfigurationError as err:
        print(f"Configuration error: {err}", file=sys.stderr)
        return 2

    if command == "call":
        payload = dispatcher.dispatch(args.tool, tool_args)
        print(json.dumps(payload, indent=2))
        return 0 if payload.get("ok") else 1

    try:
        asyncio.run(run_stdio(dispatcher))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
