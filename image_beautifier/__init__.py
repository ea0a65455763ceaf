"""image-beautifier-mcp package.

Architectural role:
- Exposes image-generation tools (`generate_image`, `generate_icon`,
  `generate_hero`, `beautify_screenshot`) to a host process.
- Translates validated tool arguments into remote provider calls and persists
  the generated images under one confined output directory.

Package split:
- `core`: settings, error taxonomy, logging setup.
- `image`: provider interface, Gemini adapter, response-shape parsing.
- `storage`: path confinement, filename generation, image persistence.
- `safety`: per-tool sliding-window rate limiting.
- `prompting`: tool-specific prompt composition.
- `tools`: argument schemas and the tool dispatcher.
- `api`: MCP stdio, HTTP and CLI adapters.
"""

__version__ = "1.0.0"
