"""Tool-level error taxonomy.

Every failure that can happen while serving a tool call is expressed as a
`ToolError` subclass. The dispatcher catches `ToolError` at the tool boundary and
converts it into a uniform `{"ok": false, "error": <message>}` payload.

Error classes:
    - `ValidationError`: bad or missing arguments. Never reaches the network.
    - `ConfigurationError`: credential/endpoint missing or malformed settings.
    - `ProviderError`: non-success HTTP status, transport failure, or a response
      body that no known shape can parse.
    - `RateLimitError`: per-tool quota exceeded.
    - `PathError`: traversal or out-of-root path.
"""


class ToolError(Exception):
    """Base class for failures surfaced to tool callers as error payloads."""


class ValidationError(ToolError):
    """Tool arguments do not match the declared schema."""


class ConfigurationError(ToolError):
    """Provider credential/endpoint missing or settings malformed."""


class ProviderError(ToolError):
    """Remote provider call failed or returned an unparseable body."""


class RateLimitError(ToolError):
    """Per-tool request quota exceeded for the current window."""


class PathError(ToolError):
    """Path escapes the output root or contains forbidden components."""
