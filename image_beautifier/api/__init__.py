"""Adapter package.

Architectural role:
- Defines the external interaction boundary (MCP stdio, HTTP, CLI).
- Performs transport-level framing and response shaping.
- Delegates validation and execution to `image_beautifier.tools.dispatcher`.
"""
