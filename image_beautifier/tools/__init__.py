"""Tool layer.

- `schemas`: pydantic argument models and host-facing tool declarations.
- `dispatcher`: per-call validation, throttling, generation and payload shaping.
"""
