"""Image generation adapter package.

Scope:
    Provides the provider capability interface, the Gemini provider adapter and
    the ordered response-shape parsers it uses.

Non-goals:
    - No file persistence (see `image_beautifier.storage`).
    - No retries, streaming or caching; one blocking call per generation.
"""
