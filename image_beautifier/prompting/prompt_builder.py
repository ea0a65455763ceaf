"""Tool-specific prompt composition.

Architectural role:
    Turns validated tool arguments into the free-text prompt sent to the image
    provider. Pure string composition: no I/O, no provider calls.

Determinism:
    Output is fully deterministic for identical inputs.
"""

ICON_THEME_DESCRIPTIONS = {
    "minimal": "minimalist, clean lines, simple shapes, modern",
    "playful": "fun, colorful, rounded shapes, friendly",
    "corporate": "professional, sleek, business-like, polished",
}


def build_icon_prompt(concept: str, theme: str) -> str:
    """Build an icon prompt from a concept and one of the icon themes."""
    description = ICON_THEME_DESCRIPTIONS[theme]
    return (
        f"A {description} icon representing: {concept}. "
        "Icon design, centered, clean background."
    )


def build_hero_prompt(product_name: str, tagline: str, vibe: str | None = None) -> str:
    """Build a hero-banner prompt; an empty or missing vibe adds nothing."""
    vibe_text = f", {vibe} vibe" if vibe else ""
    return (
        f'Hero banner image for "{product_name}". {tagline}{vibe_text}. '
        "Professional, eye-catching, suitable for website header."
    )
