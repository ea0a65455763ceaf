"""Ordered, defensive parsing of provider response bodies.

Parsing strategy:
    `RESPONSE_SHAPES` is a tuple of pure functions, each taking the decoded JSON
    body and returning `(payload, encoding)` or `None`. They are tried in
    priority order and the first match wins:

    1. `candidates[].content.parts[].inline_data.data` (documented shape; the
       camelCase `inlineData` spelling is accepted too).
    2. `image` string field.
    3. `data` string field.
    4. `url` string field.
    5. first element of an `images` array.

    Shapes 2-5 are legacy/alternate formats of unclear provenance. They are kept
    in this order for compatibility and should not be assumed to match any
    current provider format.

Failure behavior:
    No shape function raises on unexpected input. Only `parse_response` raises,
    with `ProviderError`, once every shape is exhausted.
"""

from typing import Any, Callable

from image_beautifier.core.errors import ProviderError
from image_beautifier.image.provider import (
    ENCODING_BASE64,
    ENCODING_URL,
    GenerationResult,
    PayloadEncoding,
)

ParsedPayload = tuple[str, PayloadEncoding]
ResponseShape = Callable[[Any], ParsedPayload | None]


def _tag(value: str) -> ParsedPayload:
    return value, ENCODING_URL if value.startswith("http") else ENCODING_BASE64


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def candidates_inline_data(response: Any) -> ParsedPayload | None:
    """Documented shape: first part carrying inline image data wins."""
    if not isinstance(response, dict):
        return None
    candidates = response.get("candidates")
    if not isinstance(candidates, list):
        return None

    for candidate in candidates:
        if not isinstance(candidate, dict):
            continue
        content = candidate.get("content")
        if not isinstance(content, dict):
            continue
        parts = content.get("parts")
        if not isinstance(parts, list):
            continue
        for part in parts:
            if not isinstance(part, dict):
                continue
            inline = part.get("inline_data") or part.get("inlineData")
            if isinstance(inline, dict) and _non_empty_string(inline.get("data")):
                return inline["data"], ENCODING_BASE64
    return None


def image_field(response: Any) -> ParsedPayload | None:
    if isinstance(response, dict) and _non_empty_string(response.get("image")):
        return _tag(response["image"])
    return None


def data_field(response: Any) -> ParsedPayload | None:
    if isinstance(response, dict) and _non_empty_string(response.get("data")):
        return _tag(response["data"])
    return None


def url_field(response: Any) -> ParsedPayload | None:
    if isinstance(response, dict) and _non_empty_string(response.get("url")):
        return response["url"], ENCODING_URL
    return None


def images_array(response: Any) -> ParsedPayload | None:
    if not isinstance(response, dict):
        return None
    images = response.get("images")
    if isinstance(images, list) and images and _non_empty_string(images[0]):
        return _tag(images[0])
    return None


RESPONSE_SHAPES: tuple[tuple[str, ResponseShape], ...] = (
    ("candidates[].content.parts[].inline_data.data", candidates_inline_data),
    ("image", image_field),
    ("data", data_field),
    ("url", url_field),
    ("images[0]", images_array),
)


def parse_response(response: Any, width: int, height: int) -> GenerationResult:
    """Return the first shape match as a `GenerationResult`.

    Args:
        response: Decoded JSON body.
        width: Requested width, attached to the result.
        height: Requested height, attached to the result.

    Raises:
        ProviderError: No shape matched. The message lists the attempted shapes
            and never includes the body itself.
    """
    for _, shape in RESPONSE_SHAPES:
        parsed = shape(response)
        if parsed is not None:
            data, encoding = parsed
            return GenerationResult(data=data, encoding=encoding, width=width, height=height)

    attempted = ", ".join(label for label, _ in RESPONSE_SHAPES)
    raise ProviderError(
        f"Unable to parse image from provider response; tried shapes: {attempted}"
    )
