"""Filename generation and image persistence.

Processing flow:
    1. `generate_filename` builds `{tool}_{timestamp}_{8 hex}.{ext}`.
    2. The dispatcher hands the provider payload to `persist_result`.
    3. Base64 payloads are decoded locally (a `data:image/...;base64,` prefix is
       stripped); URL payloads are fetched with one GET.
    4. Bytes are written to a temporary file inside the output root and moved
       onto the final name with `os.replace`.

Base64 and temporary files:
    - Invalid base64 raises `ProviderError`.
    - Temporary files live in the output root and are removed on failure.

Collision handling:
    Filenames carry 32 random bits next to a second-resolution timestamp. A
    collision is not retried; the later write replaces the earlier file.
"""

import base64
import binascii
import logging
import os
import re
import secrets
import tempfile
from datetime import datetime, timezone

import requests

from image_beautifier.core.errors import ProviderError, ValidationError
from image_beautifier.image.provider import ENCODING_BASE64, GenerationResult
from image_beautifier.storage.paths import PathGuard

logger = logging.getLogger(__name__)

DEFAULT_DOWNLOAD_TIMEOUT_SECONDS = 60.0

MIME_TYPES = {
    "png": "image/png",
    "webp": "image/webp",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
}

_DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")


def generate_filename(tool_name: str, extension: str, now: datetime | None = None) -> str:
    """Return a timestamped, collision-resistant filename for a tool output."""
    moment = now or datetime.now(timezone.utc)
    timestamp = moment.strftime("%Y-%m-%dT%H-%M-%S")
    suffix = secrets.token_hex(4)
    return f"{tool_name}_{timestamp}_{suffix}.{extension}"


def mime_type_for(extension: str) -> str:
    return MIME_TYPES.get(extension.lower().lstrip("."), "application/octet-stream")


def parse_size(size: str) -> tuple[int, int]:
    """Parse `"WIDTHxHEIGHT"` into integers."""
    try:
        width_text, height_text = size.lower().split("x", 1)
        width, height = int(width_text), int(height_text)
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid size {size!r}: expected WIDTHxHEIGHT") from None
    if width <= 0 or height <= 0:
        raise ValidationError(f"Invalid size {size!r}: dimensions must be positive")
    return width, height


def decode_base64_image(data: str) -> bytes:
    cleaned = _DATA_URL_PREFIX.sub("", data.strip())
    # Line-wrapped (RFC 2045) payloads carry newlines between groups.
    cleaned = "".join(cleaned.split())
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError):
        raise ProviderError("Provider returned invalid base64 image data") from None


def write_image_bytes(guard: PathGuard, filename: str, content: bytes) -> str:
    """Write `content` under the output root and return the absolute path."""
    target = guard.safe_join(filename)
    guard.ensure_output_root()

    fd, temp_path = tempfile.mkstemp(prefix=".partial-", dir=guard.output_root)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(content)
        os.replace(temp_path, target)
    except BaseException:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise

    logger.info("Wrote image to: %s", target)
    return target


def write_base64_image(guard: PathGuard, data: str, filename: str) -> str:
    return write_image_bytes(guard, filename, decode_base64_image(data))


def download_image(
    guard: PathGuard,
    url: str,
    filename: str,
    timeout: float = DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
) -> str:
    """Fetch `url` and persist the body under `filename`.

    Raises:
        ProviderError: Transport failure or non-2xx status.
    """
    # Validate the destination before any network traffic.
    guard.safe_join(filename)

    try:
        response = requests.get(url, timeout=timeout)
    except requests.exceptions.RequestException as err:
        raise ProviderError(f"Failed to download image: {type(err).__name__}") from None

    if not response.ok:
        raise ProviderError(f"Failed to download image: HTTP {response.status_code}")

    return write_image_bytes(guard, filename, response.content)


def persist_result(
    guard: PathGuard,
    result: GenerationResult,
    filename: str,
    download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
) -> str:
    """Persist a provider result; returns the absolute file path."""
    if result.encoding == ENCODING_BASE64:
        return write_base64_image(guard, result.data, filename)
    return download_image(guard, result.data, filename, timeout=download_timeout)
