"""Gemini image-generation provider adapter.

Processing flow:
    1. Refuse to run when the credential/endpoint is missing (`ConfigurationError`).
    2. Fold style/background options into the prompt text.
    3. Derive the aspect-ratio tag and size tier from the requested size.
    4. POST one JSON payload to `{base}/v1beta/models/{model}:generateContent`.
    5. Parse the body through the ordered shapes in `response_shapes`.

Wire contract:
    Body `{contents:[{parts:[{text}]}], generationConfig:{responseModalities:
    ["IMAGE"], imageConfig:{aspectRatio, imageSize}}}`, credential in the
    `x-goog-api-key` header. The API accepts a single free-text prompt plus
    coarse generation config, so style and background travel inside the prompt.

Retry behavior:
    None. Each invocation issues exactly one request with a finite timeout.

Security considerations:
    Error messages and log lines carry status codes and parse diagnostics only;
    neither the credential nor the response body is included.
"""

import logging
from typing import Any

import requests

from image_beautifier.core.errors import ConfigurationError, ProviderError
from image_beautifier.image.provider import GenerationRequest, GenerationResult
from image_beautifier.image.provider_config import API_KEY_HEADER, ProviderConfig
from image_beautifier.image.response_shapes import parse_response
from image_beautifier.storage.files import parse_size

logger = logging.getLogger(__name__)

# "illustration" is the provider's default look and adds no prefix.
STYLE_DESCRIPTIONS = {
    "3d": "3D rendered style",
    "flat": "flat design style",
    "photoreal": "photorealistic style",
    "anime": "anime art style",
    "pixel": "pixel art style",
}


def get_aspect_ratio(width: int, height: int) -> str:
    """Map a pixel size onto the provider's aspect-ratio tags."""
    if width == height:
        return "1:1"
    if width > height:
        ratio = width / height
        if 1.4 <= ratio <= 1.6:
            return "3:2"
        if ratio >= 1.7:
            return "16:9"
        return "4:3"

    ratio = height / width
    if 1.4 <= ratio <= 1.6:
        return "2:3"
    if ratio >= 1.7:
        return "9:16"
    return "3:4"


def get_image_size(width: int, height: int) -> str:
    """Map the larger dimension onto the provider's coarse size tiers."""
    max_dim = max(width, height)
    if max_dim <= 1024:
        return "1K"
    if max_dim <= 2048:
        return "2K"
    return "4K"


def build_prompt(prompt: str, style: str | None, background: str | None) -> str:
    enhanced = prompt
    if style and style != "illustration":
        enhanced = f"{STYLE_DESCRIPTIONS.get(style, style)}, {enhanced}"
    if background == "transparent":
        enhanced += ", transparent background"
    return enhanced


def build_request_body(request: GenerationRequest) -> dict[str, Any]:
    """Translate generic options into the `generateContent` JSON body."""
    width, height = parse_size(request.size)
    return {
        "contents": [
            {"parts": [{"text": build_prompt(request.prompt, request.style, request.background)}]}
        ],
        "generationConfig": {
            "responseModalities": ["IMAGE"],
            "imageConfig": {
                "aspectRatio": get_aspect_ratio(width, height),
                "imageSize": get_image_size(width, height),
            },
        },
    }


class GeminiProvider:
    """`ImageProvider` implementation for the Gemini `generateContent` API."""

    name = "Gemini Nano Banana"

    def __init__(self, config: ProviderConfig) -> None:
        self.config = config

    def is_configured(self) -> bool:
        return bool(self.config.api_key) and bool(self.config.base_url)

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Generate one image.

        Raises:
            ConfigurationError: Credential or endpoint missing.
            ProviderError: Transport failure, non-2xx status, non-JSON body, or
                a body matching none of the known shapes.
        """
        if not self.is_configured():
            raise ConfigurationError(
                "Gemini provider not configured. Set GEMINI_API_KEY in your .env file"
            )

        width, height = parse_size(request.size)
        body = build_request_body(request)
        endpoint = self.config.endpoint
        headers = {
            "Content-Type": "application/json",
            API_KEY_HEADER: self.config.api_key,
        }

        logger.debug(
            "Gemini request: endpoint=%s aspectRatio=%s imageSize=%s",
            endpoint,
            body["generationConfig"]["imageConfig"]["aspectRatio"],
            body["generationConfig"]["imageConfig"]["imageSize"],
        )

        try:
            response = requests.post(
                endpoint,
                headers=headers,
                json=body,
                timeout=self.config.timeout_seconds,
            )
        except requests.exceptions.Timeout:
            raise ProviderError(
                f"Gemini API request timed out after {self.config.timeout_seconds:g}s"
            ) from None
        except requests.exceptions.RequestException as err:
            raise ProviderError(f"Gemini API request failed: {type(err).__name__}") from None

        if not response.ok:
            logger.error("Gemini API error: HTTP %s %s", response.status_code, response.reason)
            raise ProviderError(f"Gemini API error: {response.status_code} {response.reason or ''}".rstrip())

        try:
            data = response.json()
        except ValueError:
            raise ProviderError("Gemini API returned a non-JSON response body") from None

        logger.debug("Gemini API response received")
        return parse_response(data, width, height)
