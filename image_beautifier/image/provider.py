"""Provider capability interface and the data model shared by providers.

`ImageProvider` is the minimal interface the tool dispatcher depends on.
Exactly one concrete provider is active per process; it is selected when the
dispatcher is built (see `image_beautifier.image.service`).
"""

from dataclasses import dataclass
from typing import Literal, Protocol

ENCODING_BASE64 = "base64"
ENCODING_URL = "url"

PayloadEncoding = Literal["base64", "url"]


@dataclass(frozen=True)
class GenerationRequest:
    """Generic generation options, built per tool call.

    Attributes:
        prompt: Free-text prompt (1-2000 characters after validation).
        style: Visual style tag (`illustration`, `3d`, `flat`, ...).
        size: Target pixel size as `"WIDTHxHEIGHT"`.
        background: `solid` or `transparent`.
        output_format: Output encoding (`png` or `webp`).
    """

    prompt: str
    style: str = "illustration"
    size: str = "1024x1024"
    background: str = "solid"
    output_format: str = "png"


@dataclass(frozen=True)
class GenerationResult:
    """Image payload returned by a provider.

    `data` holds base64 text when `encoding == "base64"` and a remote URL when
    `encoding == "url"`. Ownership passes to the caller for persistence.
    """

    data: str
    encoding: PayloadEncoding
    width: int
    height: int


class ImageProvider(Protocol):
    """Capability interface implemented by every provider variant."""

    name: str

    def is_configured(self) -> bool:
        """Return whether the provider has the credential/endpoint it needs."""
        ...

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Issue one generation call and return the parsed result."""
        ...
