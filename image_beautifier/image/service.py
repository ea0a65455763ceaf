"""Provider selection used when the tool dispatcher is built.

Role in pipeline:
    - Maps the configured provider name (`IMAGE_PROVIDER`) to its implementation.
    - Builds exactly one provider instance per process.

Error handling strategy:
    Unknown provider names raise `ConfigurationError` at construction time.
"""

from typing import Callable

from image_beautifier.core.errors import ConfigurationError
from image_beautifier.image.gemini_client import GeminiProvider
from image_beautifier.image.provider import ImageProvider
from image_beautifier.image.provider_config import ProviderConfig

PROVIDERS: dict[str, Callable[[ProviderConfig], ImageProvider]] = {
    "gemini": GeminiProvider,
}


def create_image_provider(name: str, config: ProviderConfig) -> ImageProvider:
    """Instantiate the provider registered under `name`."""
    factory = PROVIDERS.get(name)
    if factory is None:
        known = ", ".join(sorted(PROVIDERS))
        raise ConfigurationError(f"Unknown image provider: {name!r} (known: {known})")
    return factory(config)
