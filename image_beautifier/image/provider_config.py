"""Provider credential/endpoint configuration.

Architectural role:
    Holds the values `GeminiProvider` needs (credential, base endpoint, model
    identifier, request timeout). Values are resolved once when the adapter is
    constructed and never re-read mid-process, so the configured/unconfigured
    state stays stable for the whole run.

Security considerations:
    The credential is excluded from `repr()` so configuration objects can be
    logged or shown in tracebacks safely.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping

from image_beautifier.core.errors import ConfigurationError

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_MODEL = "gemini-2.5-flash-image"
DEFAULT_TIMEOUT_SECONDS = 60.0

# Header the Gemini REST API reads the credential from.
API_KEY_HEADER = "x-goog-api-key"


@dataclass(frozen=True)
class ProviderConfig:
    """Credential, endpoint and model for the remote image provider."""

    api_key: str = field(default="", repr=False)
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def endpoint(self) -> str:
        """Full `generateContent` URL for the configured model."""
        return f"{self.base_url.rstrip('/')}/v1beta/models/{self.model}:generateContent"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ProviderConfig":
        """Read `GEMINI_*` variables; a missing key yields an unconfigured value."""
        env = os.environ if environ is None else environ

        raw_timeout = (env.get("GEMINI_TIMEOUT_SECONDS") or "").strip()
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            raise ConfigurationError(
                f"GEMINI_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}"
            ) from None
        if timeout <= 0:
            raise ConfigurationError("GEMINI_TIMEOUT_SECONDS must be positive")

        return cls(
            api_key=(env.get("GEMINI_API_KEY") or "").strip(),
            base_url=(env.get("GEMINI_BASE_URL") or DEFAULT_BASE_URL).strip(),
            model=(env.get("GEMINI_MODEL") or DEFAULT_MODEL).strip(),
            timeout_seconds=timeout,
        )
