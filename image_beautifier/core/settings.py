"""Process configuration resolved once at startup.

Architectural role:
    Centralizes environment-driven configuration for the provider adapter, the
    rate limiter, logging and the output directory. Adapters (MCP, HTTP, CLI)
    call `load_settings()` once and pass the resulting value down; nothing below
    the adapter layer reads the environment again.

Relevant environment variables:
    - `IMAGE_PROVIDER` (default `gemini`)
    - `GEMINI_API_KEY`, `GEMINI_BASE_URL`, `GEMINI_MODEL`, `GEMINI_TIMEOUT_SECONDS`
    - `LOG_LEVEL` (default `info`)
    - `RATE_LIMIT_PER_MINUTE` (default `20`)
    - `PROJECT_ROOT` (default: current working directory)
    - `OUTPUT_DIR` (default `./outputs`, relative to the project root)

Failure behavior:
    Malformed numeric values raise `ConfigurationError`. A missing credential is
    not an error here; it leaves the provider in its unconfigured state.
"""

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

from image_beautifier.core.errors import ConfigurationError
from image_beautifier.image.provider_config import ProviderConfig

DEFAULT_RATE_LIMIT_PER_MINUTE = 20
RATE_LIMIT_WINDOW_SECONDS = 60.0
DEFAULT_OUTPUT_DIR = "./outputs"
DEFAULT_LOG_LEVEL = "info"


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings for one process.

    Attributes:
        provider_name: Registered provider variant to construct.
        provider: Provider credential/endpoint configuration.
        log_level: Lower-case logging level name.
        rate_limit_per_minute: Capacity of each per-tool sliding window.
        rate_limit_window_seconds: Sliding window length.
        project_root: Canonical base directory for relative paths in payloads.
        output_dir: Canonical output root all files are confined to.
    """

    provider_name: str
    provider: ProviderConfig
    log_level: str = DEFAULT_LOG_LEVEL
    rate_limit_per_minute: int = DEFAULT_RATE_LIMIT_PER_MINUTE
    rate_limit_window_seconds: float = RATE_LIMIT_WINDOW_SECONDS
    project_root: str = "."
    output_dir: str = DEFAULT_OUTPUT_DIR

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from a mapping (defaults to `os.environ`)."""
        env = os.environ if environ is None else environ

        project_root = os.path.realpath(env.get("PROJECT_ROOT") or os.getcwd())
        output_dir = os.path.realpath(
            os.path.join(project_root, env.get("OUTPUT_DIR") or DEFAULT_OUTPUT_DIR)
        )

        rate_limit = _parse_int(env, "RATE_LIMIT_PER_MINUTE", DEFAULT_RATE_LIMIT_PER_MINUTE)
        if rate_limit < 1:
            raise ConfigurationError("RATE_LIMIT_PER_MINUTE must be at least 1")

        return cls(
            provider_name=(env.get("IMAGE_PROVIDER") or "gemini").strip().lower(),
            provider=ProviderConfig.from_env(env),
            log_level=(env.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().lower(),
            rate_limit_per_minute=rate_limit,
            project_root=project_root,
            output_dir=output_dir,
        )


def _parse_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None


def load_settings() -> Settings:
    """Load `.env` (without overriding the process environment) and read settings."""
    load_dotenv(override=False)
    return Settings.from_env()
