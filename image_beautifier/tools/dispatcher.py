"""Tool dispatch: validation, throttling, generation, persistence, payloads.

Request lifecycle (`ToolDispatcher.dispatch`):
1. Reject unknown tool names.
2. Consult the per-tool rate limiter (no other side effects on failure).
3. Validate arguments with the tool's pydantic model.
4. Compose the provider prompt (icon themes, hero phrasing).
5. Check any caller-supplied filename against the path guard, then call the
   provider once and persist the returned payload under the output root.
6. Return `{ok: true, file_path, mime_type, width, height}`.

Error handling strategy:
- Every `ToolError` is converted into `{ok: false, error: <message>}`.
- Unexpected exceptions are logged and reported as a generic internal error.
- No exception crosses `dispatch`.
- The configured credential is scrubbed from every error message.

Degraded mode:
- `generate_hero` with an unconfigured provider returns the composed prompt as
  `suggested_prompt` instead of calling the provider.
"""

import logging
from typing import Any, Callable, Mapping

from pydantic import ValidationError as PydanticValidationError

from image_beautifier.core.errors import PathError, ToolError, ValidationError
from image_beautifier.core.logging_setup import redact
from image_beautifier.core.settings import Settings
from image_beautifier.image.provider import GenerationRequest, GenerationResult, ImageProvider
from image_beautifier.image.service import create_image_provider
from image_beautifier.prompting.prompt_builder import build_hero_prompt, build_icon_prompt
from image_beautifier.safety.rate_limiter import SlidingWindowRateLimiter
from image_beautifier.storage.files import (
    DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
    generate_filename,
    mime_type_for,
    parse_size,
    persist_result,
)
from image_beautifier.storage.paths import PathGuard
from image_beautifier.tools.schemas import (
    TOOL_SPECS,
    BeautifyScreenshotInput,
    GenerateHeroInput,
    GenerateIconInput,
    GenerateImageInput,
    ImageOutput,
    ToolInput,
)

logger = logging.getLogger(__name__)

BEAUTIFY_SUGGESTIONS = (
    "Increase whitespace and padding for a cleaner look",
    "Use a consistent color palette throughout the UI",
    "Improve typography hierarchy with varied font sizes",
    "Add subtle shadows or borders to define sections",
    "Ensure proper alignment of all elements",
    "Consider using rounded corners for a modern feel",
    "Optimize button sizes and spacing for better UX",
)

UNCONFIGURED_MESSAGE = (
    "Image provider not configured. Configure GEMINI_API_KEY to generate images."
)


def _preview(text: str, limit: int = 50) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def _format_validation_error(tool_name: str, err: PydanticValidationError) -> str:
    problems = []
    for item in err.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "arguments"
        problems.append(f"{location}: {item.get('msg', 'invalid value')}")
    return f"Invalid arguments for {tool_name}: " + "; ".join(problems)


class ToolDispatcher:
    """Route tool calls to handlers and shape their payloads."""

    def __init__(
        self,
        provider: ImageProvider,
        rate_limiter: SlidingWindowRateLimiter,
        path_guard: PathGuard,
        download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
        secret: str | None = None,
    ) -> None:
        self.provider = provider
        self.rate_limiter = rate_limiter
        self.path_guard = path_guard
        self.download_timeout = download_timeout
        self._secret = secret
        self._handlers: dict[str, Callable[[Any], dict]] = {
            "generate_image": self._generate_image,
            "generate_icon": self._generate_icon,
            "generate_hero": self._generate_hero,
            "beautify_screenshot": self._beautify_screenshot,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    def dispatch(self, name: str, arguments: Mapping[str, Any] | None) -> dict:
        """Run one tool call and return its payload; never raises."""
        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise ValidationError(f"Unknown tool: {name}")

            self.rate_limiter.check(name)
            params = self._validate(name, arguments)
            return handler(params)

        except ToolError as err:
            message = redact(str(err), self._secret)
            logger.error("Tool %s failed: %s", name, message)
            return {"ok": False, "error": message}

        except Exception:
            logger.exception("Tool %s failed with an unexpected error", name)
            return {"ok": False, "error": "Internal error"}

    def _validate(self, name: str, arguments: Mapping[str, Any] | None) -> ToolInput:
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise ValidationError(f"Invalid arguments for {name}: expected an object")

        model = TOOL_SPECS[name].input_model
        try:
            return model.model_validate(dict(arguments))
        except PydanticValidationError as err:
            raise ValidationError(_format_validation_error(name, err)) from None

    def _generate_and_store(self, request: GenerationRequest, filename: str) -> tuple[str, GenerationResult]:
        result = self.provider.generate(request)
        file_path = persist_result(
            self.path_guard, result, filename, download_timeout=self.download_timeout
        )
        return file_path, result

    def _image_output(self, file_path: str, output_format: str, width: int, height: int) -> dict:
        return ImageOutput(
            file_path=self.path_guard.to_relative(file_path),
            mime_type=mime_type_for(output_format),
            width=width,
            height=height,
        ).model_dump()

    # ------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------

    def _generate_image(self, params: GenerateImageInput) -> dict:
        logger.info("Generating image: prompt=%r", _preview(params.prompt))

        if params.output_path:
            filename = self.path_guard.resolve_output_name(params.output_path)
        else:
            filename = generate_filename("generate_image", params.output_format)

        file_path, result = self._generate_and_store(
            GenerationRequest(
                prompt=params.prompt,
                style=params.style,
                size=params.size,
                background=params.background,
                output_format=params.output_format,
            ),
            filename,
        )
        return self._image_output(file_path, params.output_format, result.width, result.height)

    def _generate_icon(self, params: GenerateIconInput) -> dict:
        logger.info("Generating icon: concept=%r", _preview(params.concept))

        prompt = build_icon_prompt(params.concept, params.theme)
        filename = generate_filename("generate_icon", params.output_format)

        file_path, _ = self._generate_and_store(
            GenerationRequest(
                prompt=prompt,
                style="flat",
                size=params.size,
                background="transparent",
                output_format=params.output_format,
            ),
            filename,
        )
        width, height = parse_size(params.size)
        return self._image_output(file_path, params.output_format, width, height)

    def _generate_hero(self, params: GenerateHeroInput) -> dict:
        logger.info("Generating hero image: product=%r", _preview(params.product_name))

        prompt = build_hero_prompt(params.product_name, params.tagline, params.vibe)

        if not self.provider.is_configured():
            logger.warning("Provider not configured, returning suggested prompt only")
            return {
                "ok": False,
                "suggested_prompt": prompt,
                "message": UNCONFIGURED_MESSAGE,
            }

        filename = generate_filename("generate_hero", params.output_format)
        file_path, result = self._generate_and_store(
            GenerationRequest(
                prompt=prompt,
                style="photoreal",
                size=params.size,
                background="solid",
                output_format=params.output_format,
            ),
            filename,
        )
        return self._image_output(file_path, params.output_format, result.width, result.height)

    def _beautify_screenshot(self, params: BeautifyScreenshotInput) -> dict:
        # Placeholder contract: validates the input path and returns fixed advice.
        logger.info("Beautify screenshot (stub): path=%r", params.input_image_path)

        try:
            self.path_guard.validate(params.input_image_path)
        except PathError:
            raise PathError("Input image must be in the output directory") from None

        return {
            "ok": True,
            "message": "Beautify screenshot is currently a stub implementation",
            "suggested_steps": list(BEAUTIFY_SUGGESTIONS),
            "note": "To implement image editing, integrate an image manipulation API or library",
        }


def create_dispatcher(settings: Settings) -> ToolDispatcher:
    """Build the provider, rate limiter and path guard from `settings`."""
    provider = create_image_provider(settings.provider_name, settings.provider)
    rate_limiter = SlidingWindowRateLimiter(
        capacity=settings.rate_limit_per_minute,
        window_seconds=settings.rate_limit_window_seconds,
    )
    path_guard = PathGuard(settings.project_root, settings.output_dir)

    logger.info(
        "Tool dispatcher ready: provider=%s configured=%s output_root=%s",
        provider.name,
        provider.is_configured(),
        path_guard.output_root,
    )
    return ToolDispatcher(
        provider,
        rate_limiter,
        path_guard,
        download_timeout=settings.provider.timeout_seconds,
        secret=settings.provider.api_key or None,
    )
