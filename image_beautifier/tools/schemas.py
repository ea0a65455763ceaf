"""Tool argument schemas and tool declarations.

Each tool has one pydantic model describing its accepted arguments. The models
serve two purposes:

- validation inside the dispatcher (`model_validate`), and
- the JSON schema advertised to hosts (`model_json_schema`).

Unknown argument keys are ignored. Defaults are applied during validation.
"""

from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Style = Literal["illustration", "3d", "flat", "photoreal", "anime", "pixel"]
ImageSize = Literal["1024x1024", "1024x1536", "1536x1024"]
IconSize = Literal["256x256", "512x512"]
Background = Literal["transparent", "solid"]
OutputFormat = Literal["png", "webp"]
Theme = Literal["minimal", "playful", "corporate"]


class ToolInput(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class GenerateImageInput(ToolInput):
    prompt: str = Field(
        min_length=1,
        max_length=2000,
        description="Text description of the image to generate (1-2000 characters)",
    )
    style: Style = Field(default="illustration", description="Visual style of the image")
    size: ImageSize = Field(default="1024x1024", description="Image dimensions")
    background: Background = Field(default="solid", description="Background type")
    output_format: OutputFormat = Field(default="png", description="Output file format")
    output_path: Optional[str] = Field(
        default=None,
        description="Optional custom filename (must be in the output directory)",
    )


class GenerateIconInput(ToolInput):
    concept: str = Field(
        min_length=1,
        max_length=2000,
        description="Concept or description of the icon (1-2000 characters)",
    )
    theme: Theme = Field(default="minimal", description="Icon theme/style")
    size: IconSize = Field(default="512x512", description="Icon dimensions")
    output_format: OutputFormat = Field(default="png", description="Output file format")


class GenerateHeroInput(ToolInput):
    product_name: str = Field(
        min_length=1, max_length=200, description="Name of the product or website"
    )
    tagline: str = Field(
        min_length=1, max_length=500, description="Product tagline or description"
    )
    vibe: Optional[str] = Field(
        default=None,
        max_length=200,
        description='Optional mood/vibe (e.g., "modern", "playful", "professional")',
    )
    size: ImageSize = Field(default="1536x1024", description="Image dimensions")
    output_format: OutputFormat = Field(default="png", description="Output file format")


class BeautifyScreenshotInput(ToolInput):
    input_image_path: str = Field(
        min_length=1,
        description="Path to the input screenshot (must be in the output directory)",
    )
    goal: str = Field(
        min_length=1,
        max_length=1000,
        description='Beautification goal (e.g., "more modern UI", "cleaner design")',
    )
    output_format: OutputFormat = Field(default="png", description="Output file format")


class ImageOutput(BaseModel):
    """Success payload of the image-producing tools."""

    ok: bool = True
    file_path: str
    mime_type: str
    width: int
    height: int


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: type[ToolInput]

    def declaration(self) -> dict:
        """Return the `{name, description, inputSchema}` declaration for hosts."""
        schema = self.input_model.model_json_schema()
        schema.pop("title", None)
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": schema,
        }


TOOL_SPECS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            name="generate_image",
            description="Generate an image from a text prompt with customizable style, size, and format",
            input_model=GenerateImageInput,
        ),
        ToolSpec(
            name="generate_icon",
            description="Generate an icon from a concept with customizable theme and size",
            input_model=GenerateIconInput,
        ),
        ToolSpec(
            name="generate_hero",
            description="Generate a hero/banner image for a product or website",
            input_model=GenerateHeroInput,
        ),
        ToolSpec(
            name="beautify_screenshot",
            description="Analyze and provide suggestions for beautifying a UI screenshot (stub implementation)",
            input_model=BeautifyScreenshotInput,
        ),
    )
}


def tool_declarations() -> list[dict]:
    return [spec.declaration() for spec in TOOL_SPECS.values()]
