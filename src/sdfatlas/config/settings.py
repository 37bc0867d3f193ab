"""Configuration settings for sdfatlas."""

from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Printable ASCII, space through tilde
DEFAULT_CHARSET: tuple[str, ...] = tuple(chr(code) for code in range(0x20, 0x7F))


class FieldType(str, Enum):
    """Distance field flavour produced by msdfgen."""

    MSDF = "msdf"
    SDF = "sdf"
    PSDF = "psdf"

    @property
    def is_multichannel(self) -> bool:
        """Whether the renderer emits one distance per colour channel."""
        return self is FieldType.MSDF


class OutputType(str, Enum):
    """Font descriptor format."""

    XML = "xml"
    JSON = "json"

    @property
    def extension(self) -> str:
        """File extension of the descriptor file."""
        return "json" if self is OutputType.JSON else "fnt"


class AtlasConfig(BaseModel):
    """Options for one atlas generation run.

    Field names are snake_case; the camelCase option names (``fontSize``,
    ``textureWidth``, ...) are accepted as aliases.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    output_type: OutputType = Field(
        default=OutputType.XML,
        alias="outputType",
        description="Descriptor format (xml writes .fnt, json writes .json)",
    )
    filename: str | None = Field(
        default=None,
        description="Base filename of pages and descriptor (default: font full name)",
    )
    font_size: float = Field(
        default=42,
        gt=0,
        alias="fontSize",
        description="Font size in pixels used for rendering",
    )
    charset: tuple[str, ...] = Field(
        default=DEFAULT_CHARSET,
        description="Characters to include in the atlas",
    )
    texture_width: int = Field(
        default=512,
        gt=0,
        alias="textureWidth",
        description="Width of each texture page in pixels",
    )
    texture_height: int = Field(
        default=512,
        gt=0,
        alias="textureHeight",
        description="Height of each texture page in pixels",
    )
    texture_padding: int = Field(
        default=2,
        ge=0,
        alias="texturePadding",
        description="Spacing between packed glyphs in pixels",
    )
    distance_range: float = Field(
        default=3,
        gt=0,
        alias="distanceRange",
        description="Distance range of the field in pixels (also the glyph padding)",
    )
    field_type: FieldType = Field(
        default=FieldType.MSDF,
        alias="fieldType",
        description="Distance field type (msdf, sdf or psdf)",
    )
    round_decimal: int | None = Field(
        default=None,
        ge=0,
        alias="roundDecimal",
        description="Round all descriptor numbers to this many decimals (None = keep)",
    )

    @field_validator("charset", mode="before")
    @classmethod
    def _split_charset(cls, value: object) -> object:
        if isinstance(value, str):
            value = list(value)
        if isinstance(value, Sequence):
            if len(value) == 0:
                raise ValueError("charset must contain at least one character")
            for char in value:
                if not isinstance(char, str) or len(char) != 1:
                    raise ValueError(f"charset entries must be single characters, got {char!r}")
            return tuple(value)
        return value

    @field_validator("distance_range")
    @classmethod
    def _whole_pixel_padding(cls, value: float) -> float:
        # both sides together must pad the bitmap by whole pixels
        if (value * 2) % 1 != 0:
            raise ValueError(f"distance range must be a multiple of 0.5, got {value}")
        return value

    @property
    def padding(self) -> float:
        """Padding around each glyph bitmap, equal to the distance range."""
        return self.distance_range


class RenderConfig(BaseModel):
    """Configuration for msdfgen invocations."""

    binary_path: Path | None = Field(
        default=None,
        description="Path to the msdfgen binary (None = bundled or PATH lookup)",
    )
    max_workers: int = Field(
        default=15,
        ge=1,
        le=64,
        description="Maximum simultaneous msdfgen processes",
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout for a single msdfgen invocation",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class AtlasSettings(BaseModel):
    """Main application settings."""

    atlas: AtlasConfig = Field(default_factory=AtlasConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> AtlasSettings:
    """Get default application settings."""
    return AtlasSettings()
