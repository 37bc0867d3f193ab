"""Glyph rendering types.

This module defines the per-glyph records that flow from the render
coordinator to the packer and descriptor builder.
"""

from dataclasses import dataclass, field
from typing import Any

from sdfatlas.config.settings import FieldType
from sdfatlas.domain.contour import Contour

# All four channels carry data
CHANNEL_MASK_ALL = 15


@dataclass(frozen=True)
class FontMetrics:
    """Font-wide vertical metrics in font units.

    Attributes:
        units_per_em: Font design units per em
        ascender: Typographic ascender
        descender: Typographic descender (usually negative)
        line_gap: Typographic line gap
    """

    units_per_em: int
    ascender: int
    descender: int
    line_gap: int

    def scale(self, font_size: float) -> float:
        """Factor converting font units to pixels at the given size."""
        return font_size / self.units_per_em


@dataclass(frozen=True)
class GlyphRenderRequest:
    """Immutable input for rendering one character.

    Attributes:
        character: The character to render
        contours: Outline contours in pixel space (y-down)
        font_size: Font size in pixels
        field_type: Distance field type
        distance_range: Distance range in pixels
        advance_width: Horizontal advance in font units
    """

    character: str
    contours: tuple[Contour, ...]
    font_size: float
    field_type: FieldType
    distance_range: float
    advance_width: int = 0


@dataclass(frozen=True)
class GlyphBitmap:
    """Decoded RGBA pixels of one glyph.

    Attributes:
        width: Width in pixels (0 for blank glyphs)
        height: Height in pixels (0 for blank glyphs)
        pixels: Row-major RGBA bytes, None for blank glyphs
    """

    width: int
    height: int
    pixels: bytes | None = None

    @classmethod
    def blank(cls) -> "GlyphBitmap":
        return cls(width=0, height=0, pixels=None)

    @property
    def is_blank(self) -> bool:
        return self.pixels is None or self.width == 0 or self.height == 0


@dataclass
class GlyphMetrics:
    """BMFont char record.

    Offsets and advance are in pixels. ``x``, ``y`` and ``page`` are set when
    the glyph is packed; blank glyphs keep ``page`` as None.
    """

    id: int
    width: int
    height: int
    xoffset: float
    yoffset: float
    xadvance: float
    chnl: int = CHANNEL_MASK_ALL
    x: int = 0
    y: int = 0
    page: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a BMFont char entry.

        Unpacked glyphs reference page 0 so every entry stays readable.
        """
        return {
            "id": self.id,
            "width": self.width,
            "height": self.height,
            "xoffset": self.xoffset,
            "yoffset": self.yoffset,
            "xadvance": self.xadvance,
            "chnl": self.chnl,
            "x": self.x,
            "y": self.y,
            "page": self.page if self.page is not None else 0,
        }


@dataclass
class RenderedGlyph:
    """A rendered character: its bitmap and metrics."""

    character: str
    bitmap: GlyphBitmap
    metrics: GlyphMetrics
    command: str = field(default="", repr=False)

    @property
    def is_blank(self) -> bool:
        return self.bitmap.is_blank
