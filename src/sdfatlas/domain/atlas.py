"""Atlas layout and font descriptor types.

This module defines the records produced after packing: placements on
pages, kerning pairs, the BMFont descriptor blocks and the encoded outputs
of a pipeline run.
"""

from dataclasses import dataclass, field
from typing import Any

from sdfatlas.domain.glyph import GlyphMetrics, RenderedGlyph


@dataclass(frozen=True)
class PlacedRect:
    """A glyph bitmap placed on a page.

    Attributes:
        glyph: The rendered glyph
        page_index: Index of the page holding the glyph
        x: Left edge in pixels
        y: Top edge in pixels
    """

    glyph: RenderedGlyph
    page_index: int
    x: int
    y: int

    @property
    def width(self) -> int:
        return self.glyph.bitmap.width

    @property
    def height(self) -> int:
        return self.glyph.bitmap.height


@dataclass
class Page:
    """A fixed-size texture page and the rects placed on it."""

    index: int
    width: int
    height: int
    rects: list[PlacedRect] = field(default_factory=list)

    def filename(self, base_name: str, extension: str = "png") -> str:
        return f"{base_name}.{self.index}.{extension}"


@dataclass(frozen=True)
class KerningPair:
    """Kerning between two characters, in pixels."""

    first: int
    second: int
    amount: float

    def to_dict(self) -> dict[str, Any]:
        return {"first": self.first, "second": self.second, "amount": self.amount}


@dataclass
class InfoBlock:
    """BMFont ``info`` block."""

    face: str
    size: float
    charset: list[str]
    spacing: tuple[int, int]
    bold: int = 0
    italic: int = 0
    unicode: int = 1
    stretch_h: int = 100
    smooth: int = 1
    aa: int = 1
    padding: tuple[int, int, int, int] = (0, 0, 0, 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "face": self.face,
            "size": self.size,
            "bold": self.bold,
            "italic": self.italic,
            "charset": list(self.charset),
            "unicode": self.unicode,
            "stretchH": self.stretch_h,
            "smooth": self.smooth,
            "aa": self.aa,
            "padding": list(self.padding),
            "spacing": list(self.spacing),
        }


@dataclass
class CommonBlock:
    """BMFont ``common`` block."""

    line_height: float
    base: float
    scale_w: int
    scale_h: int
    pages: int
    packed: int = 0
    alpha_chnl: int = 0
    red_chnl: int = 0
    green_chnl: int = 0
    blue_chnl: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "lineHeight": self.line_height,
            "base": self.base,
            "scaleW": self.scale_w,
            "scaleH": self.scale_h,
            "pages": self.pages,
            "packed": self.packed,
            "alphaChnl": self.alpha_chnl,
            "redChnl": self.red_chnl,
            "greenChnl": self.green_chnl,
            "blueChnl": self.blue_chnl,
        }


@dataclass
class FontDescriptor:
    """Complete BMFont descriptor of an atlas."""

    pages: list[str]
    chars: list[GlyphMetrics]
    kernings: list[KerningPair]
    info: InfoBlock
    common: CommonBlock

    def to_dict(self) -> dict[str, Any]:
        """Build the BMFont JSON tree (pages, chars, info, common, kernings)."""
        return {
            "pages": list(self.pages),
            "chars": [char.to_dict() for char in self.chars],
            "info": self.info.to_dict(),
            "common": self.common.to_dict(),
            "kernings": [kerning.to_dict() for kerning in self.kernings],
        }


@dataclass(frozen=True)
class PageTexture:
    """An encoded texture page."""

    filename: str
    data: bytes


@dataclass(frozen=True)
class FontFile:
    """A serialized font descriptor."""

    filename: str
    data: str


@dataclass
class AtlasResult:
    """Everything produced by one successful pipeline run."""

    textures: list[PageTexture]
    font_file: FontFile
    descriptor: FontDescriptor
