"""BMFont descriptor construction.

Derives the font-wide values (line height, base, kerning) once every glyph
is packed and assembles the descriptor blocks.
"""

from collections.abc import Sequence
from typing import Any, Protocol

from sdfatlas.config.settings import AtlasConfig
from sdfatlas.domain.atlas import (
    CommonBlock,
    FontDescriptor,
    InfoBlock,
    KerningPair,
    Page,
)
from sdfatlas.domain.glyph import FontMetrics, RenderedGlyph
from sdfatlas.utils.numbers import round_all_values


class KerningSource(Protocol):
    """Anything that can report kerning between two characters."""

    def get_kerning(self, first: str, second: str) -> int: ...


def collect_kernings(
    source: KerningSource,
    charset: Sequence[str],
    scale: float,
) -> list[KerningPair]:
    """Query every ordered pair of the charset, self pairs included.

    Args:
        source: Kerning source (font reader)
        charset: Characters of the atlas
        scale: Pixels per font unit

    Returns:
        Non-zero kerning pairs scaled to pixels, in charset order
    """
    kernings: list[KerningPair] = []
    for first in charset:
        for second in charset:
            amount = source.get_kerning(first, second)
            if amount != 0:
                kernings.append(
                    KerningPair(first=ord(first), second=ord(second), amount=amount * scale)
                )
    return kernings


class FontDescriptorBuilder:
    """Builds the BMFont descriptor of a packed atlas.

    Example:
        builder = FontDescriptorBuilder(reader, reader.metrics, config, face="Roboto")
        descriptor = builder.build(glyphs, packer.pages, page_files)
    """

    def __init__(
        self,
        kerning_source: KerningSource,
        font_metrics: FontMetrics,
        config: AtlasConfig,
        face: str,
    ) -> None:
        self.kerning_source = kerning_source
        self.font_metrics = font_metrics
        self.config = config
        self.face = face

    @property
    def scale(self) -> float:
        return self.font_metrics.scale(self.config.font_size)

    def line_height(self) -> float:
        """Ascender to descender plus line gap, in pixels."""
        metrics = self.font_metrics
        return (metrics.ascender - metrics.descender + metrics.line_gap) * self.scale

    def base(self) -> float:
        """Baseline position from the top of the line, in pixels."""
        return self.font_metrics.ascender * self.scale + self.config.distance_range

    def build(
        self,
        glyphs: Sequence[RenderedGlyph],
        pages: Sequence[Page],
        page_files: Sequence[str],
    ) -> FontDescriptor:
        """Assemble the descriptor.

        Args:
            glyphs: Packed glyphs in charset order
            pages: Packed pages
            page_files: Texture filename of each page

        Returns:
            The font descriptor
        """
        config = self.config
        padding = config.texture_padding

        info = InfoBlock(
            face=self.face,
            size=config.font_size,
            charset=list(config.charset),
            spacing=(padding, padding),
        )
        common = CommonBlock(
            line_height=self.line_height(),
            base=self.base(),
            scale_w=config.texture_width,
            scale_h=config.texture_height,
            pages=len(pages),
        )

        return FontDescriptor(
            pages=list(page_files),
            chars=[glyph.metrics for glyph in glyphs],
            kernings=collect_kernings(self.kerning_source, config.charset, self.scale),
            info=info,
            common=common,
        )

    def to_tree(self, descriptor: FontDescriptor) -> dict[str, Any]:
        """Descriptor tree, rounded as a whole when ``round_decimal`` is set."""
        tree = descriptor.to_dict()
        if self.config.round_decimal is not None:
            tree = round_all_values(tree, self.config.round_decimal)
        return tree
