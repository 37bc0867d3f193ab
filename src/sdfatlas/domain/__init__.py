"""Domain models for sdfatlas.

This module contains the records that flow through the atlas pipeline.
All models are:

- Plain dataclasses, frozen where nothing downstream mutates them
- Independent of fontTools, Pillow and msdfgen details

Key classes:
- Segment, Contour: Glyph outlines in pixel space
- BoundingBox, ShapeDescription: Output of the shape builder
- GlyphRenderRequest, GlyphBitmap, GlyphMetrics: Per-glyph render records
- PlacedRect, Page: Packing results
- FontDescriptor, KerningPair: The BMFont descriptor
- AtlasResult: Encoded pages plus the serialized descriptor
"""

from sdfatlas.domain.atlas import (
    AtlasResult,
    CommonBlock,
    FontDescriptor,
    FontFile,
    InfoBlock,
    KerningPair,
    Page,
    PageTexture,
    PlacedRect,
)
from sdfatlas.domain.contour import (
    BoundingBox,
    Contour,
    Segment,
    SegmentKind,
    ShapeDescription,
)
from sdfatlas.domain.glyph import (
    CHANNEL_MASK_ALL,
    FontMetrics,
    GlyphBitmap,
    GlyphMetrics,
    GlyphRenderRequest,
    RenderedGlyph,
)

__all__: list[str] = [
    "CHANNEL_MASK_ALL",
    # Outline types
    "SegmentKind",
    "Segment",
    "Contour",
    "BoundingBox",
    "ShapeDescription",
    # Glyph types
    "FontMetrics",
    "GlyphRenderRequest",
    "GlyphBitmap",
    "GlyphMetrics",
    "RenderedGlyph",
    # Atlas types
    "PlacedRect",
    "Page",
    "KerningPair",
    "InfoBlock",
    "CommonBlock",
    "FontDescriptor",
    "PageTexture",
    "FontFile",
    "AtlasResult",
]
