"""Core processing algorithms for sdfatlas.

This module contains the atlas pipeline stages:

- Shape description (outline commands to msdfgen shape text and bbox)
- Glyph rendering (bounded parallel msdfgen runs, decoding, metrics)
- Packing (MaxRects placement into fixed-size pages)
- Compositing (page canvases encoded as PNG)
- Descriptor building (line height, base, kerning, BMFont blocks)

Key functions:
- build_shape: Outline commands to ShapeDescription
- split_contours: Outline commands to contours
- describe_shape: Contours to ShapeDescription
- generate_bmfont: Callback-style pipeline entry point

Key classes:
- GlyphRenderCoordinator: Renders a charset with bounded concurrency
- MsdfgenRenderer: Runs the msdfgen binary
- MaxRectsPacker: Packs glyph bitmaps into pages
- PageCompositor: Draws and encodes pages
- FontDescriptorBuilder: Builds the BMFont descriptor
- AtlasProcessor: Runs the whole pipeline
"""

from sdfatlas.core.compositor import PageCompositor
from sdfatlas.core.coordinator import (
    GlyphRenderCoordinator,
    decode_pixels,
    plan_invocation,
    render_glyph,
)
from sdfatlas.core.descriptor import FontDescriptorBuilder, collect_kernings
from sdfatlas.core.packer import FitHeuristic, MaxRectsPacker
from sdfatlas.core.processor import AtlasProcessor, generate_bmfont
from sdfatlas.core.renderer import (
    MsdfgenRenderer,
    Renderer,
    RenderInvocation,
    find_renderer_binary,
)
from sdfatlas.core.shape import build_shape, describe_shape, split_contours

__all__ = [
    # Pipeline
    "AtlasProcessor",
    "generate_bmfont",
    # Stages
    "FitHeuristic",
    "FontDescriptorBuilder",
    "GlyphRenderCoordinator",
    "MaxRectsPacker",
    "PageCompositor",
    # Renderer
    "MsdfgenRenderer",
    "RenderInvocation",
    "Renderer",
    "find_renderer_binary",
    # Functions
    "build_shape",
    "collect_kernings",
    "decode_pixels",
    "describe_shape",
    "plan_invocation",
    "render_glyph",
    "split_contours",
]
