"""Atlas generation pipeline.

This module coordinates the full workflow: font loading, outline
extraction, parallel distance field rendering, packing, page compositing
and descriptor serialization.

Key components:
- AtlasProcessor: Main orchestrator class
- generate_bmfont: Callback-style entry point
"""

import time
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from sdfatlas.config import AtlasConfig, AtlasSettings
from sdfatlas.core.compositor import PageCompositor
from sdfatlas.core.coordinator import GlyphRenderCoordinator, ProgressCallback
from sdfatlas.core.descriptor import FontDescriptorBuilder
from sdfatlas.core.packer import MaxRectsPacker
from sdfatlas.core.renderer import MsdfgenRenderer, Renderer, find_renderer_binary
from sdfatlas.core.shape import split_contours
from sdfatlas.domain import AtlasResult, FontFile, GlyphRenderRequest, PageTexture
from sdfatlas.exceptions import (
    ConfigurationError,
    FontFormatError,
    FontLoadError,
    SdfAtlasError,
)
from sdfatlas.io import FontReader, serialize_descriptor
from sdfatlas.utils import ProcessingLogger, ProcessingStats

CompletionCallback = Callable[
    [Exception | None, list[PageTexture] | None, FontFile | None], None
]


class AtlasProcessor:
    """Orchestrates atlas generation for one font.

    Manages the complete workflow:
    1. Load font file
    2. Extract outlines for every charset character
    3. Render glyphs in parallel with msdfgen
    4. Pack bitmaps into pages in charset order
    5. Composite pages and build the descriptor

    Example:
        settings = AtlasSettings()
        processor = AtlasProcessor(settings)
        result = processor.process(Path("font.ttf"))
    """

    def __init__(self, settings: AtlasSettings, renderer: Renderer | None = None) -> None:
        """Initialize the atlas processor.

        Args:
            settings: Atlas, render and logging settings
            renderer: Renderer capability (default: msdfgen subprocess)
        """
        self.settings = settings
        self.logger = structlog.get_logger("sdfatlas")
        self.processing_logger = ProcessingLogger(self.logger)
        self._renderer = renderer

    @property
    def stats(self) -> ProcessingStats:
        """Statistics of the last run."""
        return self.processing_logger.stats

    def resolve_renderer(self) -> Renderer:
        """Return the injected renderer or locate the msdfgen binary.

        Raises:
            RendererNotFoundError: If no binary exists for this platform
        """
        if self._renderer is None:
            render_config = self.settings.render
            binary = find_renderer_binary(render_config.binary_path)
            self.logger.info("Using msdfgen binary", binary=str(binary))
            self._renderer = MsdfgenRenderer(binary, timeout=render_config.timeout_seconds)
        return self._renderer

    def build_requests(self, reader: FontReader) -> list[GlyphRenderRequest]:
        """Create one render request per charset character."""
        config = self.settings.atlas
        return [
            GlyphRenderRequest(
                character=char,
                contours=tuple(split_contours(reader.get_outline(char, config.font_size))),
                font_size=config.font_size,
                field_type=config.field_type,
                distance_range=config.distance_range,
                advance_width=reader.get_advance_width(char),
            )
            for char in config.charset
        ]

    def process(
        self,
        font_path: Path,
        progress_callback: ProgressCallback | None = None,
    ) -> AtlasResult:
        """Generate the atlas of a font.

        Args:
            font_path: Path to input font file (TTF or OTF)
            progress_callback: Optional callback(completed, total, character)
                called as glyphs finish rendering

        Returns:
            Encoded pages, serialized descriptor and the descriptor itself

        Raises:
            RendererNotFoundError: If no msdfgen binary is available
            FontLoadError: If the font cannot be loaded
            FontFormatError: If the font has no outlines
            GlyphDecodeError: If renderer output cannot be decoded
            RendererProcessError: If a renderer invocation fails
            GlyphTooLargeError: If a glyph does not fit into a page
        """
        config = self.settings.atlas
        self.processing_logger = ProcessingLogger(self.logger)
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        renderer = self.resolve_renderer()

        self.logger.info(
            "Starting atlas generation",
            input=str(font_path),
            font_size=config.font_size,
            field_type=config.field_type.value,
            charset_size=len(config.charset),
        )

        reader = FontReader(font_path)
        try:
            reader.load()
        except Exception as e:
            raise FontLoadError(str(font_path), str(e)) from e

        try:
            if not reader.has_outlines:
                raise FontFormatError(str(font_path), "font has no glyph outlines")

            font_metrics = reader.metrics
            filename = config.filename
            if not filename:
                filename = reader.full_name
                self.logger.info("Use font-face as filename", filename=filename)

            self.logger.info(
                "Font loaded",
                format=reader.format,
                upm=font_metrics.units_per_em,
                glyph_count=reader.glyph_count,
            )

            requests = self.build_requests(reader)
            stats.glyph_count = len(requests)

            coordinator = GlyphRenderCoordinator(
                renderer,
                font_metrics,
                max_workers=self.settings.render.max_workers,
                round_decimal=config.round_decimal,
                processing_logger=self.processing_logger,
            )
            glyphs = coordinator.render_all(requests, progress_callback=progress_callback)

            packer = MaxRectsPacker(
                config.texture_width,
                config.texture_height,
                padding=config.texture_padding,
            )
            packer.add_all(glyphs)
            stats.page_count = len(packer.pages)

            compositor = PageCompositor(
                config.texture_width, config.texture_height, config.field_type
            )
            textures = compositor.compose(packer.pages, filename)

            builder = FontDescriptorBuilder(reader, font_metrics, config, face=filename)
            descriptor = builder.build(
                glyphs, packer.pages, [texture.filename for texture in textures]
            )
            stats.kerning_count = len(descriptor.kernings)

            font_file = FontFile(
                filename=f"{filename}.{config.output_type.extension}",
                data=serialize_descriptor(builder.to_tree(descriptor), config.output_type),
            )

        finally:
            reader.close()

        stats.end_time = time.time()

        self.logger.info(
            "Atlas complete",
            glyphs=stats.glyph_count,
            blank=stats.blank_count,
            pages=stats.page_count,
            kernings=stats.kerning_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return AtlasResult(textures=textures, font_file=font_file, descriptor=descriptor)


def _atlas_config(options: AtlasConfig | Mapping[str, Any] | None) -> AtlasConfig:
    if options is None:
        return AtlasConfig()
    if isinstance(options, AtlasConfig):
        return options
    if not isinstance(options, Mapping):
        raise ConfigurationError("options must be a mapping or AtlasConfig")
    try:
        return AtlasConfig.model_validate(dict(options))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid options: {e}") from e


def generate_bmfont(
    font_path: str | Path,
    options: AtlasConfig | Mapping[str, Any] | CompletionCallback | None = None,
    callback: CompletionCallback | None = None,
    renderer: Renderer | None = None,
) -> None:
    """Create a BMFont compatible signed distance field atlas from a font.

    Configuration problems are raised immediately, before any rendering.
    The outcome of the run is delivered to ``callback(error, textures,
    font_file)`` exactly once: either the first error of the run (of any
    type), or every page texture plus the serialized descriptor.

    Args:
        font_path: Path to the input font
        options: Option mapping (``fontSize``, ``charset``, ``fieldType``, ...)
            or an AtlasConfig; may be the callback when no options are given
        callback: Completion callback
        renderer: Renderer capability (default: msdfgen subprocess)

    Raises:
        ConfigurationError: Invalid options, font path or callback
        FontLoadError: If the font file does not exist
        RendererNotFoundError: If no msdfgen binary is available
    """
    if not font_path or not isinstance(font_path, (str, Path)):
        raise ConfigurationError("must specify a font path")
    if callable(options) and not isinstance(options, Mapping):
        callback, options = options, None
    if callback is None:
        raise ConfigurationError("missing callback")
    if not callable(callback):
        raise ConfigurationError("expected callback to be a function")

    config = _atlas_config(options)  # type: ignore[arg-type]
    path = Path(font_path)
    if not path.is_file():
        raise FontLoadError(str(path), "file not found")

    processor = AtlasProcessor(AtlasSettings(atlas=config), renderer=renderer)
    processor.resolve_renderer()

    try:
        result = processor.process(path)
    except Exception as e:
        if not isinstance(e, SdfAtlasError):
            processor.logger.exception("Atlas generation failed", input=str(path))
        callback(e, None, None)
        return

    callback(None, result.textures, result.font_file)
