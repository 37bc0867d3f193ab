"""Bounded-concurrency rendering of glyph distance fields.

This module turns glyph render requests into decoded RGBA bitmaps and
BMFont metrics. Renderer invocations run on a fixed-size thread pool; each
worker only waits on its own msdfgen process, so no state is shared between
workers. Results are written into a charset-ordered buffer and returned
only once every glyph has been rendered.

Key components:
- plan_invocation: Pixel size and translation of a glyph
- decode_pixels: Renderer text output to RGBA bytes
- render_glyph: Full per-glyph pipeline
- GlyphRenderCoordinator: Parallel, fail-fast orchestration
"""

import re
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

import structlog

from sdfatlas.core.renderer import Renderer, RenderInvocation
from sdfatlas.core.shape import degenerate_contours, describe_shape
from sdfatlas.domain.contour import ShapeDescription
from sdfatlas.domain.glyph import (
    CHANNEL_MASK_ALL,
    FontMetrics,
    GlyphBitmap,
    GlyphMetrics,
    GlyphRenderRequest,
    RenderedGlyph,
)
from sdfatlas.exceptions import GlyphDecodeError
from sdfatlas.utils.logging import ProcessingLogger
from sdfatlas.utils.numbers import js_round, round_number

DEFAULT_MAX_WORKERS = 15

OPAQUE = 255

_HEX_TOKEN = re.compile(r"[0-9a-fA-F]+")

ProgressCallback = Callable[[int, int, str], None]


def plan_invocation(
    request: GlyphRenderRequest,
    shape: ShapeDescription,
    round_decimal: int | None = None,
) -> RenderInvocation:
    """Compute the pixel size and translation of a glyph.

    The bitmap covers the rounded bounding box plus ``distance_range``
    pixels of padding on every side.

    Args:
        request: Glyph render request
        shape: Shape description of the glyph
        round_decimal: Round translations to this many decimals

    Returns:
        Renderer invocation for the glyph
    """
    bbox = shape.bounding_box
    pad = request.distance_range

    width = js_round(bbox.right - bbox.left) + pad + pad
    height = js_round(bbox.top - bbox.bottom) + pad + pad
    translate_x = -bbox.left + pad
    translate_y = -bbox.bottom + pad
    if round_decimal is not None:
        translate_x = round_number(translate_x, round_decimal)
        translate_y = round_number(translate_y, round_decimal)

    return RenderInvocation(
        character=request.character,
        field_type=request.field_type,
        width=int(width),
        height=int(height),
        translate_x=translate_x,
        translate_y=translate_y,
        distance_range=request.distance_range,
        shape_description=shape.description,
    )


def decode_pixels(output: str, invocation: RenderInvocation, command: str) -> bytes | None:
    """Decode renderer text output into RGBA bytes.

    Every hexadecimal token is one channel sample. Multi-channel fields keep
    three colour channels and get an opaque alpha; single-channel fields are
    replicated into R, G, B and used as alpha.

    Args:
        output: Renderer standard output
        invocation: The invocation that produced the output
        command: Command line, for error reports

    Returns:
        RGBA bytes, or None when the field is empty (blank glyph)

    Raises:
        GlyphDecodeError: If the sample count is not a whole number of
            channels per pixel
    """
    samples = [int(token, 16) for token in _HEX_TOKEN.findall(output)]
    pixel_count = invocation.width * invocation.height

    if pixel_count == 0 or not samples:
        return None

    if len(samples) % pixel_count != 0:
        raise GlyphDecodeError(
            invocation.character,
            f"renderer returned {len(samples)} samples for "
            f"{invocation.width}x{invocation.height} pixels",
            command,
        )
    if not any(samples):
        return None
    channel_count = len(samples) // pixel_count

    pixels = bytearray()
    if invocation.field_type.is_multichannel:
        for start in range(0, len(samples), channel_count):
            channels = samples[start : start + min(channel_count, 3)]
            while len(channels) < 3:
                channels.append(channels[-1])
            pixels.extend(min(value, 255) for value in channels)
            pixels.append(OPAQUE)
    else:
        for start in range(0, len(samples), channel_count):
            value = min(samples[start], 255)
            pixels.extend((value, value, value, value))

    return bytes(pixels)


def render_glyph(
    request: GlyphRenderRequest,
    renderer: Renderer,
    font_metrics: FontMetrics,
    round_decimal: int | None = None,
    processing_logger: ProcessingLogger | None = None,
) -> RenderedGlyph:
    """Render, decode and measure one glyph.

    Args:
        request: Glyph render request
        renderer: Renderer capability
        font_metrics: Font vertical metrics (for the baseline)
        round_decimal: Round translations to this many decimals
        processing_logger: Receives blank/degenerate glyph events

    Returns:
        Rendered glyph with bitmap and metrics; blank glyphs have a zero
        sized bitmap but full metrics

    Raises:
        GlyphDecodeError: If the renderer output cannot be decoded
        RendererProcessError: If the renderer fails
    """
    start_time = time.time()
    character = request.character

    if processing_logger is not None:
        for index in degenerate_contours(request.contours):
            processing_logger.log_degenerate_contour(character, index)

    shape = describe_shape(request.contours)
    invocation = plan_invocation(request, shape, round_decimal)
    command = invocation.command_line()

    output = renderer(invocation)
    pixels = decode_pixels(output, invocation, command)

    if pixels is None:
        bitmap = GlyphBitmap.blank()
        if processing_logger is not None:
            processing_logger.log_blank_glyph(character, command)
    else:
        bitmap = GlyphBitmap(width=invocation.width, height=invocation.height, pixels=pixels)

    scale = font_metrics.scale(request.font_size)
    baseline = font_metrics.ascender * scale
    pad = request.distance_range
    bbox = shape.bounding_box

    metrics = GlyphMetrics(
        id=ord(character),
        width=bitmap.width,
        height=bitmap.height,
        xoffset=bbox.left - pad,
        yoffset=bbox.bottom - pad + baseline,
        xadvance=request.advance_width * scale,
        chnl=CHANNEL_MASK_ALL,
    )

    if processing_logger is not None and pixels is not None:
        duration_ms = (time.time() - start_time) * 1000
        processing_logger.log_glyph_rendered(character, bitmap.width, bitmap.height, duration_ms)

    return RenderedGlyph(character=character, bitmap=bitmap, metrics=metrics, command=command)


class GlyphRenderCoordinator:
    """Renders a charset with a bounded number of concurrent renderer runs.

    The first failure cancels every pending glyph and is re-raised; no
    partial results are returned.

    Example:
        coordinator = GlyphRenderCoordinator(renderer, reader.metrics)
        glyphs = coordinator.render_all(requests)
    """

    def __init__(
        self,
        renderer: Renderer,
        font_metrics: FontMetrics,
        max_workers: int = DEFAULT_MAX_WORKERS,
        round_decimal: int | None = None,
        processing_logger: ProcessingLogger | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            renderer: Renderer capability
            font_metrics: Font vertical metrics
            max_workers: Maximum simultaneous renderer invocations
            round_decimal: Round translations to this many decimals
            processing_logger: Progress and anomaly logger
        """
        self.renderer = renderer
        self.font_metrics = font_metrics
        self.max_workers = max_workers
        self.round_decimal = round_decimal
        self.logger = structlog.get_logger("sdfatlas")
        self.processing_logger = processing_logger or ProcessingLogger(self.logger)

    def render_one(self, request: GlyphRenderRequest) -> RenderedGlyph:
        """Render a single glyph on the calling thread."""
        return render_glyph(
            request,
            self.renderer,
            self.font_metrics,
            round_decimal=self.round_decimal,
            processing_logger=self.processing_logger,
        )

    def render_all(
        self,
        requests: Sequence[GlyphRenderRequest],
        progress_callback: ProgressCallback | None = None,
    ) -> list[RenderedGlyph]:
        """Render every request with bounded parallelism.

        Args:
            requests: Render requests in charset order
            progress_callback: Optional callback(completed, total, character)

        Returns:
            Rendered glyphs in the order of ``requests``

        Raises:
            GlyphDecodeError: First decode failure
            RendererProcessError: First renderer failure
        """
        total = len(requests)
        results: list[RenderedGlyph | None] = [None] * total

        self.logger.info(
            "Starting parallel rendering",
            glyph_count=total,
            max_workers=self.max_workers,
        )

        completed = 0
        pending_futures: dict[Future[RenderedGlyph], int] = {}

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            for index, request in enumerate(requests):
                future = executor.submit(self.render_one, request)
                pending_futures[future] = index

            try:
                for future in as_completed(list(pending_futures)):
                    index = pending_futures.pop(future)
                    try:
                        results[index] = future.result()
                    except Exception as e:
                        self.processing_logger.log_glyph_error(requests[index].character, e)
                        raise

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, requests[index].character)

            except BaseException:
                cancelled_count = sum(1 for f in pending_futures if f.cancel())
                self.logger.info(
                    "Rendering aborted",
                    completed=completed,
                    cancelled=cancelled_count,
                )
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return [glyph for glyph in results if glyph is not None]
