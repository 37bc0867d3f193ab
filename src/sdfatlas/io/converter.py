"""Converters between fontTools glyphs and domain outline segments.

Glyphs are drawn through a fontTools pen that scales design units to pixels
and flips the Y axis, so outlines come out in the y-down pixel space used
by msdfgen shape descriptions and BMFont offsets.
"""

from typing import Any

from fontTools.pens.basePen import BasePen

from sdfatlas.domain.contour import Segment

Point = tuple[float, float]


class SegmentPen(BasePen):
    """Collect pen commands as scaled, y-down ``Segment`` objects.

    BasePen decomposes components and splits TrueType quadratic runs with
    implied on-curve points into single quadratic segments, so only the
    one-segment callbacks need handling here.

    Example:
        pen = SegmentPen(glyph_set, scale=42 / 1000)
        glyph_set["A"].draw(pen)
        segments = pen.segments
    """

    def __init__(self, glyph_set: Any, scale: float) -> None:
        super().__init__(glyph_set)
        self.scale = scale
        self.segments: list[Segment] = []

    def _map(self, point: Point) -> Point:
        x, y = point
        return x * self.scale, -y * self.scale

    def _moveTo(self, pt: Point) -> None:
        x, y = self._map(pt)
        self.segments.append(Segment.move(x, y))

    def _lineTo(self, pt: Point) -> None:
        x, y = self._map(pt)
        self.segments.append(Segment.line(x, y))

    def _qCurveToOne(self, pt1: Point, pt2: Point) -> None:
        cx, cy = self._map(pt1)
        x, y = self._map(pt2)
        self.segments.append(Segment.quadratic(cx, cy, x, y))

    def _curveToOne(self, pt1: Point, pt2: Point, pt3: Point) -> None:
        c1x, c1y = self._map(pt1)
        c2x, c2y = self._map(pt2)
        x, y = self._map(pt3)
        self.segments.append(Segment.cubic(c1x, c1y, c2x, c2y, x, y))

    def _closePath(self) -> None:
        self.segments.append(Segment.close())

    def _endPath(self) -> None:
        # Open contours end without a close command
        pass


def fonttools_glyph_to_segments(
    glyph_name: str,
    glyph_set: Any,
    scale: float,
) -> list[Segment]:
    """Draw a fontTools glyph into outline segments.

    Args:
        glyph_name: Name of the glyph in the glyph set
        glyph_set: The font's glyph set (``TTFont.getGlyphSet()``)
        scale: Pixels per font unit

    Returns:
        Segments in drawing order, y-down pixel space
    """
    pen = SegmentPen(glyph_set, scale)
    glyph_set[glyph_name].draw(pen)
    return pen.segments
