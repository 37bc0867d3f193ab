"""Shape description builder.

Converts glyph outline commands into msdfgen's ``-defineshape`` grammar
and the tight bounding box of the outline.

Grammar, one brace-delimited block per contour:

- line (and the opening move): ``x, y``
- quadratic: ``(cx, cy); x, y``
- cubic: ``(c1x, c1y; c2x, c2y); x, y``
- close: nothing; msdfgen rejects a repeated terminal point

Commands are separated by ``"; "``. The separator is written after every
command but the last one of its contour, including a close command.
"""

from collections.abc import Iterable, Sequence

from sdfatlas.domain.contour import (
    BoundingBox,
    Contour,
    Segment,
    SegmentKind,
    ShapeDescription,
)
from sdfatlas.utils.numbers import format_number

SEPARATOR = "; "


def split_contours(commands: Iterable[Segment]) -> list[Contour]:
    """Group outline commands into contours.

    A move starts a new contour. The last contour is always kept, so an
    outline without commands produces a single empty contour.

    Args:
        commands: Outline commands in drawing order

    Returns:
        Contours in drawing order
    """
    contours: list[Contour] = []
    current: list[Segment] = []

    for command in commands:
        if command.kind is SegmentKind.MOVE and current:
            contours.append(Contour(current))
            current = []
        current.append(command)

    contours.append(Contour(current))
    return contours


def _point(x: float, y: float) -> str:
    return f"{format_number(x)}, {format_number(y)}"


def _describe_segment(segment: Segment) -> str:
    if segment.kind is SegmentKind.CUBIC and segment.c1 and segment.c2:
        return f"({_point(*segment.c1)}; {_point(*segment.c2)}); {_point(segment.x, segment.y)}"
    if segment.kind is SegmentKind.QUADRATIC and segment.c1:
        return f"({_point(*segment.c1)}); {_point(segment.x, segment.y)}"
    return _point(segment.x, segment.y)


def describe_shape(contours: Sequence[Contour]) -> ShapeDescription:
    """Build the msdfgen shape description and bounding box of contours.

    The bounding box covers segment end points only; control points and
    close commands are ignored. It stays the zero box when no segment has
    an end point.

    Args:
        contours: Glyph contours

    Returns:
        Shape description text and bounding box
    """
    parts: list[str] = []
    bbox: BoundingBox | None = None

    for contour in contours:
        parts.append("{")
        last_index = len(contour.segments) - 1
        for index, segment in enumerate(contour.segments):
            if not segment.is_close:
                parts.append(_describe_segment(segment))
                if bbox is None:
                    bbox = BoundingBox.from_point(segment.x, segment.y)
                else:
                    bbox = bbox.include(segment.x, segment.y)
            if index != last_index:
                parts.append(SEPARATOR)
        parts.append("}")

    return ShapeDescription(
        description="".join(parts),
        bounding_box=bbox if bbox is not None else BoundingBox(),
    )


def build_shape(commands: Iterable[Segment]) -> ShapeDescription:
    """Split outline commands into contours and describe them."""
    return describe_shape(split_contours(commands))


def degenerate_contours(contours: Sequence[Contour]) -> list[int]:
    """Return indices of contours made of a single command."""
    return [index for index, contour in enumerate(contours) if contour.is_degenerate()]
