"""Core geometric types for glyph outlines.

This module defines the outline types consumed by the shape builder:
- SegmentKind: Enum for the drawing command of a segment
- Segment: One outline command (end point plus optional control points)
- Contour: An ordered run of segments starting at a move
- BoundingBox: Tight box over segment end points
- ShapeDescription: msdfgen shape text plus its bounding box
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SegmentKind(Enum):
    """Drawing command of an outline segment."""

    MOVE = "M"
    LINE = "L"
    QUADRATIC = "Q"
    CUBIC = "C"
    CLOSE = "Z"


@dataclass(frozen=True, slots=True)
class Segment:
    """One outline command in pixel space.

    Attributes:
        kind: Drawing command
        x: End point X coordinate (unused for CLOSE)
        y: End point Y coordinate (unused for CLOSE)
        c1: First control point (quadratic and cubic segments)
        c2: Second control point (cubic segments)
    """

    kind: SegmentKind
    x: float = 0.0
    y: float = 0.0
    c1: tuple[float, float] | None = None
    c2: tuple[float, float] | None = None

    @classmethod
    def move(cls, x: float, y: float) -> "Segment":
        return cls(SegmentKind.MOVE, x, y)

    @classmethod
    def line(cls, x: float, y: float) -> "Segment":
        return cls(SegmentKind.LINE, x, y)

    @classmethod
    def quadratic(cls, cx: float, cy: float, x: float, y: float) -> "Segment":
        return cls(SegmentKind.QUADRATIC, x, y, c1=(cx, cy))

    @classmethod
    def cubic(
        cls, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float
    ) -> "Segment":
        return cls(SegmentKind.CUBIC, x, y, c1=(c1x, c1y), c2=(c2x, c2y))

    @classmethod
    def close(cls) -> "Segment":
        return cls(SegmentKind.CLOSE)

    @property
    def is_close(self) -> bool:
        return self.kind is SegmentKind.CLOSE

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with type, end point and control points
        """
        data: dict[str, Any] = {"type": self.kind.value}
        if not self.is_close:
            data["x"] = self.x
            data["y"] = self.y
        if self.c1 is not None:
            data["x1"], data["y1"] = self.c1
        if self.c2 is not None:
            data["x2"], data["y2"] = self.c2
        return data


@dataclass
class Contour:
    """An ordered run of segments, normally starting with a move.

    Attributes:
        segments: Segments in drawing order
    """

    segments: list[Segment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.segments)

    def is_empty(self) -> bool:
        return not self.segments

    def is_degenerate(self) -> bool:
        """Check for a contour made of a single command.

        A lone move (or a lone point) cannot be rendered; it usually means
        the outline could not be normalized.

        Returns:
            True if the contour has exactly one segment
        """
        return len(self.segments) == 1


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box.

    In the y-down pixel space used for rendering, ``bottom`` is the smaller
    Y value, i.e. the visual top edge of the glyph.

    Attributes:
        left: Minimum X
        bottom: Minimum Y
        right: Maximum X
        top: Maximum Y
    """

    left: float = 0.0
    bottom: float = 0.0
    right: float = 0.0
    top: float = 0.0

    @classmethod
    def from_point(cls, x: float, y: float) -> "BoundingBox":
        return cls(x, y, x, y)

    def include(self, x: float, y: float) -> "BoundingBox":
        """Return a box grown to contain the given point."""
        return BoundingBox(
            left=min(self.left, x),
            bottom=min(self.bottom, y),
            right=max(self.right, x),
            top=max(self.top, y),
        )

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    def is_zero(self) -> bool:
        return self.left == self.bottom == self.right == self.top == 0


@dataclass(frozen=True, slots=True)
class ShapeDescription:
    """Textual msdfgen shape plus the tight bounding box of its end points."""

    description: str
    bounding_box: BoundingBox
