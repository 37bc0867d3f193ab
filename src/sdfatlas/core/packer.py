"""MaxRects bin packing of glyph bitmaps into texture pages.

Each page keeps the list of maximal free rectangles. A glyph is placed at
the origin of the free rectangle that fits it best, every free rectangle it
overlaps is split into the remaining maximal pieces, and free rectangles
that are contained in another one are dropped.

Padding is handled by packing ``(w + padding) x (h + padding)`` rects into a
``(width + padding) x (height + padding)`` area: neighbours end up at least
``padding`` pixels apart and every glyph stays inside the page.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

import structlog

from sdfatlas.domain.atlas import Page, PlacedRect
from sdfatlas.domain.glyph import RenderedGlyph
from sdfatlas.exceptions import GlyphTooLargeError


class FitHeuristic(Enum):
    """Free rectangle selection rule."""

    BEST_SHORT_SIDE_FIT = "bssf"
    BEST_AREA_FIT = "baf"


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle in page pixels (y-down)."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def intersects(self, other: "Rect") -> bool:
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def contains(self, other: "Rect") -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


class MaxRectsBin:
    """Free space bookkeeping of a single page."""

    def __init__(self, width: int, height: int, padding: int) -> None:
        self.width = width
        self.height = height
        self.padding = padding
        self.free_rects: list[Rect] = [Rect(0, 0, width + padding, height + padding)]
        self.used_rects: list[Rect] = []

    def find_position(
        self, width: int, height: int, heuristic: FitHeuristic
    ) -> tuple[Rect, tuple[int, int]] | None:
        """Find the best free rectangle for a padded rect.

        Returns:
            (placement, score) of the best candidate, None if nothing fits
        """
        padded_w = width + self.padding
        padded_h = height + self.padding
        best: tuple[Rect, tuple[int, int]] | None = None

        for free in self.free_rects:
            if padded_w > free.width or padded_h > free.height:
                continue
            leftover_w = free.width - padded_w
            leftover_h = free.height - padded_h
            short_side = min(leftover_w, leftover_h)
            long_side = max(leftover_w, leftover_h)
            if heuristic is FitHeuristic.BEST_AREA_FIT:
                score = (free.area - padded_w * padded_h, short_side)
            else:
                score = (short_side, long_side)
            if best is None or score < best[1]:
                best = (Rect(free.x, free.y, padded_w, padded_h), score)

        return best

    def place(self, placed: Rect) -> None:
        """Commit a padded rect and update the free rectangles."""
        new_free: list[Rect] = []
        for free in self.free_rects:
            if free.intersects(placed):
                new_free.extend(_split_free_rect(free, placed))
            else:
                new_free.append(free)

        self.free_rects = _prune(new_free)
        self.used_rects.append(placed)


def _split_free_rect(free: Rect, used: Rect) -> list[Rect]:
    """Split a free rectangle around a used one into maximal pieces."""
    pieces: list[Rect] = []
    # above
    if used.y > free.y:
        pieces.append(Rect(free.x, free.y, free.width, used.y - free.y))
    # below
    if used.bottom < free.bottom:
        pieces.append(Rect(free.x, used.bottom, free.width, free.bottom - used.bottom))
    # left
    if used.x > free.x:
        pieces.append(Rect(free.x, free.y, used.x - free.x, free.height))
    # right
    if used.right < free.right:
        pieces.append(Rect(used.right, free.y, free.right - used.right, free.height))
    return [piece for piece in pieces if piece.width > 0 and piece.height > 0]


def _prune(rects: list[Rect]) -> list[Rect]:
    """Drop degenerate rectangles and rectangles contained in another."""
    rects = [rect for rect in rects if rect.area > 0]
    kept: list[Rect] = []
    for i, rect in enumerate(rects):
        contained = False
        for j, other in enumerate(rects):
            if i == j or not other.contains(rect):
                continue
            # keep the first of two identical rectangles
            if rect != other or j < i:
                contained = True
                break
        if not contained:
            kept.append(rect)
    return kept


class MaxRectsPacker:
    """Packs glyph bitmaps into as few fixed-size pages as possible.

    Glyphs are placed in the order they are added. Pages are tried in
    creation order and a new page is opened when none has room. Blank
    glyphs are never packed.

    Example:
        packer = MaxRectsPacker(512, 512, padding=2)
        placed = packer.add_all(glyphs)
        pages = packer.pages
    """

    def __init__(
        self,
        width: int,
        height: int,
        padding: int = 0,
        heuristic: FitHeuristic = FitHeuristic.BEST_SHORT_SIDE_FIT,
    ) -> None:
        """Initialize the packer.

        Args:
            width: Page width in pixels
            height: Page height in pixels
            padding: Minimum distance between packed glyphs
            heuristic: Free rectangle selection rule
        """
        self.width = width
        self.height = height
        self.padding = padding
        self.heuristic = heuristic
        self.pages: list[Page] = []
        self._bins: list[MaxRectsBin] = []
        self.logger = structlog.get_logger("sdfatlas")

    def add(self, glyph: RenderedGlyph) -> PlacedRect | None:
        """Place one glyph.

        The glyph's metrics receive the page index and position. Blank glyphs
        keep ``page = None`` at ``(0, 0)``.

        Returns:
            The placement, or None for blank glyphs

        Raises:
            GlyphTooLargeError: If the glyph does not fit into an empty page
        """
        if glyph.is_blank:
            glyph.metrics.page = None
            glyph.metrics.x = 0
            glyph.metrics.y = 0
            return None

        width = glyph.bitmap.width
        height = glyph.bitmap.height
        if width > self.width or height > self.height:
            raise GlyphTooLargeError(glyph.character, width, height, self.width, self.height)

        for page_index, page_bin in enumerate(self._bins):
            found = page_bin.find_position(width, height, self.heuristic)
            if found is not None:
                return self._commit(glyph, page_index, found[0])

        page_bin = self._open_page()
        found = page_bin.find_position(width, height, self.heuristic)
        if found is None:
            raise GlyphTooLargeError(glyph.character, width, height, self.width, self.height)
        return self._commit(glyph, len(self._bins) - 1, found[0])

    def add_all(self, glyphs: Iterable[RenderedGlyph]) -> list[PlacedRect]:
        """Place glyphs in iteration order.

        Returns:
            Placements of the non-blank glyphs, in placement order
        """
        placed: list[PlacedRect] = []
        for glyph in glyphs:
            rect = self.add(glyph)
            if rect is not None:
                placed.append(rect)
        return placed

    def _open_page(self) -> MaxRectsBin:
        page_bin = MaxRectsBin(self.width, self.height, self.padding)
        self._bins.append(page_bin)
        self.pages.append(Page(index=len(self.pages), width=self.width, height=self.height))
        self.logger.debug("Opened atlas page", page=len(self.pages) - 1)
        return page_bin

    def _commit(self, glyph: RenderedGlyph, page_index: int, placement: Rect) -> PlacedRect:
        self._bins[page_index].place(placement)
        glyph.metrics.page = page_index
        glyph.metrics.x = placement.x
        glyph.metrics.y = placement.y

        rect = PlacedRect(glyph=glyph, page_index=page_index, x=placement.x, y=placement.y)
        self.pages[page_index].rects.append(rect)
        return rect
