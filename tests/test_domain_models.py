"""Tests for domain models to verify they work correctly."""

import pytest

from sdfatlas.config import FieldType
from sdfatlas.domain import (
    CHANNEL_MASK_ALL,
    BoundingBox,
    CommonBlock,
    Contour,
    FontDescriptor,
    FontMetrics,
    GlyphBitmap,
    GlyphMetrics,
    GlyphRenderRequest,
    InfoBlock,
    KerningPair,
    Page,
    Segment,
    SegmentKind,
)


class TestSegment:
    """Tests for Segment class."""

    def test_line(self) -> None:
        """Test line segment creation."""
        s = Segment.line(10.0, -20.0)
        assert s.kind is SegmentKind.LINE
        assert (s.x, s.y) == (10.0, -20.0)
        assert s.c1 is None and s.c2 is None

    def test_cubic_control_points(self) -> None:
        """Test cubic segments keep both control points."""
        s = Segment.cubic(1, 2, 3, 4, 5, 6)
        assert s.c1 == (1, 2)
        assert s.c2 == (3, 4)
        assert (s.x, s.y) == (5, 6)

    def test_close(self) -> None:
        """Test close segments carry no coordinates in their dict form."""
        s = Segment.close()
        assert s.is_close
        assert s.to_dict() == {"type": "Z"}

    def test_quadratic_to_dict(self) -> None:
        """Test quadratic serialization."""
        s = Segment.quadratic(1.5, 2.5, 3.0, 4.0)
        assert s.to_dict() == {"type": "Q", "x": 3.0, "y": 4.0, "x1": 1.5, "y1": 2.5}

    def test_segment_immutable(self) -> None:
        """Test that segment is immutable."""
        s = Segment.move(0, 0)
        with pytest.raises(AttributeError):
            s.x = 5  # type: ignore[misc]


class TestContour:
    """Tests for Contour class."""

    def test_empty(self) -> None:
        assert Contour().is_empty()
        assert len(Contour()) == 0

    def test_degenerate(self) -> None:
        """Test single-command contours are degenerate."""
        assert Contour([Segment.move(1, 1)]).is_degenerate()
        assert not Contour([Segment.move(1, 1), Segment.line(2, 2)]).is_degenerate()
        assert not Contour().is_degenerate()


class TestBoundingBox:
    """Tests for BoundingBox class."""

    def test_include_grows(self) -> None:
        bbox = BoundingBox.from_point(1, 1).include(-2, 5).include(4, 0)
        assert bbox == BoundingBox(left=-2, bottom=0, right=4, top=5)
        assert bbox.width == 6
        assert bbox.height == 5

    def test_default_is_zero(self) -> None:
        assert BoundingBox().is_zero()
        assert not BoundingBox.from_point(1, 0).is_zero()


class TestGlyphTypes:
    """Tests for per-glyph records."""

    def test_font_metrics_scale(self) -> None:
        metrics = FontMetrics(units_per_em=2048, ascender=1900, descender=-500, line_gap=0)
        assert metrics.scale(64) == pytest.approx(64 / 2048)

    def test_render_request_immutable(self) -> None:
        request = GlyphRenderRequest(
            character="A",
            contours=(),
            font_size=42,
            field_type=FieldType.MSDF,
            distance_range=3,
        )
        with pytest.raises(AttributeError):
            request.font_size = 12  # type: ignore[misc]
        assert request.advance_width == 0

    def test_blank_bitmap(self) -> None:
        bitmap = GlyphBitmap.blank()
        assert bitmap.is_blank
        assert (bitmap.width, bitmap.height) == (0, 0)
        assert not GlyphBitmap(1, 1, b"\x00\x00\x00\x01").is_blank

    def test_glyph_metrics_to_dict(self) -> None:
        """Test char entries default to all channels and page 0 when unpacked."""
        metrics = GlyphMetrics(id=32, width=0, height=0, xoffset=-3, yoffset=30, xadvance=10.5)
        data = metrics.to_dict()
        assert data["chnl"] == CHANNEL_MASK_ALL
        assert data["page"] == 0
        assert list(data) == [
            "id", "width", "height", "xoffset", "yoffset", "xadvance", "chnl", "x", "y", "page"
        ]

    def test_glyph_metrics_packed_page(self) -> None:
        metrics = GlyphMetrics(id=65, width=5, height=5, xoffset=0, yoffset=0, xadvance=5)
        metrics.page = 2
        assert metrics.to_dict()["page"] == 2


class TestAtlasTypes:
    """Tests for page and descriptor records."""

    def test_page_filename(self) -> None:
        page = Page(index=3, width=512, height=512)
        assert page.filename("Roboto") == "Roboto.3.png"
        assert page.rects == []

    def test_descriptor_to_dict(self) -> None:
        descriptor = FontDescriptor(
            pages=["f.0.png"],
            chars=[GlyphMetrics(id=65, width=1, height=1, xoffset=0, yoffset=0, xadvance=1)],
            kernings=[KerningPair(first=65, second=86, amount=-1.5)],
            info=InfoBlock(face="f", size=42, charset=["A", "V"], spacing=(2, 2)),
            common=CommonBlock(line_height=50, base=36, scale_w=512, scale_h=512, pages=1),
        )

        data = descriptor.to_dict()

        assert data["pages"] == ["f.0.png"]
        assert data["kernings"] == [{"first": 65, "second": 86, "amount": -1.5}]
        assert data["info"]["spacing"] == [2, 2]
        assert data["info"]["unicode"] == 1
        assert data["common"]["lineHeight"] == 50
        assert data["common"]["alphaChnl"] == 0
