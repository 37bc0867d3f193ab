"""Tests for BMFont descriptor construction."""

import pytest

from sdfatlas.config import AtlasConfig
from sdfatlas.core.descriptor import FontDescriptorBuilder, collect_kernings
from sdfatlas.domain import FontMetrics, GlyphBitmap, GlyphMetrics, Page, RenderedGlyph


class StubKerning:
    """Kerning source backed by a dict of font-unit values."""

    def __init__(self, pairs: dict[tuple[str, str], int]) -> None:
        self.pairs = pairs
        self.queries: list[tuple[str, str]] = []

    def get_kerning(self, first: str, second: str) -> int:
        self.queries.append((first, second))
        return self.pairs.get((first, second), 0)


@pytest.fixture
def font_metrics() -> FontMetrics:
    return FontMetrics(units_per_em=1000, ascender=800, descender=-200, line_gap=200)


def make_builder(font_metrics, pairs=None, **options) -> FontDescriptorBuilder:
    config = AtlasConfig(**{"charset": "AVo", "fontSize": 42, **options})
    return FontDescriptorBuilder(StubKerning(pairs or {}), font_metrics, config, face="Test")


def glyph(character: str, page: int | None = 0) -> RenderedGlyph:
    metrics = GlyphMetrics(
        id=ord(character), width=10, height=12, xoffset=-3.5, yoffset=1.25, xadvance=20.16
    )
    metrics.page = page
    return RenderedGlyph(character=character, bitmap=GlyphBitmap(10, 12, b""), metrics=metrics)


class TestCollectKernings:
    """Tests for kerning enumeration."""

    def test_every_ordered_pair_is_queried(self) -> None:
        """Self pairs and both orders are queried."""
        source = StubKerning({})

        collect_kernings(source, ["A", "V"], 1.0)

        assert source.queries == [("A", "A"), ("A", "V"), ("V", "A"), ("V", "V")]

    def test_only_non_zero_pairs_kept(self) -> None:
        source = StubKerning({("A", "V"): -80, ("V", "o"): 0})

        kernings = collect_kernings(source, ["A", "V", "o"], 0.5)

        assert len(kernings) == 1
        assert (kernings[0].first, kernings[0].second) == (ord("A"), ord("V"))
        assert kernings[0].amount == pytest.approx(-40)

    def test_round_trip_through_scale(self) -> None:
        """Dividing by the scale recovers the font-unit value."""
        scale = 42 / 1000
        pairs = {("A", "V"): -80, ("V", "A"): -75, ("o", "V"): 13}

        kernings = collect_kernings(StubKerning(pairs), ["A", "V", "o"], scale)

        recovered = {(chr(k.first), chr(k.second)): k.amount / scale for k in kernings}
        assert recovered == pytest.approx(pairs)


class TestFontDescriptorBuilder:
    """Tests for FontDescriptorBuilder."""

    def test_line_height(self, font_metrics) -> None:
        """Ascender to descender plus line gap, scaled."""
        builder = make_builder(font_metrics)

        assert builder.line_height() == pytest.approx((800 + 200 + 200) * 0.042)

    def test_base_includes_distance_range(self, font_metrics) -> None:
        builder = make_builder(font_metrics, distanceRange=4)

        assert builder.base() == pytest.approx(800 * 0.042 + 4)

    def test_build_blocks(self, font_metrics) -> None:
        builder = make_builder(font_metrics, textureWidth=256, textureHeight=128)
        pages = [Page(index=0, width=256, height=128)]

        descriptor = builder.build([glyph("A"), glyph("V")], pages, ["Test.0.png"])

        assert descriptor.pages == ["Test.0.png"]
        assert [char.id for char in descriptor.chars] == [ord("A"), ord("V")]
        assert descriptor.info.face == "Test"
        assert descriptor.info.size == 42
        assert descriptor.info.charset == ["A", "V", "o"]
        assert descriptor.info.spacing == (2, 2)
        assert descriptor.common.scale_w == 256
        assert descriptor.common.scale_h == 128
        assert descriptor.common.pages == 1

    def test_tree_layout(self, font_metrics) -> None:
        """The tree carries the BMFont JSON keys."""
        builder = make_builder(font_metrics, pairs={("A", "V"): -80})
        descriptor = builder.build([glyph("A"), glyph(" ", page=None)], [], [])

        tree = builder.to_tree(descriptor)

        assert list(tree) == ["pages", "chars", "info", "common", "kernings"]
        assert tree["common"]["lineHeight"] == pytest.approx(50.4)
        assert tree["info"]["stretchH"] == 100
        assert tree["info"]["padding"] == [0, 0, 0, 0]
        assert tree["chars"][1]["page"] == 0
        assert tree["kernings"] == [
            {"first": ord("A"), "second": ord("V"), "amount": pytest.approx(-3.36)}
        ]

    def test_rounding_applies_to_whole_tree(self, font_metrics) -> None:
        """Every float of the descriptor is rounded, chars and kernings included."""
        builder = make_builder(font_metrics, pairs={("A", "V"): -77}, roundDecimal=1)
        descriptor = builder.build([glyph("A")], [], [])

        tree = builder.to_tree(descriptor)

        char = tree["chars"][0]
        assert char["xoffset"] == pytest.approx(-3.5)
        assert char["yoffset"] == pytest.approx(1.3)
        assert char["xadvance"] == pytest.approx(20.2)
        assert tree["common"]["base"] == pytest.approx(36.6)
        assert tree["kernings"][0]["amount"] == pytest.approx(-3.2)
        assert tree["info"]["charset"] == ["A", "V", "o"]

    def test_no_rounding_by_default(self, font_metrics) -> None:
        builder = make_builder(font_metrics)
        descriptor = builder.build([glyph("A")], [], [])

        tree = builder.to_tree(descriptor)

        assert tree["chars"][0]["xadvance"] == 20.16
