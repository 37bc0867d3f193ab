"""Shared fixtures: an in-memory test font and a deterministic fake renderer."""

import threading
from pathlib import Path

import pytest
from fontTools.feaLib.builder import addOpenTypeFeaturesFromString
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont

from sdfatlas.core.renderer import RenderInvocation

UNITS_PER_EM = 1000
ASCENDER = 800
DESCENDER = -200
LINE_GAP = 200

# Characters mapped to the plain box glyph, for overflow scenarios
BOX_CHARS = "CDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

ADVANCES = {
    ".notdef": 500,
    "space": 250,
    "A": 600,
    "B": 550,
    "box": 500,
}


def _draw_notdef(pen: TTGlyphPen) -> None:
    pen.moveTo((50, 0))
    pen.lineTo((50, 700))
    pen.lineTo((450, 700))
    pen.lineTo((450, 0))
    pen.closePath()


def _draw_a(pen: TTGlyphPen) -> None:
    pen.moveTo((0, 0))
    pen.lineTo((300, 700))
    pen.lineTo((600, 0))
    pen.closePath()


def _draw_b(pen: TTGlyphPen) -> None:
    pen.moveTo((50, 0))
    pen.lineTo((50, 700))
    pen.qCurveTo((500, 700), (500, 350))
    pen.qCurveTo((500, 0), (50, 0))
    pen.closePath()


def _draw_box(pen: TTGlyphPen) -> None:
    pen.moveTo((0, 0))
    pen.lineTo((0, 500))
    pen.lineTo((500, 500))
    pen.lineTo((500, 0))
    pen.closePath()


def build_test_font(kerning: bool = True) -> TTFont:
    """Build a small TrueType font.

    Glyphs: .notdef, space (empty), A (triangle), B (quadratic bowl) and
    a 500x500 box mapped to every character of BOX_CHARS. When ``kerning``
    is set, the GPOS kern feature kerns A B by -50 units.
    """
    glyph_order = [".notdef", "space", "A", "B", "box"]
    drawers = {
        ".notdef": _draw_notdef,
        "space": None,
        "A": _draw_a,
        "B": _draw_b,
        "box": _draw_box,
    }

    glyphs = {}
    for name in glyph_order:
        pen = TTGlyphPen(None)
        drawer = drawers[name]
        if drawer is not None:
            drawer(pen)
        glyphs[name] = pen.glyph()

    cmap = {ord(" "): "space", ord("A"): "A", ord("B"): "B"}
    cmap.update({ord(char): "box" for char in BOX_CHARS})

    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)
    fb.setupGlyf(glyphs)
    glyph_table = fb.font["glyf"]
    fb.setupHorizontalMetrics(
        {name: (ADVANCES[name], getattr(glyph_table[name], "xMin", 0)) for name in glyph_order}
    )
    fb.setupHorizontalHeader(ascent=ASCENDER, descent=DESCENDER)
    fb.setupNameTable(
        {
            "familyName": "Atlas Test",
            "styleName": "Regular",
            "fullName": "Atlas Test Regular",
            "psName": "AtlasTest-Regular",
        }
    )
    fb.setupOS2(
        sTypoAscender=ASCENDER,
        sTypoDescender=DESCENDER,
        sTypoLineGap=LINE_GAP,
        usWinAscent=ASCENDER,
        usWinDescent=-DESCENDER,
    )
    fb.setupPost()

    if kerning:
        addOpenTypeFeaturesFromString(fb.font, "feature kern { pos A B -50; } kern;")

    return fb.font


class FakeRenderer:
    """Deterministic stand-in for msdfgen.

    Emits ``width x height`` pixels with one channel per sample for
    single-channel fields and three for msdf, formatted like msdfgen's text
    output. Empty shapes produce an all-zero field.
    """

    def __init__(self, value: int = 0x80, extra_samples: int = 0) -> None:
        self.value = value
        self.extra_samples = extra_samples
        self.invocations: list[RenderInvocation] = []
        self._lock = threading.Lock()

    def __call__(self, invocation: RenderInvocation) -> str:
        with self._lock:
            self.invocations.append(invocation)

        channels = 3 if invocation.field_type.is_multichannel else 1
        blank = invocation.shape_description.strip("{}; ") == ""
        value = 0 if blank else self.value
        sample = f"{value:02x}"

        row = " ".join([sample] * (invocation.width * channels))
        rows = [row] * invocation.height
        rows.extend([sample] * self.extra_samples)
        return "\n".join(rows) + "\n"


@pytest.fixture
def test_font() -> TTFont:
    """In-memory test font with kerning."""
    return build_test_font()


@pytest.fixture
def font_path(tmp_path: Path) -> Path:
    """Test font saved to a temporary TTF file."""
    path = tmp_path / "AtlasTest-Regular.ttf"
    build_test_font().save(str(path))
    return path


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    """Fake renderer producing non-blank fields for every outlined glyph."""
    return FakeRenderer()


@pytest.fixture
def renderer_factory() -> type[FakeRenderer]:
    """The fake renderer class, for tests that need custom output."""
    return FakeRenderer


@pytest.fixture
def font_factory():
    """Builder for variants of the test font."""
    return build_test_font
