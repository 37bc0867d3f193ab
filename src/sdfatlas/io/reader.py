"""Font reader for loading TTF/OTF fonts.

This module provides the FontReader class, the outline source of the atlas
pipeline: outlines, advance widths, kerning values and vertical metrics per
character.
"""

from pathlib import Path
from typing import Any

from fontTools.ttLib import TTFont

from sdfatlas.domain.contour import Segment
from sdfatlas.domain.glyph import FontMetrics
from sdfatlas.io.converter import fonttools_glyph_to_segments

NOTDEF = ".notdef"

# name table IDs
NAME_ID_FAMILY = 1
NAME_ID_FULL_NAME = 4

# GPOS lookup types
GPOS_PAIR_ADJUSTMENT = 2
GPOS_EXTENSION = 9


class FontReader:
    """Loads TTF/OTF fonts and answers per-character queries.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            segments = reader.get_outline("A", font_size=42)
            advance = reader.get_advance_width("A")
            kerning = reader.get_kerning("A", "V")
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None
        self._kern_pairs: dict[tuple[str, str], int] | None = None
        self._gpos_subtables: list[Any] | None = None
        self._cmap: dict[int, str] | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            Exception: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = TTFont(str(self._font_path))

    @classmethod
    def from_ttfont(cls, font: TTFont, font_path: Path | None = None) -> "FontReader":
        """Wrap an already loaded fontTools font."""
        reader = cls(font_path or Path("<memory>"))
        reader._font = font
        return reader

    @property
    def font(self) -> TTFont:
        """Return the underlying fontTools font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for glyf fonts, 'OpenType' for CFF/CFF2 fonts, 'Unknown'
            for fonts without outlines
        """
        font = self.font
        if "glyf" in font:
            return "TrueType"
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "Unknown"

    @property
    def has_outlines(self) -> bool:
        return self.format != "Unknown"

    @property
    def units_per_em(self) -> int:
        return self.font["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        return self.font["maxp"].numGlyphs

    @property
    def metrics(self) -> FontMetrics:
        """Return the typographic vertical metrics.

        Uses the OS/2 sTypo values and falls back to hhea when the font has
        no OS/2 table.
        """
        font = self.font
        if "OS/2" in font:
            os2 = font["OS/2"]
            ascender = os2.sTypoAscender
            descender = os2.sTypoDescender
            line_gap = os2.sTypoLineGap
        else:
            hhea = font["hhea"]
            ascender = hhea.ascent
            descender = hhea.descent
            line_gap = hhea.lineGap

        return FontMetrics(
            units_per_em=self.units_per_em,
            ascender=ascender,
            descender=descender,
            line_gap=line_gap,
        )

    @property
    def full_name(self) -> str:
        """Return the font's full name, falling back to the family name."""
        name_table = self.font["name"]
        name = name_table.getDebugName(NAME_ID_FULL_NAME) or name_table.getDebugName(
            NAME_ID_FAMILY
        )
        return name or self._font_path.stem

    def glyph_name_for(self, char: str) -> str:
        """Map a character to its glyph name, ``.notdef`` when unmapped."""
        if self._cmap is None:
            self._cmap = self.font.getBestCmap() or {}
        return self._cmap.get(ord(char), NOTDEF)

    def get_outline(self, char: str, font_size: float) -> list[Segment]:
        """Return the outline of a character scaled to the font size.

        Coordinates are in pixels with the Y axis pointing down, the origin
        on the baseline at the glyph origin.

        Args:
            char: Character to look up
            font_size: Font size in pixels

        Returns:
            Outline segments in drawing order (empty for blank glyphs)
        """
        scale = font_size / self.units_per_em
        return fonttools_glyph_to_segments(
            self.glyph_name_for(char), self.font.getGlyphSet(), scale
        )

    def get_advance_width(self, char: str) -> int:
        """Return the horizontal advance of a character in font units."""
        hmtx = self.font["hmtx"]
        glyph_name = self.glyph_name_for(char)
        if glyph_name not in hmtx.metrics:
            return 0
        advance_width, _lsb = hmtx.metrics[glyph_name]
        return advance_width

    def get_kerning(self, first: str, second: str) -> int:
        """Return the kerning between two characters in font units.

        The legacy ``kern`` table is consulted first, then pair adjustment
        lookups of the GPOS ``kern`` feature.

        Args:
            first: Left character
            second: Right character

        Returns:
            X advance adjustment, 0 when the pair is not kerned
        """
        left = self.glyph_name_for(first)
        right = self.glyph_name_for(second)

        value = self._legacy_kern_pairs().get((left, right))
        if value:
            return value

        for subtable in self._gpos_pair_subtables():
            value = _pair_pos_value(subtable, left, right)
            if value is not None:
                return value
        return 0

    def _legacy_kern_pairs(self) -> dict[tuple[str, str], int]:
        if self._kern_pairs is None:
            self._kern_pairs = {}
            if "kern" in self.font:
                for table in self.font["kern"].kernTables:
                    pairs = getattr(table, "kernTable", None)
                    if not pairs:
                        continue
                    for pair, value in pairs.items():
                        self._kern_pairs.setdefault(pair, value)
        return self._kern_pairs

    def _gpos_pair_subtables(self) -> list[Any]:
        if self._gpos_subtables is None:
            self._gpos_subtables = []
            if "GPOS" in self.font:
                self._gpos_subtables = _collect_kern_subtables(self.font["GPOS"].table)
        return self._gpos_subtables

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
        self._kern_pairs = None
        self._gpos_subtables = None
        self._cmap = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()


def _collect_kern_subtables(gpos: Any) -> list[Any]:
    """Collect pair adjustment subtables referenced by the ``kern`` feature."""
    if gpos.FeatureList is None or gpos.LookupList is None:
        return []

    lookup_indices: list[int] = []
    for record in gpos.FeatureList.FeatureRecord:
        if record.FeatureTag != "kern":
            continue
        for index in record.Feature.LookupListIndex:
            if index not in lookup_indices:
                lookup_indices.append(index)

    subtables = []
    lookups = gpos.LookupList.Lookup
    for index in sorted(lookup_indices):
        lookup = lookups[index]
        for subtable in lookup.SubTable:
            if lookup.LookupType == GPOS_EXTENSION:
                if subtable.ExtensionLookupType != GPOS_PAIR_ADJUSTMENT:
                    continue
                subtable = subtable.ExtSubTable
            elif lookup.LookupType != GPOS_PAIR_ADJUSTMENT:
                continue
            subtables.append(subtable)
    return subtables


def _pair_pos_value(subtable: Any, left: str, right: str) -> int | None:
    """Look up the X advance adjustment of a pair in a PairPos subtable.

    Returns:
        The adjustment, or None when the subtable does not cover the pair
    """
    coverage = subtable.Coverage.glyphs
    if left not in coverage:
        return None

    if subtable.Format == 1:
        pair_set = subtable.PairSet[coverage.index(left)]
        for record in pair_set.PairValueRecord:
            if record.SecondGlyph == right:
                return getattr(record.Value1, "XAdvance", 0) or 0
        return None

    if subtable.Format == 2:
        class1 = _class_of(subtable.ClassDef1, left)
        class2 = _class_of(subtable.ClassDef2, right)
        record = subtable.Class1Record[class1].Class2Record[class2]
        value = getattr(record.Value1, "XAdvance", 0) or 0
        return value or None

    return None


def _class_of(class_def: Any, glyph_name: str) -> int:
    if class_def is None:
        return 0
    return class_def.classDefs.get(glyph_name, 0)
