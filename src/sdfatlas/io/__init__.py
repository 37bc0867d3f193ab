"""Font and atlas I/O layer for sdfatlas.

This module handles reading fonts using fontTools and writing atlas
outputs. It provides a clean abstraction layer between fontTools and the
domain models.

Key responsibilities:
- Load TTF/OTF fonts
- Convert fontTools outlines to domain segments
- Query advances, kerning and vertical metrics
- Serialize descriptors to BMFont XML or JSON
- Write page textures and descriptor files

Key classes:
- FontReader: Load fonts and answer per-character queries
- AtlasWriter: Save atlas outputs
"""

from sdfatlas.io.reader import FontReader
from sdfatlas.io.writer import AtlasWriter, serialize_descriptor, write_outputs

__all__ = [
    "AtlasWriter",
    "FontReader",
    "serialize_descriptor",
    "write_outputs",
]
