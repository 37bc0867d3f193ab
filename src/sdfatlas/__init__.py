"""sdfatlas - Build signed distance field bitmap font atlases.

sdfatlas renders every character of a charset with msdfgen, packs the
resulting distance field bitmaps into fixed-size texture pages and writes a
BMFont compatible descriptor (XML ``.fnt`` or JSON) next to the PNG pages.

Example:
    $ sdfatlas Roboto-Regular.ttf --font-size 42 --filename roboto

This will create roboto.0.png (plus further pages if needed) and roboto.fnt.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

from sdfatlas.core.processor import AtlasProcessor, generate_bmfont  # noqa: E402

__all__ = [
    "AtlasProcessor",
    "__author__",
    "__version__",
    "generate_bmfont",
]
