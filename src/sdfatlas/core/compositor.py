"""Page compositing and PNG encoding.

Placed glyph bitmaps are copied unmodified onto a page-sized RGBA canvas
(no blending, no resampling) and each page is encoded as PNG.
"""

from collections.abc import Sequence
from io import BytesIO

import structlog
from PIL import Image

from sdfatlas.config.settings import FieldType
from sdfatlas.domain.atlas import Page, PageTexture

# msdf pages start opaque black so areas without distance data are a fixed colour
MSDF_BACKGROUND = (0, 0, 0, 255)
TRANSPARENT = (0, 0, 0, 0)


class PageCompositor:
    """Draws packed pages and encodes them as PNG.

    A single canvas is reused for every page, one page at a time.

    Example:
        compositor = PageCompositor(512, 512, FieldType.MSDF)
        textures = compositor.compose(packer.pages, "Roboto")
    """

    def __init__(self, width: int, height: int, field_type: FieldType) -> None:
        self.width = width
        self.height = height
        self.field_type = field_type
        self.logger = structlog.get_logger("sdfatlas")

    @property
    def background(self) -> tuple[int, int, int, int]:
        return MSDF_BACKGROUND if self.field_type.is_multichannel else TRANSPARENT

    def compose(self, pages: Sequence[Page], base_name: str) -> list[PageTexture]:
        """Render every page in page order.

        Args:
            pages: Packed pages
            base_name: Base filename; pages are named ``{base}.{index}.png``

        Returns:
            Encoded textures in page order
        """
        canvas = Image.new("RGBA", (self.width, self.height), self.background)
        textures: list[PageTexture] = []

        for page in pages:
            canvas.paste(self.background, (0, 0, self.width, self.height))
            for rect in page.rects:
                bitmap = rect.glyph.bitmap
                if bitmap.pixels is None:
                    continue
                image = Image.frombytes("RGBA", (bitmap.width, bitmap.height), bitmap.pixels)
                canvas.paste(image, (rect.x, rect.y))

            textures.append(
                PageTexture(filename=page.filename(base_name), data=self.encode(canvas))
            )
            self.logger.debug("Page composited", page=page.index, glyphs=len(page.rects))

        return textures

    @staticmethod
    def encode(canvas: Image.Image) -> bytes:
        """Encode a canvas as PNG."""
        buffer = BytesIO()
        canvas.save(buffer, format="PNG")
        return buffer.getvalue()
