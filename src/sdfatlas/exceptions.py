"""Exception hierarchy for sdfatlas."""


class SdfAtlasError(Exception):
    """Base exception for all sdfatlas errors."""

    pass


class ConfigurationError(SdfAtlasError):
    """Invalid options passed to the pipeline."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class FontError(SdfAtlasError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontFormatError(FontError):
    """Unsupported or invalid font format."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid font format '{path}': {details}")


class PlatformError(SdfAtlasError):
    """The running platform cannot execute the pipeline."""

    pass


class RendererNotFoundError(PlatformError):
    """No msdfgen binary available for this platform."""

    def __init__(self, platform: str, searched: list[str] | None = None) -> None:
        self.platform = platform
        self.searched = searched or []
        message = f"No msdfgen binary for platform {platform}"
        if self.searched:
            message += f" (searched: {', '.join(self.searched)})"
        super().__init__(message)


class GlyphError(SdfAtlasError):
    """Errors related to rendering a single glyph."""

    pass


class GlyphDecodeError(GlyphError):
    """Renderer output does not match the requested pixel size."""

    def __init__(self, character: str, reason: str, command: str) -> None:
        self.character = character
        self.reason = reason
        self.command = command
        super().__init__(f"Could not decode glyph {character!r}: {reason}")


class RendererProcessError(GlyphError):
    """The renderer process could not be started or failed."""

    def __init__(
        self,
        character: str,
        reason: str,
        command: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.character = character
        self.reason = reason
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Renderer failed for glyph {character!r}: {reason}")


class PackingError(SdfAtlasError):
    """Errors related to packing glyph bitmaps into pages."""

    pass


class GlyphTooLargeError(PackingError):
    """A glyph bitmap does not fit into an empty page."""

    def __init__(
        self,
        character: str,
        width: int,
        height: int,
        page_width: int,
        page_height: int,
    ) -> None:
        self.character = character
        self.width = width
        self.height = height
        self.page_width = page_width
        self.page_height = page_height
        super().__init__(
            f"Glyph {character!r} ({width}x{height}) does not fit "
            f"into a {page_width}x{page_height} page"
        )
