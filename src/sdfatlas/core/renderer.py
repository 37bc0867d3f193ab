"""External distance field renderer.

The pipeline consumes msdfgen through the ``Renderer`` capability: a
callable taking a ``RenderInvocation`` and returning the renderer's text
output. ``MsdfgenRenderer`` runs the real binary; tests inject a fake.
"""

import shlex
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from sdfatlas.config.settings import FieldType
from sdfatlas.exceptions import RendererNotFoundError, RendererProcessError
from sdfatlas.utils.numbers import format_number

# Bundled binary name per sys.platform
BINARY_LOOKUP: dict[str, str] = {
    "darwin": "msdfgen.osx",
    "win32": "msdfgen.exe",
    "linux": "msdfgen",
}

BUNDLED_BIN_DIR = Path(__file__).resolve().parent.parent / "bin"


@dataclass(frozen=True)
class RenderInvocation:
    """Arguments of one msdfgen run.

    Attributes:
        character: Character being rendered (diagnostics only)
        field_type: Distance field type
        width: Output width in pixels
        height: Output height in pixels
        translate_x: Shape translation along X in pixels
        translate_y: Shape translation along Y in pixels
        distance_range: Distance range in pixels
        shape_description: Shape in msdfgen's description grammar
    """

    character: str
    field_type: FieldType
    width: int
    height: int
    translate_x: float
    translate_y: float
    distance_range: float
    shape_description: str

    def to_args(self, binary: str | Path) -> list[str]:
        """Build the msdfgen argument vector."""
        return [
            str(binary),
            self.field_type.value,
            "-format", "text",
            "-stdout",
            "-size", str(self.width), str(self.height),
            "-translate", format_number(self.translate_x), format_number(self.translate_y),
            "-pxrange", format_number(self.distance_range),
            "-defineshape", self.shape_description,
        ]

    def command_line(self, binary: str | Path = "msdfgen") -> str:
        """Shell form of the invocation, for error reports."""
        return shlex.join(self.to_args(binary))


class Renderer(Protocol):
    """Renders one glyph and returns the raw text output."""

    def __call__(self, invocation: RenderInvocation) -> str: ...


def find_renderer_binary(
    explicit: Path | None = None,
    platform: str | None = None,
) -> Path:
    """Locate the msdfgen binary.

    An explicit path wins. Otherwise the platform's bundled binary is looked
    up in the package ``bin`` directory, then on PATH.

    Args:
        explicit: User supplied binary path
        platform: Platform name (default: ``sys.platform``)

    Returns:
        Path to an existing binary

    Raises:
        RendererNotFoundError: If no binary is available for the platform
    """
    platform = platform or sys.platform

    if explicit is not None:
        if explicit.is_file():
            return explicit
        raise RendererNotFoundError(platform, [str(explicit)])

    binary_name = BINARY_LOOKUP.get(platform)
    if binary_name is None:
        raise RendererNotFoundError(platform)

    bundled = BUNDLED_BIN_DIR / binary_name
    if bundled.is_file():
        return bundled

    on_path = shutil.which(binary_name) or shutil.which("msdfgen")
    if on_path is not None:
        return Path(on_path)

    raise RendererNotFoundError(platform, [str(bundled), f"PATH:{binary_name}"])


class MsdfgenRenderer:
    """Runs the msdfgen binary as a subprocess.

    Example:
        renderer = MsdfgenRenderer(find_renderer_binary(), timeout=60)
        text = renderer(invocation)
    """

    def __init__(self, binary_path: Path, timeout: float | None = None) -> None:
        """Initialize the renderer.

        Args:
            binary_path: Path to the msdfgen executable
            timeout: Seconds before an invocation is killed (None = no limit)
        """
        self.binary_path = binary_path
        self.timeout = timeout

    def __call__(self, invocation: RenderInvocation) -> str:
        """Run msdfgen for one glyph.

        Raises:
            RendererProcessError: If the process cannot start, times out or
                exits with a non-zero status
        """
        args = invocation.to_args(self.binary_path)
        command = shlex.join(args)

        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise RendererProcessError(
                invocation.character, f"timed out after {self.timeout}s", command
            ) from e
        except OSError as e:
            raise RendererProcessError(invocation.character, str(e), command) from e

        if completed.returncode != 0:
            raise RendererProcessError(
                invocation.character,
                f"exit status {completed.returncode}",
                command,
                returncode=completed.returncode,
                stderr=completed.stderr,
            )

        return completed.stdout
