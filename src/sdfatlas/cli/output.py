"""Rich console output helpers for the CLI.

Progress bar while glyphs render, a configuration banner before and a
summary table after a run.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

console = Console()

SYM_STEP = "▸"
SYM_OK = "✓"
SYM_ERR = "✗"
SYM_DOT = "·"


def create_progress() -> Progress:
    """Progress bar counting rendered glyphs."""
    return Progress(
        TextColumn("  [progress.description]{task.description}"),
        BarColumn(bar_width=32, complete_style="cyan", finished_style="green"),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    )


def print_header(version: str) -> None:
    console.print(f"\n[bold]sdfatlas[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    console.print(f"\n{SYM_STEP} {message}")


def print_atlas_info(
    font_path: str,
    field_type: str,
    font_size: float,
    charset_size: int,
    texture_size: tuple[int, int],
) -> None:
    """Print the atlas configuration.

    Args:
        font_path: Path to the font file
        field_type: Distance field type
        font_size: Font size in pixels
        charset_size: Number of characters to render
        texture_size: Page width and height
    """
    # Text keeps brackets in paths from being read as markup
    console.print(Text("  ").append(font_path, style="bold"))
    width, height = texture_size
    console.print(
        f"  {field_type} {SYM_DOT} {font_size:g}px {SYM_DOT} "
        f"{charset_size:,} chars {SYM_DOT} {width}x{height} pages"
    )


def _format_duration(seconds: float) -> str:
    if seconds >= 60:
        minutes, rest = divmod(seconds, 60)
        return f"{int(minutes)}m {rest:.1f}s"
    if seconds >= 1:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000:.0f}ms"


def print_success(
    written: list[str],
    total_time_s: float,
    glyphs: int,
    blank: int,
    pages: int,
    kernings: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print the written files and a run summary.

    Args:
        written: Paths of the written files
        total_time_s: Total processing time in seconds
        glyphs: Number of characters in the atlas
        blank: Number of blank glyphs
        pages: Number of texture pages
        kernings: Number of kerning pairs
        avg_time_ms: Average render time per glyph in milliseconds
    """
    console.print(
        f"\n[bold green]{SYM_OK} Atlas written[/bold green] in {_format_duration(total_time_s)}"
    )

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    table.add_row("glyphs", f"{glyphs} ({blank} blank)")
    table.add_row("pages", str(pages))
    table.add_row("kernings", str(kernings))
    if avg_time_ms is not None:
        table.add_row("render", f"{avg_time_ms:.1f}ms per glyph")
    for path in written:
        table.add_row("file", Text(path))
    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print an error and optional details (e.g. the failing command)."""
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(Text(f"  {details}"))


def print_cancellation_notice() -> None:
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold], no files written")
