"""CLI application entry point for sdfatlas.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from sdfatlas import __version__
from sdfatlas.cli.output import (
    console,
    create_progress,
    print_atlas_info,
    print_cancellation_notice,
    print_error,
    print_header,
    print_step,
    print_success,
)
from sdfatlas.config import (
    AtlasConfig,
    AtlasSettings,
    FieldType,
    LoggingConfig,
    OutputType,
    RenderConfig,
)
from sdfatlas.core import AtlasProcessor
from sdfatlas.domain import AtlasResult
from sdfatlas.exceptions import (
    FontLoadError,
    GlyphDecodeError,
    RendererNotFoundError,
    RendererProcessError,
    SdfAtlasError,
)
from sdfatlas.io import write_outputs
from sdfatlas.utils import configure_logging

app = typer.Typer(
    name="sdfatlas",
    help="Build BMFont-compatible signed distance field atlases with msdfgen.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]sdfatlas[/bold blue] v{__version__}")
        raise typer.Exit()


def _fail(message: str, details: str | None = None) -> typer.Exit:
    print_error(message, details=details)
    return typer.Exit(code=1)


@app.command()
def generate(
    input_font: Annotated[
        Path, typer.Argument(help="Path to input TTF/OTF font file", show_default=False)
    ],
    output_dir: Annotated[
        Path, typer.Option("--output-dir", "-o", help="Directory receiving pages and descriptor")
    ] = Path("."),
    filename: Annotated[
        str | None,
        typer.Option(
            "--filename", "-f", help="Base name of pages and descriptor (default: font name)"
        ),
    ] = None,
    output_type: Annotated[
        str, typer.Option("--output-type", "-t", help="Descriptor format (xml|json)")
    ] = "xml",
    font_size: Annotated[
        float, typer.Option("--font-size", "-s", help="Font size in pixels", min=1.0)
    ] = 42.0,
    charset: Annotated[
        str | None,
        typer.Option("--charset", "-c", help="Characters to include (default: printable ASCII)"),
    ] = None,
    charset_file: Annotated[
        Path | None,
        typer.Option("--charset-file", help="UTF-8 text file whose characters are included"),
    ] = None,
    texture_width: Annotated[
        int, typer.Option("--texture-width", help="Page width in pixels", min=1)
    ] = 512,
    texture_height: Annotated[
        int, typer.Option("--texture-height", help="Page height in pixels", min=1)
    ] = 512,
    texture_padding: Annotated[
        int, typer.Option("--texture-padding", help="Spacing between glyphs in pixels", min=0)
    ] = 2,
    distance_range: Annotated[
        float,
        typer.Option("--distance-range", "-r", help="Distance range in pixels", min=0.5),
    ] = 3.0,
    field_type: Annotated[
        str, typer.Option("--field-type", help="Distance field type (msdf|sdf|psdf)")
    ] = "msdf",
    round_decimal: Annotated[
        int | None,
        typer.Option("--round-decimal", help="Round descriptor numbers to N decimals", min=0),
    ] = None,
    msdfgen: Annotated[
        Path | None,
        typer.Option("--msdfgen", help="Path to the msdfgen binary (default: bundled or PATH)"),
    ] = None,
    workers: Annotated[
        int,
        typer.Option("--workers", "-j", help="Simultaneous msdfgen processes", min=1, max=64),
    ] = 15,
    log_file: Annotated[
        Path | None, typer.Option("--log-file", help="Write detailed logs to file")
    ] = None,
    log_level: Annotated[
        str, typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)")
    ] = "WARNING",
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose console output")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Minimal console output")] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Render every charset character with msdfgen and pack the results.

    Writes {filename}.{page}.png for each texture page and {filename}.fnt
    (or .json) with the BMFont descriptor.

    Example:
        sdfatlas Roboto-Regular.ttf --font-size 42 --field-type sdf
    """
    if verbose and quiet:
        raise _fail("Cannot use --verbose and --quiet together")
    if charset is not None and charset_file is not None:
        raise _fail("Cannot use --charset and --charset-file together")
    if not input_font.is_file():
        raise _fail(
            f"Input font not found: {input_font}",
            details="Please provide a path to a TTF or OTF font file.",
        )

    try:
        field_type_value = FieldType(field_type.lower())
    except ValueError:
        raise _fail(f"Invalid field type: {field_type}", details="Valid values: msdf, sdf, psdf")
    try:
        output_type_value = OutputType(output_type.lower())
    except ValueError:
        raise _fail(f"Invalid output type: {output_type}", details="Valid values: xml, json")

    if charset_file is not None:
        try:
            charset = _read_charset_file(charset_file)
        except OSError as e:
            raise _fail(f"Could not read charset file: {e}")

    atlas_options: dict[str, object] = {
        "output_type": output_type_value,
        "filename": filename,
        "font_size": font_size,
        "texture_width": texture_width,
        "texture_height": texture_height,
        "texture_padding": texture_padding,
        "distance_range": distance_range,
        "field_type": field_type_value,
        "round_decimal": round_decimal,
    }
    if charset is not None:
        atlas_options["charset"] = charset

    try:
        settings = AtlasSettings(
            atlas=AtlasConfig.model_validate(atlas_options),
            render=RenderConfig(binary_path=msdfgen, max_workers=workers),
            logging=LoggingConfig(log_file=log_file, log_level="DEBUG" if verbose else log_level),
        )
    except ValidationError as e:
        raise _fail("Invalid options", details=str(e))

    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    atlas = settings.atlas
    if not quiet:
        print_header(__version__)
        print_step("Configuration")
        print_atlas_info(
            font_path=str(input_font),
            field_type=atlas.field_type.value,
            font_size=atlas.font_size,
            charset_size=len(atlas.charset),
            texture_size=(atlas.texture_width, atlas.texture_height),
        )

    processor = AtlasProcessor(settings)

    try:
        result = _run(processor, input_font, len(atlas.charset), quiet)
        written = write_outputs(result, output_dir)
    except KeyboardInterrupt:
        if not quiet:
            print_cancellation_notice()
        raise typer.Exit(code=130) from None
    except RendererNotFoundError as e:
        raise _fail(str(e), details="Install msdfgen or pass --msdfgen PATH")
    except FontLoadError as e:
        raise _fail(f"Could not load font: {e.reason}")
    except (GlyphDecodeError, RendererProcessError) as e:
        raise _fail(str(e), details=e.command)
    except SdfAtlasError as e:
        raise _fail(str(e))
    except OSError as e:
        raise _fail(f"Could not write output: {e}")

    if not quiet:
        stats = processor.stats
        print_success(
            written=[str(path) for path in written],
            total_time_s=stats.duration_seconds,
            glyphs=stats.glyph_count,
            blank=stats.blank_count,
            pages=stats.page_count,
            kernings=stats.kerning_count,
            avg_time_ms=stats.avg_glyph_time_ms,
        )


def _run(processor: AtlasProcessor, font: Path, total: int, quiet: bool) -> AtlasResult:
    if quiet:
        return processor.process(font)

    print_step("Rendering")
    with create_progress() as progress:
        task_id = progress.add_task("glyphs", total=total)

        def update_progress(completed: int, *_: object) -> None:
            progress.update(task_id, completed=completed)

        return processor.process(font, progress_callback=update_progress)


def _read_charset_file(path: Path) -> str:
    """Read the distinct characters of a text file, in first-seen order.

    Line breaks and tabs are ignored.
    """
    text = path.read_text(encoding="utf-8").lstrip("\ufeff")
    seen: dict[str, None] = {}
    for char in text:
        if char in "\r\n\t":
            continue
        seen.setdefault(char, None)
    return "".join(seen)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
