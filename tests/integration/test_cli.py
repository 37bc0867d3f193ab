"""Tests for the command line interface."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from sdfatlas import __version__
from sdfatlas.cli.app import _read_charset_file, app
from sdfatlas.core import AtlasProcessor

runner = CliRunner()


@pytest.fixture
def fake_processor(renderer_factory):
    """Run the CLI with the fake renderer and without global logging setup."""

    def build(settings):
        return AtlasProcessor(settings, renderer=renderer_factory())

    with (
        patch("sdfatlas.cli.app.AtlasProcessor", side_effect=build),
        patch("sdfatlas.cli.app.configure_logging"),
    ):
        yield


class TestCli:
    """Tests for the sdfatlas command."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_generate(self, font_path, tmp_path, fake_processor):
        """Pages and descriptor are written to the output directory."""
        out_dir = tmp_path / "out"

        result = runner.invoke(
            app,
            [str(font_path), "-o", str(out_dir), "-f", "atlas", "-c", "AB", "--field-type", "sdf"],
        )

        assert result.exit_code == 0, result.output
        assert (out_dir / "atlas.0.png").exists()
        assert (out_dir / "atlas.fnt").exists()

    def test_generate_json_quiet(self, font_path, tmp_path, fake_processor):
        result = runner.invoke(
            app,
            [str(font_path), "-o", str(tmp_path), "-f", "atlas", "-c", "A", "-t", "json", "-q"],
        )

        assert result.exit_code == 0, result.output
        assert (tmp_path / "atlas.json").exists()

    def test_missing_font(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path / "missing.ttf")])

        assert result.exit_code == 1

    def test_invalid_field_type(self, font_path):
        result = runner.invoke(app, [str(font_path), "--field-type", "bitmap"])

        assert result.exit_code == 1

    def test_verbose_and_quiet(self, font_path):
        result = runner.invoke(app, [str(font_path), "-v", "-q"])

        assert result.exit_code == 1

    def test_glyph_too_large(self, font_path, tmp_path, fake_processor):
        result = runner.invoke(
            app,
            [
                str(font_path),
                "-o", str(tmp_path),
                "-c", "A",
                "-s", "200",
                "--texture-width", "64",
                "--texture-height", "64",
                "-q",
            ],
        )

        assert result.exit_code == 1
        assert not list(tmp_path.glob("*.png"))


class TestReadCharsetFile:
    """Tests for charset files."""

    def test_distinct_characters_in_order(self, tmp_path):
        path = tmp_path / "charset.txt"
        path.write_text("\ufeffBAB\nC\tA\r\n", encoding="utf-8")

        assert _read_charset_file(path) == "BAC"
