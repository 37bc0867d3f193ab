"""Tests for msdfgen invocation and binary lookup."""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from sdfatlas.config import FieldType
from sdfatlas.core.renderer import (
    MsdfgenRenderer,
    RenderInvocation,
    find_renderer_binary,
)
from sdfatlas.exceptions import RendererNotFoundError, RendererProcessError


@pytest.fixture
def invocation() -> RenderInvocation:
    return RenderInvocation(
        character="A",
        field_type=FieldType.MSDF,
        width=31,
        height=35,
        translate_x=3.0,
        translate_y=32.4,
        distance_range=3.0,
        shape_description="{0, 0; 12.6, -29.4; 25.2, 0; }",
    )


class TestRenderInvocation:
    """Tests for RenderInvocation."""

    def test_to_args(self, invocation):
        """Test the argument vector matches the msdfgen command line."""
        args = invocation.to_args("/opt/msdfgen")

        assert args == [
            "/opt/msdfgen",
            "msdf",
            "-format", "text",
            "-stdout",
            "-size", "31", "35",
            "-translate", "3", "32.4",
            "-pxrange", "3",
            "-defineshape", "{0, 0; 12.6, -29.4; 25.2, 0; }",
        ]

    def test_shape_is_a_single_argument(self, invocation):
        """Test the shape description is passed without shell splitting."""
        args = invocation.to_args("msdfgen")

        assert args[-1] == invocation.shape_description

    def test_command_line_quotes_shape(self, invocation):
        """Test the printable command line quotes the shape description."""
        command = invocation.command_line()

        assert command.startswith("msdfgen msdf -format text -stdout -size 31 35")
        assert command.endswith("'{0, 0; 12.6, -29.4; 25.2, 0; }'")


class TestFindRendererBinary:
    """Tests for find_renderer_binary."""

    def test_explicit_path(self, tmp_path):
        binary = tmp_path / "msdfgen"
        binary.write_bytes(b"")

        assert find_renderer_binary(binary) == binary

    def test_explicit_path_missing(self, tmp_path):
        with pytest.raises(RendererNotFoundError) as exc_info:
            find_renderer_binary(tmp_path / "missing", platform="linux")

        assert str(tmp_path / "missing") in exc_info.value.searched

    def test_unsupported_platform(self):
        """Test platforms without a known binary name are rejected."""
        with pytest.raises(RendererNotFoundError) as exc_info:
            find_renderer_binary(platform="sunos5")

        assert exc_info.value.platform == "sunos5"

    @pytest.mark.parametrize(
        ("platform", "binary_name"),
        [("darwin", "msdfgen.osx"), ("win32", "msdfgen.exe"), ("linux", "msdfgen")],
    )
    def test_bundled_binary(self, tmp_path, platform, binary_name):
        """Test the bundled binary of each platform is found first."""
        (tmp_path / binary_name).write_bytes(b"")

        with patch("sdfatlas.core.renderer.BUNDLED_BIN_DIR", tmp_path):
            assert find_renderer_binary(platform=platform) == tmp_path / binary_name

    def test_path_lookup(self, tmp_path):
        """Test PATH is searched when no binary is bundled."""
        with (
            patch("sdfatlas.core.renderer.BUNDLED_BIN_DIR", tmp_path),
            patch("sdfatlas.core.renderer.shutil.which", return_value="/usr/bin/msdfgen"),
        ):
            assert find_renderer_binary(platform="linux") == Path("/usr/bin/msdfgen")

    def test_not_found(self, tmp_path):
        with (
            patch("sdfatlas.core.renderer.BUNDLED_BIN_DIR", tmp_path),
            patch("sdfatlas.core.renderer.shutil.which", return_value=None),
            pytest.raises(RendererNotFoundError),
        ):
            find_renderer_binary(platform="linux")


class TestMsdfgenRenderer:
    """Tests for MsdfgenRenderer with subprocess mocked."""

    @patch("sdfatlas.core.renderer.subprocess.run")
    def test_returns_stdout(self, mock_run, invocation):
        mock_run.return_value = Mock(returncode=0, stdout="ff 00 00\n", stderr="")
        renderer = MsdfgenRenderer(Path("/opt/msdfgen"), timeout=5)

        assert renderer(invocation) == "ff 00 00\n"

        args, kwargs = mock_run.call_args
        assert args[0][0] == "/opt/msdfgen"
        assert kwargs["timeout"] == 5
        assert kwargs.get("shell", False) is False

    @patch("sdfatlas.core.renderer.subprocess.run")
    def test_non_zero_exit(self, mock_run, invocation):
        mock_run.return_value = Mock(returncode=2, stdout="", stderr="bad shape")
        renderer = MsdfgenRenderer(Path("msdfgen"))

        with pytest.raises(RendererProcessError) as exc_info:
            renderer(invocation)

        error = exc_info.value
        assert error.character == "A"
        assert error.returncode == 2
        assert error.stderr == "bad shape"
        assert "-defineshape" in error.command

    @patch("sdfatlas.core.renderer.subprocess.run")
    def test_timeout(self, mock_run, invocation):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="msdfgen", timeout=1)
        renderer = MsdfgenRenderer(Path("msdfgen"), timeout=1)

        with pytest.raises(RendererProcessError, match="timed out"):
            renderer(invocation)

    @patch("sdfatlas.core.renderer.subprocess.run")
    def test_spawn_failure(self, mock_run, invocation):
        mock_run.side_effect = FileNotFoundError("msdfgen")
        renderer = MsdfgenRenderer(Path("msdfgen"))

        with pytest.raises(RendererProcessError):
            renderer(invocation)
