"""Descriptor serialization and output writing.

This module turns a descriptor tree into BMFont XML (``.fnt``) or JSON
text and writes the page textures and descriptor of an atlas to disk.
"""

import json
import xml.etree.ElementTree as etree
from pathlib import Path
from typing import Any

from sdfatlas.config.settings import OutputType
from sdfatlas.domain.atlas import AtlasResult
from sdfatlas.utils.numbers import format_number


def serialize_descriptor(tree: dict[str, Any], output_type: OutputType) -> str:
    """Serialize a BMFont descriptor tree.

    Args:
        tree: Descriptor tree as produced by ``FontDescriptor.to_dict()``
        output_type: XML or JSON

    Returns:
        Descriptor text
    """
    if output_type is OutputType.JSON:
        return json.dumps(tree, ensure_ascii=False)
    return _to_xml(tree)


def _to_str(value: Any) -> str:
    """Convert a value to an XML attribute string."""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        # charset is a list of characters, padding/spacing are number lists
        if all(isinstance(item, str) for item in value):
            return "".join(value)
        return ",".join(format_number(item) for item in value)
    return format_number(value)


def _tostrdict(indict: dict[str, Any]) -> dict[str, str]:
    return {key: _to_str(value) for key, value in indict.items()}


def _to_xml(tree: dict[str, Any]) -> str:
    root = etree.Element("font")
    etree.SubElement(root, "info", _tostrdict(tree["info"]))
    etree.SubElement(root, "common", _tostrdict(tree["common"]))

    pages = etree.SubElement(root, "pages")
    for index, filename in enumerate(tree["pages"]):
        etree.SubElement(pages, "page", {"id": str(index), "file": filename})

    chars = etree.SubElement(root, "chars", {"count": str(len(tree["chars"]))})
    for char in tree["chars"]:
        etree.SubElement(chars, "char", _tostrdict(char))

    kernings = etree.SubElement(root, "kernings", {"count": str(len(tree["kernings"]))})
    for kerning in tree["kernings"]:
        etree.SubElement(kernings, "kerning", _tostrdict(kerning))

    etree.indent(root)
    body = etree.tostring(root, encoding="unicode")
    return f'<?xml version="1.0"?>\n{body}\n'


class AtlasWriter:
    """Writes atlas textures and descriptor to a directory.

    Example:
        writer = AtlasWriter(Path("out"))
        paths = writer.save(result)
    """

    def __init__(self, output_dir: Path) -> None:
        """Initialize the atlas writer.

        Args:
            output_dir: Directory receiving the files (created if missing)
        """
        self._output_dir = output_dir

    def save(self, result: AtlasResult) -> list[Path]:
        """Write every page texture and the descriptor file.

        Args:
            result: Output of a pipeline run

        Returns:
            Paths of the written files, pages first

        Raises:
            OSError: If a file cannot be written
        """
        self._output_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []

        for texture in result.textures:
            path = self._output_dir / texture.filename
            path.write_bytes(texture.data)
            written.append(path)

        font_path = self._output_dir / result.font_file.filename
        font_path.write_text(result.font_file.data, encoding="utf-8")
        written.append(font_path)

        return written


def write_outputs(result: AtlasResult, directory: Path) -> list[Path]:
    """Write the pages and descriptor of an atlas into ``directory``."""
    return AtlasWriter(directory).save(result)
