import struct

import pytest

from rmpdf_converter.exceptions import ParseError
from rmpdf_converter.lines import (
    HEADER_PREFIX,
    HEADER_SIZE,
    lines_header,
    read_lines,
    read_version,
)
from rmpdf_converter.models import BrushColor, BrushSize, BrushType, Point


def test_lines_header_is_padded():
    header = lines_header(5)

    assert len(header) == HEADER_SIZE
    assert header.startswith(b"reMarkable .lines file, version=5")


@pytest.mark.parametrize("version", [3, 5])
def test_read_version(version):
    assert read_version(lines_header(version) + b"\x00" * 4) == version


@pytest.mark.parametrize("version", [3, 5])
def test_read_lines(version, sample_page, encode_lines):
    page = read_lines(encode_lines(sample_page, version))

    assert len(page.layers) == 2
    assert page.line_count == 4

    pen = page.layers[0].lines[0]
    assert pen.brush_type == BrushType.FINELINER_V5
    assert pen.brush_color == BrushColor.BLACK
    assert pen.brush_size == BrushSize.MEDIUM
    assert pen.points == [Point(100, 200), Point(300, 400)]

    grey = page.layers[1].lines[1]
    assert grey.brush_color == BrushColor.GREY
    assert grey.brush_size == BrushSize.LARGE


def test_read_empty_page():
    page = read_lines(lines_header(5) + struct.pack("<i", 0))

    assert page.layers == []


def test_unsupported_version():
    """v6 파일은 지원하지 않음."""
    with pytest.raises(ParseError, match="Unsupported lines version: 6"):
        read_lines(lines_header(6) + b"\x00" * 16)


def test_not_a_lines_file():
    with pytest.raises(ParseError):
        read_lines(b"%PDF-1.7\n" + b"\x00" * 64)


def test_short_header():
    with pytest.raises(ParseError):
        read_lines(b"reMarkable")


def test_truncated_data(sample_page, encode_lines):
    data = encode_lines(sample_page)

    with pytest.raises(ParseError, match="Truncated"):
        read_lines(data[:-10])


def test_unknown_brush_type():
    data = (
        lines_header(5)
        + struct.pack("<ii", 1, 1)
        + struct.pack("<iiiff", 99, 0, 0, 2.0, 0.0)
        + struct.pack("<i", 0)
    )

    with pytest.raises(ParseError, match="Invalid line attributes"):
        read_lines(data)


def test_unknown_brush_color():
    data = (
        lines_header(3)
        + struct.pack("<ii", 1, 1)
        + struct.pack("<iiif", 2, 7, 0, 2.0)
        + struct.pack("<i", 0)
    )

    with pytest.raises(ParseError):
        read_lines(data)


def test_header_padding_must_be_spaces():
    header = (HEADER_PREFIX + b" 5").ljust(HEADER_SIZE, b" ")

    with pytest.raises(ParseError, match="Invalid lines header"):
        read_version(header + b"\x00" * 4)
