# src/rmpdf_converter/lines.py
import struct

from rmpdf_converter.exceptions import ParseError
from rmpdf_converter.models import (
    BrushColor,
    BrushSize,
    BrushType,
    Layer,
    Line,
    PageAnnotations,
    Point,
)

HEADER_PREFIX = b"reMarkable .lines file, version="
HEADER_SIZE = 43
SUPPORTED_VERSIONS = (3, 5)

_INT = struct.Struct("<i")
_LINE_V3 = struct.Struct("<iiif")
_LINE_V5 = struct.Struct("<iiiff")
_POINT = struct.Struct("<ffffff")


def lines_header(version: int) -> bytes:
    """버전에 맞는 43바이트 헤더 생성."""
    return (HEADER_PREFIX + str(version).encode()).ljust(HEADER_SIZE, b" ")


def read_version(data: bytes) -> int:
    header = data[:HEADER_SIZE]
    if len(header) < HEADER_SIZE or not header.startswith(HEADER_PREFIX):
        raise ParseError("Not a reMarkable lines file")

    try:
        version = int(header[len(HEADER_PREFIX):].strip())
    except ValueError:
        raise ParseError(f"Invalid lines header: {header!r}")

    if version not in SUPPORTED_VERSIONS:
        raise ParseError(f"Unsupported lines version: {version}")

    # 버전 뒤는 공백으로만 채워져 있어야 함
    if header != lines_header(version):
        raise ParseError(f"Invalid lines header: {header!r}")
    return version


def read_lines(data: bytes) -> PageAnnotations:
    """.rm (v3, v5) 바이너리를 PageAnnotations로 파싱."""
    reader = _LinesReader(data, read_version(data))
    try:
        return reader.read()
    except struct.error as e:
        raise ParseError(f"Truncated lines data at offset {reader.offset}: {e}")


class _LinesReader:
    def __init__(self, data: bytes, version: int):
        self.data = data
        self.version = version
        self.offset = HEADER_SIZE

    def _unpack(self, fmt: struct.Struct) -> tuple:
        values = fmt.unpack_from(self.data, self.offset)
        self.offset += fmt.size
        return values

    def _read_int(self) -> int:
        return self._unpack(_INT)[0]

    def read(self) -> PageAnnotations:
        layer_count = self._read_int()
        layers = [self._read_layer() for _ in range(layer_count)]
        return PageAnnotations(layers=layers)

    def _read_layer(self) -> Layer:
        line_count = self._read_int()
        return Layer(lines=[self._read_line() for _ in range(line_count)])

    def _read_line(self) -> Line:
        if self.version == 5:
            brush_type, color, _padding, size, _unknown = self._unpack(_LINE_V5)
        else:
            brush_type, color, _padding, size = self._unpack(_LINE_V3)

        try:
            brush_type = BrushType(brush_type)
            color = BrushColor(color)
        except ValueError as e:
            raise ParseError(f"Invalid line attributes: {e}")

        point_count = self._read_int()
        points = [Point.from_tuple(self._unpack(_POINT)) for _ in range(point_count)]

        return Line(
            points=points,
            brush_type=brush_type,
            brush_size=BrushSize.from_value(size),
            brush_color=color,
        )

