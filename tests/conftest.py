import io
import json
import struct
import zipfile

import pytest
from pypdf import PdfWriter
from pypdf.generic import DecodedStreamObject, NameObject, RectangleObject

from rmpdf_converter.lines import lines_header
from rmpdf_converter.models import (
    BrushColor,
    BrushSize,
    BrushType,
    Layer,
    Line,
    PageAnnotations,
)


def _encode_lines(annotations: PageAnnotations, version: int = 5) -> bytes:
    chunks = [lines_header(version), struct.pack("<i", len(annotations.layers))]
    for layer in annotations.layers:
        chunks.append(struct.pack("<i", len(layer.lines)))
        for line in layer.lines:
            chunks.append(
                struct.pack("<iii", int(line.brush_type), int(line.brush_color), 0)
            )
            chunks.append(struct.pack("<f", line.brush_size.value))
            if version == 5:
                chunks.append(struct.pack("<f", 0.0))
            chunks.append(struct.pack("<i", len(line.points)))
            for p in line.points:
                chunks.append(
                    struct.pack(
                        "<ffffff", p.x, p.y, p.speed, p.direction, p.width, p.pressure
                    )
                )
    return b"".join(chunks)


@pytest.fixture
def encode_lines():
    return _encode_lines


@pytest.fixture
def pen_line() -> Line:
    return Line.from_coordinates([(100, 200), (300, 400)])


@pytest.fixture
def highlighter_line() -> Line:
    return Line.from_coordinates(
        [(100, 500), (250, 510), (400, 520)],
        brush_type=BrushType.HIGHLIGHTER_V5,
    )


@pytest.fixture
def sample_page(pen_line, highlighter_line) -> PageAnnotations:
    eraser = Line.from_coordinates([(10, 10), (20, 20)], brush_type=BrushType.ERASER)
    grey = Line.from_coordinates(
        [(500, 600), (510, 620), (530, 650)],
        brush_size=BrushSize.LARGE,
        brush_color=BrushColor.GREY,
    )
    return PageAnnotations(
        layers=[
            Layer(lines=[pen_line, eraser]),
            Layer(lines=[highlighter_line, grey]),
        ]
    )


@pytest.fixture
def make_background():
    """배경 PDF bytes 생성."""

    def _make(*sizes, trim=None, content: bytes = b"") -> bytes:
        writer = PdfWriter()
        for width, height in sizes or [(612, 792)]:
            page = writer.add_blank_page(width=width, height=height)
            if trim is not None:
                page.trimbox = RectangleObject(trim)
            if content:
                stream = DecodedStreamObject()
                stream.set_data(content)
                page[NameObject("/Contents")] = writer._add_object(stream)

        buffer = io.BytesIO()
        writer.write(buffer)
        return buffer.getvalue()

    return _make


@pytest.fixture
def make_archive(tmp_path):
    """노트북 zip 아카이브 생성."""

    def _make(
        pages,
        *,
        background: bytes = b"",
        file_type: str = "notebook",
        orientation: str = "portrait",
        uuid: str = "doc",
        name: str = "notebook.zip",
        version: int = 5,
        layer_names: dict[int, list[str]] | None = None,
    ):
        path = tmp_path / name
        page_ids = [f"page-{i}" for i in range(len(pages))]
        content = {
            "fileType": file_type,
            "orientation": orientation,
            "pageCount": len(pages),
            "pages": page_ids,
        }

        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr(f"{uuid}.content", json.dumps(content))
            if background:
                zf.writestr(f"{uuid}.pdf", background)
            for i, (page_id, annotations) in enumerate(zip(page_ids, pages)):
                if annotations is None:
                    continue
                zf.writestr(f"{uuid}/{page_id}.rm", _encode_lines(annotations, version))
                if layer_names and i in layer_names:
                    metadata = {"layers": [{"name": n} for n in layer_names[i]]}
                    zf.writestr(f"{uuid}/{page_id}-metadata.json", json.dumps(metadata))

        return path

    return _make
