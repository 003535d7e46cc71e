from pypdf import PageObject, PdfWriter
from pypdf.annotations import Line
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    FloatObject,
    NameObject,
)

from rmpdf_converter.renderer import HighlightBand, format_number

HIGHLIGHT_STATE_NAME = "/GSHighlight"


def _band_rect(band: HighlightBand) -> tuple[float, float, float, float]:
    half = band.width / 2
    return (
        min(band.x1, band.x2) - half,
        min(band.y1, band.y2) - half,
        max(band.x1, band.x2) + half,
        max(band.y1, band.y2) + half,
    )


def highlight_annotation(band: HighlightBand) -> Line:
    """형광펜 밴드를 반투명 Line 주석으로 생성."""
    annotation = Line(p1=(band.x1, band.y1), p2=(band.x2, band.y2), rect=_band_rect(band))
    annotation[NameObject("/C")] = ArrayObject([FloatObject(c) for c in band.color])
    annotation[NameObject("/CA")] = FloatObject(band.opacity)
    annotation[NameObject("/BS")] = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Border"),
            NameObject("/W"): FloatObject(band.width),
            NameObject("/S"): NameObject("/S"),
        }
    )
    return annotation


def highlight_appearance(band: HighlightBand) -> DecodedStreamObject:
    """주석의 normal appearance로 쓰일 Form XObject.

    좌표는 페이지 좌표 그대로이고, BBox는 주석의 Rect와 같다.
    """
    color = " ".join(format_number(c) for c in band.color)
    operators = [
        "q",
        f"{HIGHLIGHT_STATE_NAME} gs",
        f"{color} RG",
        f"{format_number(band.width)} w",
        f"{format_number(band.x1)} {format_number(band.y1)} m",
        f"{format_number(band.x2)} {format_number(band.y2)} l",
        "S",
        "Q",
    ]

    stream = DecodedStreamObject()
    stream.set_data("\n".join(operators).encode("latin-1"))
    stream.update(
        {
            NameObject("/Type"): NameObject("/XObject"),
            NameObject("/Subtype"): NameObject("/Form"),
            NameObject("/BBox"): ArrayObject([FloatObject(v) for v in _band_rect(band)]),
            NameObject("/Resources"): DictionaryObject(
                {
                    NameObject("/ExtGState"): DictionaryObject(
                        {
                            NameObject(HIGHLIGHT_STATE_NAME): DictionaryObject(
                                {
                                    NameObject("/Type"): NameObject("/ExtGState"),
                                    NameObject("/CA"): FloatObject(band.opacity),
                                }
                            )
                        }
                    )
                }
            ),
        }
    )
    return stream


def add_highlight(
    writer: PdfWriter, page: PageObject, band: HighlightBand
) -> DictionaryObject:
    """appearance stream을 포함한 형광펜 주석을 페이지에 추가."""
    annotation = highlight_annotation(band)
    # stream은 간접 객체여야 하므로 writer에 먼저 등록
    appearance = writer._add_object(highlight_appearance(band))
    annotation[NameObject("/AP")] = DictionaryObject({NameObject("/N"): appearance})
    return writer.add_annotation(page, annotation)
