import logging
from collections.abc import Sequence

from pypdf import PageObject, PdfWriter
from pypdf.generic import (
    DecodedStreamObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
)

_logger = logging.getLogger(__name__)

FOOTER_FONT_NAME = "/FRmPageNumber"
FOOTER_FONT_SIZE = 8
FOOTER_RIGHT_MARGIN = 20
FOOTER_BOTTOM_MARGIN = 10


def merge_content(page: PageObject, fragments: Sequence[str]) -> None:
    """기존 content stream을 q/Q로 감싸고 새 연산자를 뒤에 추가.

    기존 내용이 남긴 변환 행렬은 Q에서 복원되므로, 새 연산자는 항상
    페이지 기본 좌표계에서 그려진다.
    """
    existing = page.get_contents()
    existing_data = existing.get_data() if existing is not None else b""

    parts = [b"q", existing_data, b"Q"]
    parts.extend(fragment.encode("latin-1") for fragment in fragments)

    stream = DecodedStreamObject()
    stream.set_data(b"\n".join(parts))
    page.replace_contents(stream.flate_encode())
    _logger.debug(
        "Merged %d bytes of existing content with %d fragments",
        len(existing_data),
        len(fragments),
    )


def footer_font(writer: PdfWriter) -> IndirectObject:
    """페이지 번호용 Helvetica 폰트 객체 생성."""
    return writer._add_object(
        DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Font"),
                NameObject("/Subtype"): NameObject("/Type1"),
                NameObject("/BaseFont"): NameObject("/Helvetica"),
            }
        )
    )


def add_font_resource(page: PageObject, name: str, font: IndirectObject) -> None:
    if "/Resources" not in page:
        page[NameObject("/Resources")] = DictionaryObject()
    resources = page["/Resources"].get_object()

    if "/Font" not in resources:
        resources[NameObject("/Font")] = DictionaryObject()
    fonts = resources["/Font"].get_object()
    fonts[NameObject(name)] = font


def page_number_operators(page: PageObject, number: int) -> str:
    """media 박스 오른쪽 아래에 페이지 번호를 그리는 연산자."""
    box = page.mediabox
    x = float(box.right) - FOOTER_RIGHT_MARGIN
    y = float(box.bottom) + FOOTER_BOTTOM_MARGIN - FOOTER_FONT_SIZE
    return "\n".join(
        [
            "q",
            "BT",
            f"{FOOTER_FONT_NAME} {FOOTER_FONT_SIZE} Tf",
            f"{x:.2f} {y:.2f} Td",
            f"({number}) Tj",
            "ET",
            "Q",
        ]
    )
