import logging
from dataclasses import dataclass

from pypdf import PageObject, PdfReader, PdfWriter
from pypdf.generic import RectangleObject

from rmpdf_converter.exceptions import UnrecoverablePageError
from rmpdf_converter.geometry import (
    BoxSet,
    PageScale,
    Rect,
    adjust_for_overflow,
    compute_page_scale,
)
from rmpdf_converter.models import DEVICE_HEIGHT, DEVICE_WIDTH

_logger = logging.getLogger(__name__)


@dataclass
class ResolvedPage:
    page: PageObject
    scale: PageScale
    height: float


def _to_rect(box: RectangleObject) -> Rect:
    return Rect(
        llx=float(box.left),
        lly=float(box.bottom),
        urx=float(box.right),
        ury=float(box.top),
    )


def _to_rectangle_object(rect: Rect) -> RectangleObject:
    return RectangleObject([rect.llx, rect.lly, rect.urx, rect.ury])


def read_boxes(page: PageObject) -> BoxSet:
    """페이지의 박스들을 BoxSet으로 읽기 (trim 박스는 선언된 경우만)."""
    trim = _to_rect(page.trimbox) if "/TrimBox" in page else None
    return BoxSet(
        media=_to_rect(page.mediabox),
        crop=_to_rect(page.cropbox),
        trim=trim,
    )


def write_boxes(page: PageObject, boxes: BoxSet) -> None:
    page.mediabox = _to_rectangle_object(boxes.media)
    page.cropbox = _to_rectangle_object(boxes.crop)
    if boxes.trim is not None:
        page.trimbox = _to_rectangle_object(boxes.trim)


class BackgroundResolver:
    """출력 페이지마다 배경 페이지를 결정하고 변환을 계산."""

    def __init__(
        self,
        writer: PdfWriter,
        reader: PdfReader | None = None,
        *,
        landscape: bool = False,
        annotations_only: bool = False,
    ):
        self.writer = writer
        self.reader = reader
        self.landscape = landscape
        self.annotations_only = annotations_only

    @property
    def template(self) -> bool:
        """빈 템플릿 페이지를 쓰는지 여부."""
        return self.reader is None or self.annotations_only

    def resolve(self, page_number: int) -> ResolvedPage:
        """1부터 시작하는 page_number의 배경 페이지 생성."""
        if self.template:
            resolved = self._blank_page()
        else:
            resolved = self._background_page(page_number)

        if resolved.page is None:
            raise UnrecoverablePageError(page_number)
        return resolved

    def _blank_page(self) -> ResolvedPage:
        page = self.writer.add_blank_page(width=DEVICE_WIDTH, height=DEVICE_HEIGHT)
        return ResolvedPage(page=page, scale=PageScale.identity(), height=DEVICE_HEIGHT)

    def _background_page(self, page_number: int) -> ResolvedPage:
        if page_number < 1:
            raise UnrecoverablePageError(page_number, "page numbers start at 1")

        try:
            source = self.reader.pages[page_number - 1]
        except IndexError as e:
            raise UnrecoverablePageError(
                page_number, "background document has no such page"
            ) from e

        boxes = read_boxes(source)
        visible = boxes.visible
        scale, over = compute_page_scale(
            visible.width,
            visible.height,
            lower_left_y=visible.lly,
            landscape=self.landscape,
        )

        page = self.writer.add_page(source)
        if page is not None and boxes.cropped:
            write_boxes(page, adjust_for_overflow(boxes, over))

        _logger.debug(
            "Background page %d: %.2fx%.2f, over=%.2f, scale=%.4f, rotate=%s",
            page_number,
            visible.width,
            visible.height,
            over,
            scale.scale_x,
            scale.rotate,
        )
        return ResolvedPage(page=page, scale=scale, height=visible.height + over)
