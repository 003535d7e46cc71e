from dataclasses import dataclass, replace

from rmpdf_converter.models import DEVICE_HEIGHT, DEVICE_WIDTH, Point


@dataclass(frozen=True)
class PageScale:
    """디바이스 좌표를 페이지 좌표로 옮기는 페이지별 변환."""

    scale_x: float
    scale_y: float
    shift_x: float
    shift_y: float
    rotate: bool = False

    @classmethod
    def identity(cls) -> "PageScale":
        return cls(scale_x=1.0, scale_y=1.0, shift_x=0.0, shift_y=0.0, rotate=False)


@dataclass(frozen=True)
class Rect:
    llx: float
    lly: float
    urx: float
    ury: float

    @property
    def width(self) -> float:
        return self.urx - self.llx

    @property
    def height(self) -> float:
        return self.ury - self.lly


@dataclass(frozen=True)
class BoxSet:
    """PDF 페이지의 trim/crop/media 박스 묶음."""

    media: Rect
    crop: Rect
    trim: Rect | None = None

    @property
    def cropped(self) -> bool:
        return self.trim is not None

    @property
    def visible(self) -> Rect:
        """변환 계산에 쓸 영역 (trim 박스, 없으면 media 박스)."""
        return self.trim if self.trim is not None else self.media


def compute_page_scale(
    page_width: float,
    page_height: float,
    lower_left_y: float = 0.0,
    landscape: bool = False,
) -> tuple[PageScale, float]:
    """디바이스 캔버스가 페이지를 덮도록 균일 스케일과 이동량 계산.

    Args:
        page_width: 대상 페이지 너비
        page_height: 대상 페이지 높이
        lower_left_y: 페이지 박스의 lower-left Y
        landscape: 노트북이 가로 방향인지 여부

    Returns:
        (PageScale, over) 튜플. over는 왜곡 없이 맞추기 위해 짧은 축에
        더해야 하는 길이 (0 이상).
    """
    # 세로로 긴 페이지는 회전하지 않음
    rotate = landscape and not page_height > page_width

    device_width, device_height = DEVICE_WIDTH, DEVICE_HEIGHT
    if rotate:
        device_width, device_height = DEVICE_HEIGHT, DEVICE_WIDTH

    h = page_height / device_height
    w = page_width / device_width

    if rotate:
        over = (device_width * h - page_width) / 2 / h
    else:
        over = (device_height * w - page_height) / 2 / w
    over = max(over, 0.0)

    scale = h if h > w and not rotate else w

    shift_x = lower_left_y
    shift_y = lower_left_y - over
    if rotate:
        shift_y += page_width

    page_scale = PageScale(
        scale_x=scale,
        scale_y=scale,
        shift_x=shift_x,
        shift_y=shift_y,
        rotate=rotate,
    )
    return page_scale, over


def normalized(point: Point, scale: PageScale) -> tuple[float, float]:
    """디바이스 좌표 포인트를 페이지 좌표로 변환 (Y 반전 전)."""
    if scale.rotate:
        return (
            -point.y * scale.scale_y + scale.shift_y,
            point.x * scale.scale_x - scale.shift_x,
        )
    return (
        point.x * scale.scale_x + scale.shift_x,
        point.y * scale.scale_y - scale.shift_y,
    )


def adjust_for_overflow(boxes: BoxSet, over: float) -> BoxSet:
    """over/2 만큼 아래로 박스를 늘린 새 BoxSet 반환.

    trim 박스가 없는 페이지는 그대로 둔다.
    """
    if not boxes.cropped:
        return boxes

    half = over / 2
    return BoxSet(
        trim=replace(boxes.trim, lly=boxes.trim.lly - half),
        crop=replace(boxes.crop, llx=0.0, lly=boxes.crop.lly - half),
        media=replace(boxes.media, llx=0.0, lly=boxes.media.lly - half),
    )
