import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from rmpdf_converter.geometry import PageScale, normalized
from rmpdf_converter.models import BrushColor, BrushSize, Line, PageAnnotations, Point

_logger = logging.getLogger(__name__)

RGB = tuple[float, float, float]

LINE_WIDTHS: dict[BrushSize, float] = {
    BrushSize.SMALL: 0.5,
    BrushSize.MEDIUM: 0.5,
    BrushSize.LARGE: 0.9,
}

# None: RG를 내보내지 않고 직전 스트로크 색상을 유지
OVERLAY_PALETTE: dict[BrushColor, RGB | None] = {
    BrushColor.BLACK: (0.7, 0.0, 0.0),
    BrushColor.GREY: (0.0, 0.7, 0.0),
    BrushColor.WHITE: None,
}

TEMPLATE_PALETTE: dict[BrushColor, RGB | None] = {
    BrushColor.BLACK: (0.0, 0.0, 0.0),
    BrushColor.WHITE: (1.0, 1.0, 1.0),
    BrushColor.GREY: (0.7, 0.7, 0.7),
}

HIGHLIGHTER_WIDTH_FACTOR = 30
HIGHLIGHTER_COLOR: RGB = (1.0, 1.0, 0.0)
HIGHLIGHTER_OPACITY = 0.5

PathBuilder = Callable[[Sequence[tuple[float, float]]], list[str]]


def format_number(value: float) -> str:
    """content stream용 숫자 표기 (불필요한 0 제거)."""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def polyline_path(points: Sequence[tuple[float, float]]) -> list[str]:
    """포인트를 직선 구간으로 잇는 path 연산자 생성."""
    if not points:
        return []

    x, y = points[0]
    operators = [f"{format_number(x)} {format_number(y)} m"]
    for x, y in points[1:]:
        operators.append(f"{format_number(x)} {format_number(y)} l")
    return operators


def palette_for(newcolors: bool) -> dict[BrushColor, RGB | None]:
    return OVERLAY_PALETTE if newcolors else TEMPLATE_PALETTE


@dataclass(frozen=True)
class HighlightBand:
    x1: float
    y1: float
    x2: float
    y2: float
    width: float
    color: RGB = HIGHLIGHTER_COLOR
    opacity: float = HIGHLIGHTER_OPACITY


@dataclass
class RenderedPage:
    operators: list[str] = field(default_factory=list)
    highlights: list[HighlightBand] = field(default_factory=list)

    @property
    def content(self) -> str:
        return "\n".join(self.operators)


class PageRenderer:
    """한 페이지의 레이어/라인을 PDF 연산자와 형광펜 밴드로 변환."""

    def __init__(
        self,
        scale: PageScale,
        height: float,
        newcolors: bool = False,
        path_builder: PathBuilder = polyline_path,
    ):
        self.scale = scale
        self.height = height
        self.newcolors = newcolors
        self.path_builder = path_builder
        self.palette = palette_for(newcolors)

    def render(self, annotations: PageAnnotations) -> RenderedPage:
        result = RenderedPage()
        result.operators.extend(["q", "1 j", "1 J"])

        for layer in annotations.layers:
            for line in layer.lines:
                if len(line.points) < 1:
                    continue
                if line.brush_type.is_eraser:
                    continue

                if line.brush_type.is_highlighter:
                    result.highlights.append(self.highlight_band(line))
                else:
                    result.operators.extend(self.stroke_operators(line))

        result.operators.append("Q")
        _logger.debug(
            "Rendered %d operators and %d highlights",
            len(result.operators),
            len(result.highlights),
        )
        return result

    def page_point(self, point: Point) -> tuple[float, float]:
        """정규화 후 Y축을 반전한 페이지 좌표."""
        x, y = normalized(point, self.scale)
        return x, self.height - y

    def highlight_band(self, line: Line) -> HighlightBand:
        """형광펜 라인을 첫 점과 끝 점 기준의 수평 밴드로 변환."""
        x1, y1 = normalized(line.points[0], self.scale)
        x2, _ = normalized(line.points[-1], self.scale)
        width = self.scale.scale_x * HIGHLIGHTER_WIDTH_FACTOR
        y1 += width / 2

        y = self.height - y1
        return HighlightBand(x1=x1 - 1, y1=y, x2=x2, y2=y, width=width)

    def stroke_operators(self, line: Line) -> list[str]:
        """펜 스트로크 하나를 q ... Q 로 감싼 연산자로 변환."""
        operators = ["q", f"{format_number(LINE_WIDTHS[line.brush_size])} w"]

        color = self.palette[line.brush_color]
        if color is not None:
            operators.append(" ".join(format_number(c) for c in color) + " RG")

        points = [self.page_point(p) for p in line.points]
        operators.extend(self.path_builder(points))
        operators.extend(["S", "Q"])
        return operators
