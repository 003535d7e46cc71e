from dataclasses import dataclass, field
from enum import Enum, IntEnum

DEVICE_WIDTH = 1404
DEVICE_HEIGHT = 1872


class BrushType(IntEnum):
    BRUSH = 0
    TILT_PENCIL = 1
    BALLPOINT = 2
    MARKER = 3
    FINELINER = 4
    HIGHLIGHTER = 5
    ERASER = 6
    SHARP_PENCIL = 7
    ERASE_AREA = 8
    BRUSH_V5 = 12
    SHARP_PENCIL_V5 = 13
    TILT_PENCIL_V5 = 14
    BALLPOINT_V5 = 15
    MARKER_V5 = 16
    FINELINER_V5 = 17
    HIGHLIGHTER_V5 = 18

    @property
    def is_eraser(self) -> bool:
        return self in (BrushType.ERASER, BrushType.ERASE_AREA)

    @property
    def is_highlighter(self) -> bool:
        return self in (BrushType.HIGHLIGHTER, BrushType.HIGHLIGHTER_V5)


class BrushSize(Enum):
    SMALL = 1.875
    MEDIUM = 2.0
    LARGE = 2.125

    @classmethod
    def from_value(cls, value: float) -> "BrushSize":
        """lines 파일의 float 값에 가장 가까운 크기 선택."""
        return min(cls, key=lambda size: abs(size.value - value))


class BrushColor(IntEnum):
    BLACK = 0
    GREY = 1
    WHITE = 2


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    speed: float = 0.0
    direction: float = 0.0
    width: float = 0.0
    pressure: float = 0.0

    @classmethod
    def from_tuple(cls, data: tuple) -> "Point":
        return cls(*(float(v) for v in data))


@dataclass
class Line:
    points: list[Point] = field(default_factory=list)
    brush_type: BrushType = BrushType.FINELINER_V5
    brush_size: BrushSize = BrushSize.MEDIUM
    brush_color: BrushColor = BrushColor.BLACK

    @classmethod
    def from_coordinates(
        cls,
        coordinates: list[tuple[float, float]],
        brush_type: BrushType = BrushType.FINELINER_V5,
        brush_size: BrushSize = BrushSize.MEDIUM,
        brush_color: BrushColor = BrushColor.BLACK,
    ) -> "Line":
        points = [Point(x=float(x), y=float(y)) for x, y in coordinates]
        return cls(
            points=points,
            brush_type=brush_type,
            brush_size=brush_size,
            brush_color=brush_color,
        )
