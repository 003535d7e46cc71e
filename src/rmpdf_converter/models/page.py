from dataclasses import dataclass, field

from rmpdf_converter.models.stroke import Line


@dataclass
class Layer:
    lines: list[Line] = field(default_factory=list)
    name: str | None = None


@dataclass
class PageAnnotations:
    layers: list[Layer] = field(default_factory=list)

    @property
    def line_count(self) -> int:
        return sum(len(layer.lines) for layer in self.layers)
