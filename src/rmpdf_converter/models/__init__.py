from rmpdf_converter.models.notebook import Notebook
from rmpdf_converter.models.page import Layer, PageAnnotations
from rmpdf_converter.models.stroke import (
    DEVICE_HEIGHT,
    DEVICE_WIDTH,
    BrushColor,
    BrushSize,
    BrushType,
    Line,
    Point,
)

__all__ = [
    "DEVICE_HEIGHT",
    "DEVICE_WIDTH",
    "BrushColor",
    "BrushSize",
    "BrushType",
    "Layer",
    "Line",
    "Notebook",
    "PageAnnotations",
    "Point",
]
