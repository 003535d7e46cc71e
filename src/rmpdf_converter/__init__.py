"""rmpdf-converter - reMarkable notebook to PDF converter."""

from rmpdf_converter.converter import convert
from rmpdf_converter.exceptions import (
    InvalidNotebookError,
    ParseError,
    RmPdfError,
    UnrecoverablePageError,
)
from rmpdf_converter.generator import PdfGenerator, PdfGeneratorOptions

__version__ = "0.1.0"
__all__ = [
    "convert",
    "PdfGenerator",
    "PdfGeneratorOptions",
    "InvalidNotebookError",
    "ParseError",
    "RmPdfError",
    "UnrecoverablePageError",
]
