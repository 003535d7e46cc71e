import io
import logging
from dataclasses import dataclass
from pathlib import Path

from pypdf import PdfReader, PdfWriter
from pypdf.generic import IndirectObject

from rmpdf_converter.annotations import add_highlight
from rmpdf_converter.background import BackgroundResolver, ResolvedPage
from rmpdf_converter.content import (
    FOOTER_FONT_NAME,
    add_font_resource,
    footer_font,
    merge_content,
    page_number_operators,
)
from rmpdf_converter.exceptions import InvalidNotebookError
from rmpdf_converter.models import Notebook, PageAnnotations
from rmpdf_converter.renderer import PageRenderer, PathBuilder, polyline_path

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PdfGeneratorOptions:
    add_page_numbers: bool = False
    all_pages: bool = False
    annotations_only: bool = False


class PdfGenerator:
    """Notebook를 PDF로 조립."""

    SUPPORTED_FILE_TYPES = ("pdf", "notebook")

    def __init__(
        self,
        notebook: Notebook,
        output_path: Path | str,
        options: PdfGeneratorOptions | None = None,
        path_builder: PathBuilder = polyline_path,
    ):
        self.notebook = notebook
        self.output_path = Path(output_path)
        self.options = options or PdfGeneratorOptions()
        self.path_builder = path_builder

        self.reader: PdfReader | None = None
        self.newcolors = False

    def generate(self) -> int:
        """PDF 생성 후 파일로 저장.

        Returns:
            출력된 페이지 수
        """
        if self.notebook.file_type not in self.SUPPORTED_FILE_TYPES:
            raise InvalidNotebookError(
                f"only pdf and notebooks supported (got {self.notebook.file_type!r})"
            )

        self._init_background()

        if not self.notebook.pages:
            raise InvalidNotebookError("the document has no pages")

        writer = PdfWriter()
        resolver = BackgroundResolver(
            writer,
            self.reader,
            landscape=self.notebook.landscape,
            annotations_only=self.options.annotations_only,
        )

        # 폰트 객체는 writer에 속하므로 실행마다 새로 만든다
        font = footer_font(writer) if self.options.add_page_numbers else None

        emitted = 0
        for i, annotations in enumerate(self.notebook.pages):
            has_content = annotations is not None

            # 내용이 없는 페이지는 all_pages 옵션일 때만 출력
            if not self.options.all_pages and not has_content:
                continue

            resolved = resolver.resolve(i + 1)
            emitted += 1
            self._fill_page(writer, resolved, annotations, emitted, font)

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        writer.write(self.output_path)
        _logger.info("Wrote %d pages to %s", emitted, self.output_path)
        return emitted

    def _init_background(self) -> None:
        """배경 PDF가 있으면 reader를 열고 오버레이 색상 사용."""
        self.newcolors = self.notebook.has_background
        self.reader = None
        if self.notebook.has_background:
            self.reader = PdfReader(io.BytesIO(self.notebook.background))

    def _fill_page(
        self,
        writer: PdfWriter,
        resolved: ResolvedPage,
        annotations: PageAnnotations | None,
        number: int,
        font: IndirectObject | None = None,
    ) -> None:
        fragments = []

        if annotations is not None:
            renderer = PageRenderer(
                resolved.scale,
                resolved.height,
                newcolors=self.newcolors,
                path_builder=self.path_builder,
            )
            rendered = renderer.render(annotations)
            fragments.append(rendered.content)
            for band in rendered.highlights:
                add_highlight(writer, resolved.page, band)
            _logger.debug(
                "Page %d: %d lines, %d highlights",
                number,
                annotations.line_count,
                len(rendered.highlights),
            )

        if font is not None:
            add_font_resource(resolved.page, FOOTER_FONT_NAME, font)
            fragments.append(page_number_operators(resolved.page, number))

        if fragments:
            merge_content(resolved.page, fragments)

