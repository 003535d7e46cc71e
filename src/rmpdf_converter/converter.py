import logging
from pathlib import Path

from rmpdf_converter.generator import PdfGenerator, PdfGeneratorOptions
from rmpdf_converter.parser import NotebookParser

_logger = logging.getLogger(__name__)


def convert(
    input_path: Path | str,
    output_path: Path | str,
    *,
    add_page_numbers: bool = False,
    all_pages: bool = False,
    annotations_only: bool = False,
) -> int:
    """노트북 아카이브를 PDF로 변환.

    Args:
        input_path: 입력 노트북 아카이브 (.zip) 경로
        output_path: 출력 PDF 경로
        add_page_numbers: 페이지 하단에 번호 표시 (기본: False)
        all_pages: 주석이 없는 페이지도 출력 (기본: False)
        annotations_only: 배경 PDF 없이 주석만 출력 (기본: False)

    Returns:
        출력된 페이지 수
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    parser = NotebookParser(input_path)
    notebook = parser.parse()

    options = PdfGeneratorOptions(
        add_page_numbers=add_page_numbers,
        all_pages=all_pages,
        annotations_only=annotations_only,
    )
    _logger.info("Converting %s -> %s (%s)", input_path, output_path, options)

    generator = PdfGenerator(notebook, output_path, options)
    return generator.generate()
