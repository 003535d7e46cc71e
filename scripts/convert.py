#!/usr/bin/env python3
"""CLI for rmpdf-converter."""

import argparse
import logging
import sys
from pathlib import Path

from rmpdf_converter import convert


def main():
    parser = argparse.ArgumentParser(description="reMarkable 노트북 아카이브를 PDF로 변환")
    parser.add_argument("input", help="입력 .zip 아카이브 또는 디렉토리")
    parser.add_argument("output", help="출력 PDF 파일 또는 디렉토리")
    parser.add_argument("--page-numbers", action="store_true", help="페이지 번호 표시")
    parser.add_argument("--all-pages", action="store_true", help="주석이 없는 페이지도 출력")
    parser.add_argument(
        "--annotations-only", action="store_true", help="배경 PDF 없이 주석만 출력"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="디버그 로그 출력")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    output_path = Path(args.output)
    options = dict(
        add_page_numbers=args.page_numbers,
        all_pages=args.all_pages,
        annotations_only=args.annotations_only,
    )

    if input_path.is_file():
        print(f"변환 중: {input_path.name}")
        pages = convert(input_path, output_path, **options)
        print(f"완료: {output_path} ({pages} 페이지)")
    elif input_path.is_dir():
        archives = list(input_path.glob("**/*.zip"))
        if not archives:
            print(f"오류: {input_path}에서 .zip 파일을 찾을 수 없습니다.")
            sys.exit(1)

        output_path.mkdir(parents=True, exist_ok=True)

        for archive in archives:
            output_name = archive.stem + ".pdf"
            print(f"변환 중: {archive.name} -> {output_name}")
            convert(archive, output_path / output_name, **options)

        print(f"\n총 {len(archives)}개 파일 변환 완료!")
    else:
        print(f"오류: {input_path}를 찾을 수 없습니다.")
        sys.exit(1)


if __name__ == "__main__":
    main()
