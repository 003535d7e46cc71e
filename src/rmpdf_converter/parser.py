import json
import logging
import zipfile
from pathlib import Path, PurePosixPath

from rmpdf_converter.exceptions import InvalidNotebookError, ParseError
from rmpdf_converter.lines import read_lines
from rmpdf_converter.models import Notebook, PageAnnotations

_logger = logging.getLogger(__name__)


class NotebookParser:
    CONTENT_SUFFIX = ".content"
    PAYLOAD_SUFFIXES = (".pdf", ".epub")

    def __init__(self, path: Path | str):
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"File not found: {self.path}")

        self._names: list[str] = []

    def parse(self) -> Notebook:
        """노트북 아카이브 파싱."""
        try:
            with zipfile.ZipFile(self.path, "r") as zf:
                self._names = zf.namelist()
                return self._parse_contents(zf)
        except zipfile.BadZipFile:
            raise InvalidNotebookError(f"Not a valid zip file: {self.path}")

    def _find_file_by_suffix(self, suffix: str) -> str | None:
        """특정 suffix로 끝나는 최상위 항목 찾기."""
        for name in self._names:
            if "/" not in name and name.endswith(suffix):
                return name
        return None

    def _parse_contents(self, zf: zipfile.ZipFile) -> Notebook:
        content_name = self._find_file_by_suffix(self.CONTENT_SUFFIX)
        if content_name is None:
            raise InvalidNotebookError(f"No .content file in archive: {self.path}")

        uuid = PurePosixPath(content_name).stem
        content = self._read_json(zf, content_name)

        notebook = Notebook(
            uuid=uuid,
            file_type=content.get("fileType") or "notebook",
            orientation=content.get("orientation") or "portrait",
            background=self._load_payload(zf, uuid),
            pages=self._parse_pages(zf, uuid, content),
        )
        _logger.info(
            "Parsed %s: type=%s, orientation=%s, %d pages, background=%d bytes",
            uuid,
            notebook.file_type,
            notebook.orientation,
            len(notebook.pages),
            len(notebook.background),
        )
        return notebook

    def _read_json(self, zf: zipfile.ZipFile, name: str) -> dict:
        try:
            return json.loads(zf.read(name).decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(f"Failed to parse {name}: {e}")

    def _load_payload(self, zf: zipfile.ZipFile, uuid: str) -> bytes:
        """배경 문서 (pdf/epub) 로드. 없으면 빈 bytes."""
        for suffix in self.PAYLOAD_SUFFIXES:
            name = uuid + suffix
            if name in self._names:
                return zf.read(name)
        return b""

    @staticmethod
    def _page_ids(content: dict) -> list[str]:
        """content의 페이지 ID 목록 (pages, cPages, pageCount 순서로 확인)."""
        if content.get("pages"):
            return [str(page_id) for page_id in content["pages"]]

        c_pages = content.get("cPages") or {}
        if c_pages.get("pages"):
            return [str(page["id"]) for page in c_pages["pages"]]

        return [str(i) for i in range(int(content.get("pageCount", 0)))]

    def _parse_pages(
        self, zf: zipfile.ZipFile, uuid: str, content: dict
    ) -> list[PageAnnotations | None]:
        pages = []

        for index, page_id in enumerate(self._page_ids(content)):
            rm_name = f"{uuid}/{page_id}.rm"
            if rm_name not in self._names:
                pages.append(None)
                continue

            try:
                annotations = read_lines(zf.read(rm_name))
            except ParseError as e:
                raise ParseError(f"Page {index + 1} ({rm_name}): {e}")

            self._apply_layer_names(zf, f"{uuid}/{page_id}-metadata.json", annotations)
            pages.append(annotations)

        return pages

    def _apply_layer_names(
        self, zf: zipfile.ZipFile, name: str, annotations: PageAnnotations
    ) -> None:
        if name not in self._names:
            return

        metadata = self._read_json(zf, name)
        for layer, info in zip(annotations.layers, metadata.get("layers", [])):
            layer.name = info.get("name")
