from dataclasses import dataclass, field

from rmpdf_converter.models.page import PageAnnotations


@dataclass
class Notebook:
    uuid: str
    file_type: str = "notebook"
    orientation: str = "portrait"
    background: bytes = b""
    pages: list[PageAnnotations | None] = field(default_factory=list)

    @property
    def landscape(self) -> bool:
        return self.orientation == "landscape"

    @property
    def has_background(self) -> bool:
        return len(self.background) > 0
