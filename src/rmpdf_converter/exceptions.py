class RmPdfError(Exception):
    """Base exception for rmpdf-converter."""

    pass


class InvalidNotebookError(RmPdfError):
    """Raised when the notebook archive cannot be converted."""

    pass


class ParseError(RmPdfError):
    """Raised when the archive or lines data is malformed."""

    pass


class UnrecoverablePageError(RmPdfError):
    """Raised when an output page has no page to draw on.

    Conversion of the document stops; nothing is written.
    """

    def __init__(self, page_number: int, message: str = "page is null"):
        super().__init__(f"{message} (page {page_number})")
        self.page_number = page_number
