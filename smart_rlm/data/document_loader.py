"""
Document loading module.

Supplies the raw context string for a run. Plain text files are read as
UTF-8; PDF files are read page by page with pypdf and joined with blank
lines. The document is read once and returned as an immutable string.
"""

from pathlib import Path
from typing import List, Union

from pypdf import PdfReader

from smart_rlm.utils.exceptions import DocumentLoadingError
from smart_rlm.utils.logger import get_logger


class DocumentLoader:
    """
    Loader for the document a query runs against.

    Responsibilities:
    - Resolve and check the path
    - Extract text from PDF or text files
    - Return the full text as a single string
    """

    def __init__(self):
        """Initialize the document loader."""
        self.logger = get_logger("DocumentLoader")

    def load(self, file_path: Union[str, Path]) -> str:
        """
        Load a document and return its text.

        Args:
            file_path: Path to a .pdf file or any UTF-8 text file

        Returns:
            str: Full document text

        Raises:
            DocumentLoadingError: If the file is missing or cannot be read
        """
        path = Path(file_path)
        if not path.exists():
            raise DocumentLoadingError(f"Document not found: {path}")
        if not path.is_file():
            raise DocumentLoadingError(f"Document path is not a file: {path}")

        self.logger.info(f"Loading document: {path}")

        if path.suffix.lower() == ".pdf":
            text = self._load_pdf(path)
        else:
            text = self._load_text(path)

        self.logger.info(f"Loaded {len(text):,} characters from {path.name}")
        return text

    def _load_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadingError(f"Failed to read text file {path}: {e}") from e

    def _load_pdf(self, path: Path) -> str:
        try:
            reader = PdfReader(str(path))
            pages: List[str] = []
            for page_num, page in enumerate(reader.pages, start=1):
                page_text = page.extract_text() or ""
                pages.append(page_text)
                self.logger.debug(f"Extracted {len(page_text)} chars from page {page_num}")
        except Exception as e:
            raise DocumentLoadingError(f"Failed to read PDF {path}: {e}") from e

        return "\n\n".join(pages)
