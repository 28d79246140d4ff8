"""
PDF Processor Module.

This module turns PDF bytes into plain text for the extraction engine.
pdfplumber is the primary backend; PyMuPDF is tried when pdfplumber
cannot read the file or finds no text in it. Page texts are joined with
newlines so table rows keep their line structure.

Author: ML Engineering Team
"""

import io
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import fitz  # PyMuPDF
import pdfplumber

from config import get_config
from src.utils.logger import get_logger
from src.utils.exceptions import TextAcquisitionError

# Initialize module logger
logger = get_logger(__name__)


class PDFProcessor:
    """
    Text extractor for PDF files.

    Attributes:
        max_pages: Maximum number of pages read per document

    Example:
        >>> processor = PDFProcessor()
        >>> text, metadata = processor.extract_text("bill.pdf")
        >>> print(metadata["page_count"])
    """

    def __init__(self) -> None:
        """Initialize the PDF processor with configuration."""
        self.max_pages = get_config("input.pdf.max_pages", 20)
        logger.debug(f"PDFProcessor initialized (max_pages={self.max_pages})")

    def extract_text(self, filepath: Union[str, Path]) -> Tuple[str, Dict[str, Any]]:
        """
        Extract the text of a PDF file.

        Args:
            filepath: Path to the PDF file.

        Returns:
            Tuple of (text, metadata dictionary).

        Raises:
            TextAcquisitionError: If no backend can read the file.
        """
        filepath = Path(filepath)
        return self.extract_text_from_bytes(filepath.read_bytes(), filepath.name)

    def extract_text_from_bytes(
        self,
        data: bytes,
        source_name: str = "<bytes>"
    ) -> Tuple[str, Dict[str, Any]]:
        """
        Extract the text of a PDF held in memory.

        Args:
            data: PDF file content.
            source_name: Name used in logs and errors.

        Returns:
            Tuple of (text, metadata dictionary).

        Raises:
            TextAcquisitionError: If no backend can read any text
                from the data.
        """
        logger.info(f"Extracting text from PDF: {source_name}")
        failures: List[str] = []

        for backend, reader in (
            ('pdfplumber', self._read_with_pdfplumber),
            ('pymupdf', self._read_with_pymupdf),
        ):
            try:
                pages, total_pages = reader(data)
            except Exception as e:
                logger.warning(f"{backend} could not read {source_name}: {e}")
                failures.append(f"{backend}: {e}")
                continue

            if not any(page.strip() for page in pages):
                logger.warning(f"{backend} found no text in {source_name}")
                failures.append(f"{backend}: no text on any page")
                continue

            if total_pages > len(pages):
                logger.warning(
                    f"PDF has {total_pages} pages, limiting to {self.max_pages}"
                )

            metadata = {
                'backend': backend,
                'page_count': len(pages),
                'total_pages': total_pages,
                'file_size_bytes': len(data),
            }
            return "\n".join(pages), metadata

        raise TextAcquisitionError(source_name, "; ".join(failures))

    def _read_with_pdfplumber(self, data: bytes) -> Tuple[List[str], int]:
        """Page texts via pdfplumber, plus the document's page count."""
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            pages = [
                page.extract_text() or ""
                for page in pdf.pages[:self.max_pages]
            ]
            return pages, len(pdf.pages)

    def _read_with_pymupdf(self, data: bytes) -> Tuple[List[str], int]:
        """Page texts via PyMuPDF, plus the document's page count."""
        with fitz.open(stream=data, filetype="pdf") as doc:
            pages = [
                doc.load_page(page_num).get_text()
                for page_num in range(min(len(doc), self.max_pages))
            ]
            return pages, len(doc)
