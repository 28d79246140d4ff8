"""
Main Input Handler Module.

This module provides the InputHandler class, the text-acquisition
adapter in front of the extraction engine. Given a file path (or bytes
and a filename) it returns the document's plain text, or raises a
single exception naming the input that could not be read.

Usage:
    from src.input_handler import InputHandler

    handler = InputHandler()
    document = handler.load("bill.pdf")
    text = document.text

Classes:
    TextDocument: Plain text of one input plus metadata
    InputHandler: Loads .pdf and .txt inputs
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

from config import get_config
from src.utils.logger import get_logger
from src.utils.helpers import get_file_extension, validate_file_exists
from src.utils.exceptions import (
    FileNotFoundError,
    TextAcquisitionError,
    UnsupportedFileTypeError
)

from .pdf_processor import PDFProcessor


# Initialize module logger
logger = get_logger(__name__)


@dataclass
class TextDocument:
    """
    Plain text obtained from one input.

    Attributes:
        filepath: Original file path (or the bare name for in-memory input)
        filename: Original filename
        file_type: 'pdf' or 'text'
        text: Document text
        page_count: Number of pages read
        metadata: Backend and size details
    """
    filepath: str
    filename: str
    file_type: str
    text: str
    page_count: int = 1
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        return (
            f"TextDocument(filename='{self.filename}', "
            f"type='{self.file_type}', "
            f"pages={self.page_count}, "
            f"chars={len(self.text)})"
        )


class InputHandler:
    """
    Loads documents as plain text.

    Attributes:
        supported_extensions: Set of accepted file extensions
        pdf_processor: PDFProcessor instance for PDF files

    Example:
        >>> handler = InputHandler()
        >>> document = handler.load("bill.txt")
        >>> print(document.text[:40])
    """

    PDF_EXTENSIONS = {'.pdf'}
    TEXT_EXTENSIONS = {'.txt'}

    def __init__(self) -> None:
        """Initialize the InputHandler from configuration."""
        self.supported_extensions = {
            ext.lower() for ext in get_config(
                "input.supported_extensions",
                sorted(self.PDF_EXTENSIONS | self.TEXT_EXTENSIONS)
            )
        }
        self.pdf_processor = PDFProcessor()

        logger.debug(f"InputHandler initialized with extensions: {self.supported_extensions}")

    def detect_file_type(self, filename: Union[str, Path]) -> str:
        """
        Detect the type of an input from its extension.

        Returns:
            'pdf' or 'text'.

        Raises:
            UnsupportedFileTypeError: If the extension is not supported.
        """
        extension = get_file_extension(filename)

        if extension not in self.supported_extensions:
            raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))
        if extension in self.PDF_EXTENSIONS:
            return 'pdf'
        if extension in self.TEXT_EXTENSIONS:
            return 'text'

        raise UnsupportedFileTypeError(extension, sorted(self.PDF_EXTENSIONS | self.TEXT_EXTENSIONS))

    def load(self, filepath: Union[str, Path]) -> TextDocument:
        """
        Load a document from disk.

        Args:
            filepath: Path to a .pdf or .txt file.

        Returns:
            TextDocument with the file's text.

        Raises:
            FileNotFoundError: If the path is not an existing file.
            UnsupportedFileTypeError: If the extension is not supported.
            TextAcquisitionError: If the file cannot be read.
        """
        path = Path(filepath)

        if not validate_file_exists(path):
            raise FileNotFoundError(str(path))

        self.detect_file_type(path)

        try:
            data = path.read_bytes()
        except OSError as e:
            raise TextAcquisitionError(str(path), str(e))

        document = self.load_bytes(data, path.name)
        document.filepath = str(path)
        return document

    def load_bytes(self, data: bytes, filename: str) -> TextDocument:
        """
        Load a document held in memory.

        Args:
            data: File content.
            filename: Original filename; its extension selects the reader.

        Returns:
            TextDocument with the content's text.

        Raises:
            UnsupportedFileTypeError: If the extension is not supported.
            TextAcquisitionError: If the content cannot be read.
        """
        file_type = self.detect_file_type(filename)

        if file_type == 'pdf':
            text, metadata = self.pdf_processor.extract_text_from_bytes(data, filename)
            page_count = metadata['page_count']
        else:
            try:
                text = data.decode('utf-8-sig')
            except UnicodeDecodeError as e:
                raise TextAcquisitionError(filename, f"not valid UTF-8: {e}")
            metadata = {'file_size_bytes': len(data)}
            page_count = 1

        logger.info(f"Loaded {filename}: {len(text)} characters from {page_count} page(s)")

        return TextDocument(
            filepath=filename,
            filename=filename,
            file_type=file_type,
            text=text,
            page_count=page_count,
            metadata=metadata
        )
