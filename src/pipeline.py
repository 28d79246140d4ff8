"""
Extraction Pipeline Module.

Runs one document end to end:

    text -> VendorBillExtractor -> PostProcessor -> ExtractedDocument

and, for files, puts the InputHandler in front. A file whose text cannot
be acquired raises; nothing partial is returned for it.

Author: ML Engineering Team
"""

from pathlib import Path
from typing import Optional, Union

from src.utils.logger import get_logger
from src.extraction import ExtractedDocument, RuleSet, VendorBillExtractor
from src.input_handler import InputHandler
from src.postprocessor import PostProcessor

# Initialize module logger
logger = get_logger(__name__)


class BillExtractionPipeline:
    """
    End-to-end vendor bill extraction.

    Attributes:
        extractor: VendorBillExtractor instance
        post_processor: PostProcessor instance
        input_handler: InputHandler instance, created on first file

    Example:
        >>> pipeline = BillExtractionPipeline()
        >>> document = pipeline.extract_text(text)
        >>> document.to_json()
    """

    def __init__(self, rule_set: Optional[RuleSet] = None) -> None:
        self.extractor = VendorBillExtractor(rule_set)
        self.post_processor = PostProcessor()
        self._input_handler = None

    @property
    def input_handler(self) -> InputHandler:
        """Get or create the input handler."""
        if self._input_handler is None:
            self._input_handler = InputHandler()
        return self._input_handler

    def extract_text(self, text: str, source_file: Optional[str] = None) -> ExtractedDocument:
        """
        Extract and reconcile one document from its text.

        Args:
            text: Plain text of the document.
            source_file: Originating filename, if any.

        Returns:
            Final ExtractedDocument.
        """
        return self.post_processor.process(self.extractor.extract(text, source_file))

    def extract_file(self, filepath: Union[str, Path]) -> ExtractedDocument:
        """
        Load a file's text and extract it.

        Raises:
            InputError: If the file is missing, unsupported or unreadable.
        """
        document = self.input_handler.load(filepath)
        return self.extract_text(document.text, document.filename)

    def extract_bytes(self, data: bytes, filename: str) -> ExtractedDocument:
        """
        Extract a document held in memory.

        Raises:
            InputError: If the type is unsupported or the content unreadable.
        """
        document = self.input_handler.load_bytes(data, filename)
        return self.extract_text(document.text, document.filename)


def extract_document(text: str, rule_set: Optional[RuleSet] = None) -> ExtractedDocument:
    """
    Extract a vendor bill from plain text in one call.

    Example:
        >>> extract_document(text).to_dict()["totals"]["amountTotal"]
        1000.0
    """
    return BillExtractionPipeline(rule_set).extract_text(text)
