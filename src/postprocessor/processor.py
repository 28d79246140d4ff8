"""
Main Post-Processor Module.

This module provides the PostProcessor class that finishes an extracted
document:

    1. Reconcile lines with totals (backfill / fallback line)
    2. Run consistency checks
    3. Attach all resulting diagnostic codes to the record
    4. Log a summary

Author: ML Engineering Team
"""

from dataclasses import replace

from src.utils.logger import get_logger
from src.extraction.document import ExtractedDocument
from .reconciler import Reconciler
from .validators import DocumentValidator, ValidationResult

# Initialize module logger
logger = get_logger(__name__)


class PostProcessor:
    """
    Post-processor for extracted vendor bills.

    Attributes:
        reconciler: Reconciler instance
        validator: DocumentValidator instance

    Example:
        >>> processor = PostProcessor()
        >>> final = processor.process(extractor.extract(text))
        >>> final.diagnostics
        ('fallback_line_synthesized',)
    """

    def __init__(self) -> None:
        """Initialize the post-processor with all sub-components."""
        self.reconciler = Reconciler()
        self.validator = DocumentValidator()

        logger.debug("PostProcessor initialized")

    def process(self, document: ExtractedDocument) -> ExtractedDocument:
        """
        Reconcile and validate a document.

        Args:
            document: Record straight from the extractor.

        Returns:
            New record with reconciled lines and diagnostics appended to
            any the input already carried.
        """
        reconciled, codes = self.reconciler.reconcile(document)
        validation = self.validator.validate(reconciled)

        diagnostics = list(document.diagnostics)
        for code in codes + validation.codes:
            if code not in diagnostics:
                diagnostics.append(code)

        processed = replace(reconciled, diagnostics=tuple(diagnostics))
        self._log_processing_summary(processed, validation)
        return processed

    def validate(self, document: ExtractedDocument) -> ValidationResult:
        """Validate a document without reconciling or modifying it."""
        return self.validator.validate(document)

    def _log_processing_summary(
        self,
        document: ExtractedDocument,
        validation: ValidationResult
    ) -> None:
        logger.info(
            f"Post-processing complete for {document.source_file or '<text>'}: "
            f"{len(document.lines.items)} items, "
            f"{len(document.lines.expenses)} expenses, "
            f"{len(document.diagnostics)} diagnostics"
        )

        for message in validation.messages:
            logger.warning(f"Validation: {message}")
