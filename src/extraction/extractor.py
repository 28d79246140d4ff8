"""
Vendor Bill Extractor Module.

This module provides the VendorBillExtractor class that runs the
pattern-based extraction stages over one document's text:

    Text Normalizer -> Header Extractor
                    -> Table Block Extractor -> Row Parser
                    -> Totals Parser

The record it returns has not been reconciled yet; that is done by the
PostProcessor. Nothing here raises for content that does not match; a
miss only leaves the corresponding field or row out.

Author: ML Engineering Team
"""

from typing import Optional

from config import get_config
from src.utils.logger import get_logger
from .document import ExtractedDocument, Lines
from .header_extractor import HeaderExtractor
from .row_parser import RowParser
from .rules import EXPENSES, ITEMS, RuleSet, get_rule_set
from .table_extractor import TableBlockExtractor
from .text_normalizer import normalize_text
from .totals_parser import TotalsParser

# Initialize module logger
logger = get_logger(__name__)


class VendorBillExtractor:
    """
    Deterministic field extractor for vendor bill text.

    The extractor holds only its immutable rule-set, so one instance can
    serve any number of documents, including from several threads.

    Attributes:
        rule_set: Conventions the text is read with
        header_extractor: HeaderExtractor instance
        table_extractor: TableBlockExtractor instance
        row_parser: RowParser instance
        totals_parser: TotalsParser instance

    Example:
        >>> extractor = VendorBillExtractor()
        >>> document = extractor.extract(text)
        >>> document.header.doc_number
        'VENDBILL194'
    """

    def __init__(self, rule_set: Optional[RuleSet] = None) -> None:
        """
        Initialize the extractor.

        Args:
            rule_set: Rule-set to use. If None, the one named by
                extraction.rule_set in the configuration.

        Raises:
            UnknownRuleSetError: If the configured name is not registered.
        """
        if rule_set is None:
            rule_set = get_rule_set(get_config("extraction.rule_set", "vendorbill"))

        self.rule_set = rule_set
        self.header_extractor = HeaderExtractor(rule_set)
        self.table_extractor = TableBlockExtractor(rule_set)
        self.row_parser = RowParser(rule_set)
        self.totals_parser = TotalsParser(rule_set)

        logger.debug(f"VendorBillExtractor initialized with rule-set: {rule_set.name}")

    def extract(self, text: str, source_file: Optional[str] = None) -> ExtractedDocument:
        """
        Extract header, lines and totals from a document's text.

        Args:
            text: Plain text of the document.
            source_file: Originating filename, for the record and logs.

        Returns:
            ExtractedDocument before reconciliation.
        """
        views = normalize_text(text)

        header = self.header_extractor.extract(views)

        blocks = self.table_extractor.extract_all(views.raw)
        lines = Lines(
            items=tuple(self.row_parser.parse_items(blocks[ITEMS])),
            expenses=tuple(self.row_parser.parse_expenses(blocks[EXPENSES])),
        )

        totals = self.totals_parser.parse(views.raw)

        logger.debug(
            f"Extracted {source_file or '<text>'}: "
            f"{len(lines.items)} items, {len(lines.expenses)} expenses, "
            f"amount total {totals.amount_total}"
        )

        return ExtractedDocument(
            transaction_type=self.rule_set.transaction_type,
            header=header,
            lines=lines,
            totals=totals,
            source_file=source_file,
        )
