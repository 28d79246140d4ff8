"""
Reconciliation Module.

Fills gaps in a document's lines from its totals. Two rules, in order:

    1. Single expense line, no items: copy amountTotal / taxTotal into the
       line's amount / taxAmount where the line has none.
    2. No lines at all but an amount total: add one placeholder expense
       line, under the sentinel account name, carrying the totals.

Neither rule overwrites a parsed value, and running the reconciler on its
own output changes nothing.

Author: ML Engineering Team
"""

from dataclasses import replace
from typing import List, Tuple

from config import get_config
from src.utils.logger import get_logger
from src.extraction.document import ExpenseLine, ExtractedDocument

# Initialize module logger
logger = get_logger(__name__)

# Diagnostic codes
EXPENSE_BACKFILLED = "expense_backfilled_from_totals"
FALLBACK_LINE_SYNTHESIZED = "fallback_line_synthesized"

DEFAULT_FALLBACK_ACCOUNT = "SYSTEM GENERATED - FROM TOTALS"


class Reconciler:
    """
    Applies the totals-based fill-in rules to an extracted document.

    Attributes:
        backfill_enabled: Whether rule 1 runs
        fallback_enabled: Whether rule 2 runs
        fallback_account_name: Sentinel account name of a synthesized line

    Example:
        >>> reconciler = Reconciler()
        >>> document, codes = reconciler.reconcile(document)
    """

    def __init__(self) -> None:
        """Initialize the reconciler from configuration."""
        self.backfill_enabled = get_config("reconciliation.backfill_single_expense", True)
        self.fallback_enabled = get_config("reconciliation.synthesize_fallback_line", True)
        self.fallback_account_name = get_config(
            "reconciliation.fallback_account_name",
            DEFAULT_FALLBACK_ACCOUNT
        )

    def reconcile(self, document: ExtractedDocument) -> Tuple[ExtractedDocument, List[str]]:
        """
        Reconcile a document's lines with its totals.

        Args:
            document: Record as produced by the extractor.

        Returns:
            Tuple of (reconciled record, diagnostic codes for the rules
            that changed something).
        """
        codes: List[str] = []
        lines = document.lines
        totals = document.totals

        if lines.items:
            return document, codes

        if len(lines.expenses) == 1 and self.backfill_enabled:
            line = lines.expenses[0]
            filled = self.backfill(line, totals.amount_total, totals.tax_total)
            if filled is not line:
                lines = replace(lines, expenses=(filled,))
                codes.append(EXPENSE_BACKFILLED)
                logger.info("Filled single expense line from document totals")

        elif not lines.expenses and totals.amount_total is not None and self.fallback_enabled:
            synthetic = ExpenseLine(
                account_name=self.fallback_account_name,
                tax_rate_percent=None,
                tax_amount=totals.tax_total,
                amount=totals.amount_total,
                synthetic=True,
            )
            lines = replace(lines, expenses=(synthetic,))
            codes.append(FALLBACK_LINE_SYNTHESIZED)
            logger.warning(
                f"No table rows recovered for {document.source_file or '<text>'}; "
                f"synthesized one line from totals"
            )

        if not codes:
            return document, codes

        return replace(document, lines=lines), codes

    def backfill(self, line: ExpenseLine, amount_total, tax_total) -> ExpenseLine:
        """
        Fill a line's absent money fields from the totals.

        Returns:
            The same object when nothing was filled, otherwise a new line.
        """
        changes = {}
        if line.amount is None and amount_total is not None:
            changes['amount'] = amount_total
        if line.tax_amount is None and tax_total is not None:
            changes['tax_amount'] = tax_total

        if not changes:
            return line
        return replace(line, **changes)
