"""
Data Validators Module.

Consistency checks run on a reconciled document. They never change a
value; each failed check adds a diagnostic code and a message.

    - Date fields: still raw text, or due date before bill date
    - Totals: summed line figures against the document totals
    - Header: missing document number

Author: ML Engineering Team
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Tuple

from config import get_config
from src.utils.logger import get_logger
from src.extraction.document import ExtractedDocument, Header
from .normalizers import DateNormalizer

# Initialize module logger
logger = get_logger(__name__)

# Diagnostic codes
UNPARSED_DATE = "unparsed_date"
DUE_BEFORE_BILL_DATE = "due_date_before_bill_date"
LINE_TOTAL_MISMATCH = "line_total_mismatch"
TAX_TOTAL_MISMATCH = "tax_total_mismatch"
MISSING_DOC_NUMBER = "missing_doc_number"


class ValidationResult:
    """
    Collects the outcome of validation checks.

    Attributes:
        codes: Diagnostic codes, in the order checks failed
        messages: Human-readable message for each code
    """

    def __init__(self) -> None:
        self.codes: List[str] = []
        self.messages: List[str] = []

    @property
    def is_clean(self) -> bool:
        return not self.codes

    def add(self, code: str, message: str) -> None:
        """Record a failed check once."""
        if code not in self.codes:
            self.codes.append(code)
            self.messages.append(message)

    def to_dict(self) -> Dict[str, Any]:
        return {'codes': list(self.codes), 'messages': list(self.messages)}


class DateValidator:
    """
    Validates the header date fields.

    Example:
        >>> validator = DateValidator()
        >>> validator.is_due_after_bill_date("2025-03-27", "2025-04-26")
        (True, 'Valid date relationship')
    """

    def __init__(self) -> None:
        self.date_normalizer = DateNormalizer()

    def unparsed_fields(self, header: Header) -> List[str]:
        """Names of date fields that are present but not ISO dates."""
        return [
            name for name, value in (
                ('primaryDate', header.primary_date),
                ('dueDate', header.due_date),
            )
            if value is not None and not self.date_normalizer.is_iso(value)
        ]

    def is_due_after_bill_date(
        self,
        bill_date: Optional[str],
        due_date: Optional[str]
    ) -> Tuple[bool, str]:
        """
        Check that the due date is on or after the bill date.

        Returns:
            Tuple of (is_valid, message). Pairs that are not both ISO dates
            cannot be compared and count as valid.
        """
        if not (self.date_normalizer.is_iso(bill_date) and self.date_normalizer.is_iso(due_date)):
            return True, "Could not validate date relationship"

        # ISO dates compare correctly as strings
        if due_date < bill_date:
            return False, f"Due date {due_date} is before bill date {bill_date}"

        return True, "Valid date relationship"


class AmountValidator:
    """
    Compares summed line figures against document totals.

    Attributes:
        tolerance: Largest difference still treated as equal
    """

    def __init__(self) -> None:
        raw_tolerance = get_config("validation.amount_tolerance", "0.01")
        try:
            self.tolerance = Decimal(str(raw_tolerance))
        except InvalidOperation:
            logger.warning(f"Invalid amount_tolerance '{raw_tolerance}', using 0.01")
            self.tolerance = Decimal("0.01")

    def check_sum(
        self,
        values: Iterable[Optional[Decimal]],
        total: Optional[Decimal]
    ) -> Tuple[bool, str]:
        """
        Check that values add up to a total.

        The check is skipped (valid) when there is no total, no values, or
        any value is missing, since a partial sum proves nothing.

        Returns:
            Tuple of (is_valid, message).
        """
        values = list(values)
        if total is None or not values or any(v is None for v in values):
            return True, "Sum not checked"

        line_sum = sum(values, Decimal("0"))
        if abs(line_sum - total) > self.tolerance:
            return False, f"Lines sum to {line_sum}, total is {total}"

        return True, "Sum matches total"


class DocumentValidator:
    """
    Runs every consistency check on a document.

    Example:
        >>> result = DocumentValidator().validate(document)
        >>> result.codes
        ['line_total_mismatch']
    """

    def __init__(self) -> None:
        self.date_validator = DateValidator()
        self.amount_validator = AmountValidator()
        self.require_doc_number = get_config("validation.require_doc_number", True)

    def validate(self, document: ExtractedDocument) -> ValidationResult:
        """
        Validate a reconciled document.

        Args:
            document: Record to check; it is not modified.

        Returns:
            ValidationResult listing failed checks.
        """
        result = ValidationResult()
        header = document.header

        if self.require_doc_number and header.doc_number is None:
            result.add(MISSING_DOC_NUMBER, "No document number found")

        unparsed = self.date_validator.unparsed_fields(header)
        if unparsed:
            result.add(UNPARSED_DATE, f"Dates kept as raw text: {', '.join(unparsed)}")

        is_valid, message = self.date_validator.is_due_after_bill_date(
            header.primary_date, header.due_date
        )
        if not is_valid:
            result.add(DUE_BEFORE_BILL_DATE, message)

        self._check_totals(document, result)

        return result

    def _check_totals(self, document: ExtractedDocument, result: ValidationResult) -> None:
        """Compare real (non-synthetic) line figures with the totals."""
        lines = list(document.lines.items) + [
            line for line in document.lines.expenses if not line.synthetic
        ]
        if not lines:
            return

        totals = document.totals

        is_valid, message = self.amount_validator.check_sum(
            (line.amount for line in lines), totals.amount_total
        )
        if not is_valid:
            result.add(LINE_TOTAL_MISMATCH, message)

        is_valid, message = self.amount_validator.check_sum(
            (line.tax_amount for line in lines), totals.tax_total
        )
        if not is_valid:
            result.add(TAX_TOTAL_MISMATCH, message)
