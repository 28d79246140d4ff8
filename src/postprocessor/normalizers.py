"""
Data Normalizers Module.

This module provides normalization functions for:
    - Date spellings (M/D/YYYY, M-D-YYYY, M.D.YYYY) to ISO YYYY-MM-DD
    - Currency-prefixed amounts to two-place Decimals
    - Plain non-negative numbers (quantities, tax-rate percents)

None of these raise on malformed input. Amounts and numbers come back as
None when they cannot be read; dates come back unchanged.

Author: ML Engineering Team
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from src.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

# Two implied decimal places for every money field
CENTS = Decimal("0.01")


class DateNormalizer:
    """
    Normalizes month-first numeric dates to ISO format.

    Only the shapes M/D/YYYY, M-D-YYYY and M.D.YYYY are recognized (one or
    two digit month and day, four digit year, the same separator twice).
    Anything else, including impossible calendar dates, is passed through
    untouched so the original spelling is never lost.

    Example:
        >>> normalizer = DateNormalizer()
        >>> normalizer.normalize("3/27/2025")
        '2025-03-27'
        >>> normalizer.normalize("27 March 2025")
        '27 March 2025'
    """

    DATE_PATTERN = re.compile(r'^(\d{1,2})([/.\-])(\d{1,2})\2(\d{4})$')
    ISO_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

    def normalize(self, date_str: Optional[str]) -> Optional[str]:
        """
        Normalize a date string to YYYY-MM-DD.

        Args:
            date_str: Date text as captured from the document, or None.

        Returns:
            ISO date string, the input unchanged if it is not a recognized
            date, or None if the input was None.
        """
        if date_str is None:
            return None

        match = self.DATE_PATTERN.match(date_str)
        if not match:
            return date_str

        month, _, day, year = match.groups()
        try:
            parsed = date(int(year), int(month), int(day))
        except ValueError:
            logger.debug(f"Not a calendar date, keeping raw text: '{date_str}'")
            return date_str

        return parsed.isoformat()

    def is_iso(self, date_str: Optional[str]) -> bool:
        """Check whether a value is already an ISO calendar date."""
        if not date_str or not self.ISO_PATTERN.match(date_str):
            return False
        try:
            date.fromisoformat(date_str)
        except ValueError:
            return False
        return True


class AmountNormalizer:
    """
    Parses currency amounts written in the single fixed convention of a
    rule-set: optional currency-code prefix, comma grouping, and exactly two
    fractional digits.

    Attributes:
        currency_code: Prefix stripped before parsing (e.g. "PHP").

    Example:
        >>> normalizer = AmountNormalizer("PHP")
        >>> normalizer.parse("PHP1,234.56")
        Decimal('1234.56')
        >>> normalizer.parse("PHP0.00")
        Decimal('0.00')
        >>> normalizer.parse("PHP12") is None
        True
    """

    # Thousands separators, when present, must group every three digits
    AMOUNT_PATTERN = re.compile(r'^(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2}$')
    NUMBER_PATTERN = re.compile(r'^\d+(?:\.\d+)?$')

    def __init__(self, currency_code: str = "PHP") -> None:
        """
        Initialize the amount normalizer.

        Args:
            currency_code: Currency prefix used by the documents.
        """
        self.currency_code = currency_code
        self._prefix = re.compile(rf'^\s*{re.escape(currency_code)}\s*', re.IGNORECASE)

    def parse(self, amount_str: Optional[str]) -> Optional[Decimal]:
        """
        Parse a currency amount.

        Args:
            amount_str: Amount text, with or without the currency prefix.

        Returns:
            Decimal with two places, or None if the text is not an amount.
        """
        if not amount_str:
            return None

        cleaned = self._prefix.sub('', amount_str).strip()

        if not self.AMOUNT_PATTERN.match(cleaned):
            logger.debug(f"Could not parse amount: '{amount_str}'")
            return None

        return Decimal(cleaned.replace(',', '')).quantize(CENTS)

    def parse_number(self, number_str: Optional[str]) -> Optional[Decimal]:
        """
        Parse a plain non-negative number such as a quantity or a percent.

        Args:
            number_str: Digits with an optional fraction; a trailing '%'
                is tolerated.

        Returns:
            Decimal value, or None if the text is not a number.
        """
        if not number_str:
            return None

        cleaned = number_str.strip().rstrip('%').strip()
        if not self.NUMBER_PATTERN.match(cleaned):
            logger.debug(f"Could not parse number: '{number_str}'")
            return None

        try:
            return Decimal(cleaned)
        except InvalidOperation:
            return None


def normalize_date(date_str: Optional[str]) -> Optional[str]:
    """Module-level shortcut for DateNormalizer().normalize()."""
    return DateNormalizer().normalize(date_str)


def parse_currency(amount_str: Optional[str], currency_code: str = "PHP") -> Optional[Decimal]:
    """Module-level shortcut for AmountNormalizer(currency_code).parse()."""
    return AmountNormalizer(currency_code).parse(amount_str)
