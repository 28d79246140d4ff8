"""
Row Parser Module.

Turns a table block into typed rows:

    1. split into trimmed, non-blank physical lines, dropping repeated
       column-header lines
    2. merge soft-wrapped description lines into logical rows
    3. match every logical row against the table's strict row pattern
    4. convert the matched fields with the amount normalizer

Rows that do not match are dropped and logged; field boundaries are never
guessed.

Author: ML Engineering Team
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Union

from src.utils.logger import get_logger
from src.postprocessor.normalizers import AmountNormalizer
from .document import ExpenseLine, ItemLine
from .rules import EXPENSES, ITEMS, RuleSet, TableSpec

# Initialize module logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class LogicalRow:
    """
    One table row after wrap merging.

    Attributes:
        text: The row as matched against the row pattern
        continuation: Description text that wrapped below the row's values
    """
    text: str
    continuation: str = ""

    def describe(self, description: str) -> str:
        """Join a matched description with any wrapped continuation."""
        if not self.continuation:
            return description.strip()
        return f"{description.strip()} {self.continuation}"


class RowParser:
    """
    Parses item and expense table blocks into line records.

    Example:
        >>> parser = RowParser(get_rule_set("vendorbill"))
        >>> parser.parse_items("WIDGET-1 2 12% PHP100.00 PHP500.00 PHP1,000.00")
        [ItemLine(name='WIDGET-1', quantity=Decimal('2'), ...)]
    """

    def __init__(self, rule_set: RuleSet) -> None:
        self.rule_set = rule_set
        self.amounts = AmountNormalizer(rule_set.currency_code)

    def split_lines(self, block: str, spec: TableSpec) -> List[str]:
        """Trimmed non-blank lines of a block, minus column-header repeats."""
        lines = []
        for line in block.split('\n'):
            line = line.strip()
            if not line:
                continue
            if spec.column_header.search(line):
                continue
            lines.append(line)
        return lines

    def ends_in_value(self, line: str) -> bool:
        """True if a line ends in a digit, a percent sign or an amount."""
        return bool(self.rule_set.value_tail.search(line))

    def merge_wrapped_lines(self, lines: List[str], spec: TableSpec) -> List[LogicalRow]:
        """
        Merge wrapped physical lines into logical rows.

        A line with no trailing value continues the description of the row
        before it. A leading fragment (a first line that never reaches its
        values) absorbs the next line only when the joined text matches the
        row pattern and the next line does not match on its own; otherwise
        the fragment is left as a row of its own, to be rejected, and the
        next line starts a new row. Lines are never attached to a later row.

        Args:
            lines: Physical lines in source order.
            spec: Table layout whose row pattern decides fragment merges.

        Returns:
            Logical rows in source order.
        """
        rows: List[LogicalRow] = []

        for line in lines:
            previous = rows[-1] if rows else None

            if previous is not None and not self.ends_in_value(previous.text):
                merged = f"{previous.text} {line}"
                if spec.row_pattern.match(merged) and not spec.row_pattern.match(line):
                    rows[-1] = replace(previous, text=merged)
                else:
                    rows.append(LogicalRow(line))
            elif previous is not None and not self.ends_in_value(line):
                continuation = f"{previous.continuation} {line}".strip()
                rows[-1] = replace(previous, continuation=continuation)
            else:
                rows.append(LogicalRow(line))

        return rows

    def parse(self, block: str, kind: str) -> List[Union[ItemLine, ExpenseLine]]:
        """Parse a block of the given table kind."""
        if kind == ITEMS:
            return self.parse_items(block)
        if kind == EXPENSES:
            return self.parse_expenses(block)
        raise ValueError(f"Unknown table kind: {kind}")

    def parse_items(self, block: str) -> List[ItemLine]:
        """
        Parse an items table block.

        Args:
            block: Line-preserving text of the items table.

        Returns:
            Item lines in source order.
        """
        spec = self.rule_set.table(ITEMS)
        items = []

        for row in self._logical_rows(block, spec):
            match = spec.row_pattern.match(row.text)
            if not match:
                logger.debug(f"Rejected items row: '{row.text}'")
                continue

            line = self._build_item(row, match.groupdict())
            if line is None:
                logger.debug(f"Unreadable values in items row: '{row.text}'")
                continue
            items.append(line)

        return items

    def parse_expenses(self, block: str) -> List[ExpenseLine]:
        """
        Parse an expenses table block.

        Args:
            block: Line-preserving text of the expenses table.

        Returns:
            Expense lines in source order; money fields a row does not
            print are None.
        """
        spec = self.rule_set.table(EXPENSES)
        expenses = []

        for row in self._logical_rows(block, spec):
            match = spec.row_pattern.match(row.text)
            if not match:
                logger.debug(f"Rejected expenses row: '{row.text}'")
                continue

            fields = match.groupdict()
            expenses.append(ExpenseLine(
                account_name=row.describe(fields['account_name']),
                tax_rate_percent=self.amounts.parse_number(fields['tax_rate']),
                tax_amount=self.amounts.parse(fields['tax_amount']),
                amount=self.amounts.parse(fields['amount']),
            ))

        return expenses

    def _logical_rows(self, block: str, spec: TableSpec) -> List[LogicalRow]:
        return self.merge_wrapped_lines(self.split_lines(block, spec), spec)

    def _build_item(self, row: LogicalRow, fields: dict) -> Optional[ItemLine]:
        values = {
            'quantity': self.amounts.parse_number(fields['quantity']),
            'tax_rate_percent': self.amounts.parse_number(fields['tax_rate']),
            'tax_amount': self.amounts.parse(fields['tax_amount']),
            'unit_rate': self.amounts.parse(fields['unit_rate']),
            'amount': self.amounts.parse(fields['amount']),
        }
        if any(value is None for value in values.values()):
            return None
        return ItemLine(name=row.describe(fields['name']), **values)
