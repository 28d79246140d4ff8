"""Unit tests for locating table blocks in the raw text."""

from src.extraction.rules import EXPENSES, ITEMS
from src.extraction.table_extractor import TableBlockExtractor

BOTH_TABLES = """\
Items
Item Quantity Tax Rate Tax Amt Rate Amount
WIDGET-1 2 12% PHP100.00 PHP500.00 PHP1,000.00
Expenses
Account Tax Rate Tax Amt Amount
Freight 12% PHP12.00 PHP100.00
Tax PHP112.00 Amount PHP1,100.00
"""


def test_items_block_ends_at_totals(rules, bill_with_items: str) -> None:
    """Test that the block runs from the title to the totals marker."""
    block = TableBlockExtractor(rules).extract_block(bill_with_items, ITEMS)

    assert "WIDGET-1 2 12%" in block
    assert "Tax PHP100.00" not in block
    assert "Due Date" not in block


def test_missing_table_gives_empty_block(rules, bill_with_items: str) -> None:
    """Test that an absent table is an empty block, not an error."""
    extractor = TableBlockExtractor(rules)

    assert extractor.extract_block(bill_with_items, EXPENSES) == ""
    assert extractor.has_table(bill_with_items, rules.table(EXPENSES)) is False
    assert extractor.has_table(bill_with_items, rules.table(ITEMS)) is True


def test_block_starts_after_column_header_without_title(rules) -> None:
    """Test that the column-header phrase alone opens a table."""
    text = (
        "Account Tax Rate Tax Amt Amount\n"
        "Freight 12% PHP12.00 PHP100.00\n"
        "Tax PHP12.00 Amount PHP100.00\n"
    )

    block = TableBlockExtractor(rules).extract_block(text, EXPENSES)

    assert block.strip() == "Freight 12% PHP12.00 PHP100.00"


def test_block_runs_to_end_without_terminator(rules) -> None:
    """Test that a table with no totals marker runs to the end of the text."""
    text = "Items\nWIDGET-1 2 12% PHP100.00 PHP500.00 PHP1,000.00"

    block = TableBlockExtractor(rules).extract_block(text, ITEMS)

    assert block.strip() == "WIDGET-1 2 12% PHP100.00 PHP500.00 PHP1,000.00"


def test_items_block_stops_at_expenses_table(rules) -> None:
    """Test that neither table's block contains the other's rows."""
    blocks = TableBlockExtractor(rules).extract_all(BOTH_TABLES)

    assert "WIDGET-1" in blocks[ITEMS]
    assert "Freight" not in blocks[ITEMS]
    assert "Freight" in blocks[EXPENSES]
    assert "WIDGET-1" not in blocks[EXPENSES]
