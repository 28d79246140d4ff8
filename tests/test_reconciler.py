"""Unit tests for reconciliation of lines with totals.

Tests cover:
- Back-filling a single expense line without overwriting parsed values
- Synthesizing a placeholder line only when no lines exist
- Leaving documents with items untouched
- Idempotence
"""

from decimal import Decimal

from config import ConfigurationManager
from src.extraction.document import ExpenseLine, ExtractedDocument, ItemLine, Lines, Totals
from src.postprocessor.reconciler import (
    DEFAULT_FALLBACK_ACCOUNT,
    EXPENSE_BACKFILLED,
    FALLBACK_LINE_SYNTHESIZED,
    Reconciler,
)

TOTALS = Totals(tax_total=Decimal("120.00"), amount_total=Decimal("1120.00"))


def _document(items=(), expenses=(), totals=TOTALS) -> ExtractedDocument:
    return ExtractedDocument(
        transaction_type="vendorbill",
        lines=Lines(items=tuple(items), expenses=tuple(expenses)),
        totals=totals,
    )


def test_single_expense_backfilled_from_totals() -> None:
    """Test that a lone expense line gets the missing amount."""
    document = _document(expenses=[ExpenseLine("Utilities", Decimal("12"), Decimal("120.00"))])

    reconciled, codes = Reconciler().reconcile(document)

    line = reconciled.lines.expenses[0]
    assert line.amount == Decimal("1120.00")
    assert line.tax_amount == Decimal("120.00")
    assert codes == [EXPENSE_BACKFILLED]


def test_backfill_never_overwrites_parsed_values() -> None:
    """Test that values already on the line win over the totals."""
    line = ExpenseLine("Utilities", Decimal("12"), Decimal("1.00"), Decimal("2.00"))

    reconciled, codes = Reconciler().reconcile(_document(expenses=[line]))

    assert reconciled.lines.expenses[0] is line
    assert codes == []


def test_backfill_only_fills_what_totals_have() -> None:
    """Test that a missing total leaves the corresponding field empty."""
    totals = Totals(tax_total=None, amount_total=Decimal("500.00"))
    line = ExpenseLine("Rent", Decimal("0"))

    reconciled, _ = Reconciler().reconcile(_document(expenses=[line], totals=totals))

    assert reconciled.lines.expenses[0].amount == Decimal("500.00")
    assert reconciled.lines.expenses[0].tax_amount is None


def test_multiple_expenses_left_alone() -> None:
    """Test that back-fill only applies to exactly one expense line."""
    lines = [ExpenseLine("A", Decimal("12")), ExpenseLine("B", Decimal("12"))]
    document = _document(expenses=lines)

    reconciled, codes = Reconciler().reconcile(document)

    assert reconciled is document
    assert codes == []


def test_items_present_means_no_reconciliation() -> None:
    """Test that a document with item lines is never changed."""
    item = ItemLine("W", Decimal("1"), Decimal("12"), Decimal("1.00"), Decimal("1.00"), Decimal("1.00"))
    document = _document(items=[item], expenses=[ExpenseLine("A", Decimal("12"))])

    reconciled, codes = Reconciler().reconcile(document)

    assert reconciled is document
    assert reconciled.lines.expenses[0].amount is None
    assert codes == []


def test_fallback_line_synthesized_from_totals() -> None:
    """Test the placeholder line for a document without rows."""
    reconciled, codes = Reconciler().reconcile(_document())

    assert codes == [FALLBACK_LINE_SYNTHESIZED]
    assert reconciled.lines.items == ()
    assert len(reconciled.lines.expenses) == 1

    line = reconciled.lines.expenses[0]
    assert line.account_name == DEFAULT_FALLBACK_ACCOUNT
    assert line.tax_rate_percent is None
    assert line.tax_amount == Decimal("120.00")
    assert line.amount == Decimal("1120.00")
    assert line.synthetic is True
    assert reconciled.used_fallback is True


def test_no_fallback_without_amount_total() -> None:
    """Test that nothing is synthesized when the amount total is missing."""
    totals = Totals(tax_total=Decimal("5.00"), amount_total=None)
    document = _document(totals=totals)

    reconciled, codes = Reconciler().reconcile(document)

    assert reconciled.lines.is_empty
    assert codes == []


def test_reconcile_is_idempotent() -> None:
    """Test that reconciling a reconciled document changes nothing."""
    reconciler = Reconciler()
    for document in (
        _document(),
        _document(expenses=[ExpenseLine("Utilities", Decimal("12"))]),
    ):
        once, _ = reconciler.reconcile(document)
        twice, codes = reconciler.reconcile(once)

        assert twice == once
        assert codes == []


def test_rules_can_be_disabled_in_config() -> None:
    """Test the configuration switches."""
    config = ConfigurationManager()
    config.set("reconciliation.synthesize_fallback_line", False)
    config.set("reconciliation.backfill_single_expense", False)
    reconciler = Reconciler()

    empty = _document()
    single = _document(expenses=[ExpenseLine("Utilities", Decimal("12"))])

    assert reconciler.reconcile(empty) == (empty, [])
    assert reconciler.reconcile(single) == (single, [])


def test_sentinel_name_from_config() -> None:
    """Test that the placeholder account name is configurable."""
    ConfigurationManager().set("reconciliation.fallback_account_name", "FROM TOTALS")

    reconciled, _ = Reconciler().reconcile(_document())

    assert reconciled.lines.expenses[0].account_name == "FROM TOTALS"
