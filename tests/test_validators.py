"""Unit tests for document consistency checks."""

from decimal import Decimal

from config import ConfigurationManager
from src.extraction.document import ExpenseLine, ExtractedDocument, Header, ItemLine, Lines, Totals
from src.postprocessor.validators import (
    AmountValidator,
    DateValidator,
    DocumentValidator,
    ValidationResult,
)


def _item(amount: str, tax: str) -> ItemLine:
    return ItemLine("W", Decimal("1"), Decimal("12"), Decimal(tax), Decimal(amount), Decimal(amount))


def _document(header=None, items=(), expenses=(), totals=None) -> ExtractedDocument:
    return ExtractedDocument(
        transaction_type="vendorbill",
        header=header or Header(doc_number="VENDBILL1"),
        lines=Lines(items=tuple(items), expenses=tuple(expenses)),
        totals=totals or Totals(),
    )


def test_clean_document() -> None:
    """Test a consistent document has no codes."""
    document = _document(
        header=Header(doc_number="VENDBILL1", primary_date="2025-03-27", due_date="2025-04-26"),
        items=[_item("600.00", "72.00"), _item("400.00", "48.00")],
        totals=Totals(tax_total=Decimal("120.00"), amount_total=Decimal("1000.00")),
    )

    result = DocumentValidator().validate(document)

    assert result.is_clean
    assert result.to_dict() == {'codes': [], 'messages': []}


def test_line_and_tax_mismatch() -> None:
    """Test both totals checks."""
    document = _document(
        items=[_item("600.00", "72.00")],
        totals=Totals(tax_total=Decimal("100.00"), amount_total=Decimal("1000.00")),
    )

    result = DocumentValidator().validate(document)

    assert result.codes == ["line_total_mismatch", "tax_total_mismatch"]


def test_mismatch_within_tolerance_is_accepted() -> None:
    """Test the configured tolerance."""
    document = _document(
        items=[_item("999.99", "0.00")],
        totals=Totals(amount_total=Decimal("1000.00")),
    )

    assert DocumentValidator().validate(document).is_clean


def test_sum_skipped_when_a_line_lacks_a_value() -> None:
    """Test that a partial sum is not compared."""
    document = _document(
        expenses=[ExpenseLine("A", Decimal("12"), None, Decimal("1.00")), ExpenseLine("B")],
        totals=Totals(amount_total=Decimal("1000.00")),
    )

    assert DocumentValidator().validate(document).is_clean


def test_synthetic_lines_are_not_checked() -> None:
    """Test that a placeholder line is not compared with the totals it came from."""
    document = _document(
        expenses=[ExpenseLine("SYSTEM", None, Decimal("1.00"), Decimal("999.00"), synthetic=True)],
        totals=Totals(tax_total=Decimal("5.00"), amount_total=Decimal("10.00")),
    )

    assert DocumentValidator().validate(document).is_clean


def test_due_date_before_bill_date() -> None:
    """Test the date ordering check."""
    header = Header(doc_number="VENDBILL1", primary_date="2025-04-26", due_date="2025-03-27")

    result = DocumentValidator().validate(_document(header=header))

    assert result.codes == ["due_date_before_bill_date"]


def test_unparsed_date_and_missing_doc_number() -> None:
    """Test header checks."""
    header = Header(doc_number=None, primary_date="27 March 2025")

    result = DocumentValidator().validate(_document(header=header))

    assert result.codes == ["missing_doc_number", "unparsed_date"]
    assert "primaryDate" in result.messages[1]


def test_doc_number_check_can_be_disabled() -> None:
    """Test the require_doc_number switch."""
    ConfigurationManager().set("validation.require_doc_number", False)

    result = DocumentValidator().validate(_document(header=Header()))

    assert result.is_clean


def test_date_validator_uncomparable_dates_are_valid() -> None:
    """Test that non-ISO dates are not ordered."""
    is_valid, _ = DateValidator().is_due_after_bill_date("2025-04-26", "3/27/2025")

    assert is_valid is True


def test_amount_validator_check_sum() -> None:
    """Test the sum comparison directly."""
    validator = AmountValidator()

    assert validator.check_sum([Decimal("1.00"), Decimal("2.00")], Decimal("3.00"))[0] is True
    assert validator.check_sum([Decimal("1.00")], Decimal("3.00"))[0] is False
    assert validator.check_sum([], Decimal("3.00"))[0] is True
    assert validator.check_sum([Decimal("1.00")], None)[0] is True


def test_validation_result_records_code_once() -> None:
    """Test that repeated failures of one check are collapsed."""
    result = ValidationResult()
    result.add("x", "first")
    result.add("x", "second")

    assert result.codes == ["x"]
    assert result.messages == ["first"]


def test_post_processor_validate_leaves_document_unchanged() -> None:
    """Test validation without reconciliation."""
    from src.postprocessor import PostProcessor

    document = _document(header=Header())

    result = PostProcessor().validate(document)

    assert result.codes == ["missing_doc_number"]
    assert document.diagnostics == ()
