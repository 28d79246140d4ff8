"""Unit tests for header field extraction.

Tests cover:
- Rule precedence (first matching rule wins)
- Label-delimited vendor, subsidiary and terms values
- Date normalization of date fields
- Absent fields
"""

import re

from src.extraction.header_extractor import HeaderExtractor
from src.extraction.rules import FLAT, FieldRule
from src.extraction.text_normalizer import normalize_text


def test_extract_full_header(rules, bill_with_items: str) -> None:
    """Test every field on a complete header."""
    header = HeaderExtractor(rules).extract(normalize_text(bill_with_items))

    assert header.doc_number == "VENDBILL194"
    assert header.primary_date == "2025-03-27"
    assert header.due_date == "2025-04-26"
    assert header.party_name == "ACME Trading"
    assert header.sub_unit_name == "Parent Co"
    assert header.terms_name == "Net 30"


def test_bill_date_label_wins_over_date_after_doc_number(rules) -> None:
    """Test that the labelled bill date has priority."""
    text = "#VENDBILL5 3/27/2025\nBill Date: 3/1/2025\n"

    header = HeaderExtractor(rules).extract(normalize_text(text))

    assert header.primary_date == "2025-03-01"


def test_vendor_bill_hash_fallback_for_doc_number(rules) -> None:
    """Test the looser document-number rule when the primary one misses."""
    header = HeaderExtractor(rules).extract(normalize_text("Vendor Bill # VB-77\n"))

    assert header.doc_number == "VB-77"


def test_labels_split_across_lines_still_match(rules) -> None:
    """Test that flattened labels match regardless of source wrapping."""
    header = HeaderExtractor(rules).extract(normalize_text("Due\nDate:\n4/26/2025"))

    assert header.due_date == "2025-04-26"


def test_party_values_on_the_line_below_their_labels(rules) -> None:
    """Test vendor and subsidiary labels printed on lines of their own."""
    text = "Vendor:\nACME Trading\nSubsidiary:\nParent Co\nDue Date: 4/26/2025\n"

    header = HeaderExtractor(rules).extract(normalize_text(text))

    assert header.party_name == "ACME Trading"
    assert header.sub_unit_name == "Parent Co"
    assert header.due_date == "2025-04-26"


def test_label_on_the_line_below_is_not_a_value(rules) -> None:
    """Test that an empty vendor label does not take the next label as its value."""
    header = HeaderExtractor(rules).extract(normalize_text("Vendor:\nSubsidiary: Parent Co\n"))

    assert header.party_name is None
    assert header.sub_unit_name == "Parent Co"


def test_vendor_directly_followed_by_another_label(rules) -> None:
    """Test that an empty vendor value does not swallow the next label."""
    header = HeaderExtractor(rules).extract(normalize_text("Vendor: Subsidiary: Parent Co\n"))

    assert header.party_name is None
    assert header.sub_unit_name == "Parent Co"


def test_terms_stop_at_following_date(rules) -> None:
    """Test that terms end where a date-shaped token starts."""
    header = HeaderExtractor(rules).extract(normalize_text("Terms: Net 15 4/26/2025\n"))

    assert header.terms_name == "Net 15"


def test_unrecognized_date_kept_as_text(rules) -> None:
    """Test that a date in another shape is kept verbatim."""
    header = HeaderExtractor(rules).extract(normalize_text("Due Date: 2025/04/26"))

    assert header.due_date == "2025/04/26"


def test_absent_fields_are_none(rules) -> None:
    """Test that fields without a matching rule are None, never empty."""
    header = HeaderExtractor(rules).extract(normalize_text("nothing to see here"))

    assert header.to_dict() == {
        'docNumber': None,
        'primaryDate': None,
        'dueDate': None,
        'partyName': None,
        'subUnitName': None,
        'termsName': None,
    }


def test_extract_field_first_match_wins(rules) -> None:
    """Test ordering of a hand-built rule list."""
    extractor = HeaderExtractor(rules)
    views = normalize_text("Ref: A-1 Alt: B-2")
    field_rules = (
        FieldRule(re.compile(r'Alt:\s*(\S+)'), FLAT, 'alt'),
        FieldRule(re.compile(r'Ref:\s*(\S+)'), FLAT, 'ref'),
    )

    assert extractor.extract_field(views, field_rules) == "B-2"
    assert extractor.extract_field(views, field_rules[1:]) == "A-1"
    assert extractor.extract_field(views, ()) is None
