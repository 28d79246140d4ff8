"""
Extracted Document Data Classes.

This module defines the record produced for one vendor bill: header
fields, item and expense lines, and document totals. All classes are
frozen; the only later change a record sees is reconciliation, which
builds replacement lines instead of editing them.

Absent values are always None. Empty strings are never stored.

Author: ML Engineering Team
"""

import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple


def _number(value: Optional[Decimal]) -> Optional[float]:
    """Render a Decimal for JSON; values written without a fraction stay ints."""
    if value is None:
        return None
    if value.as_tuple().exponent >= 0:
        return int(value)
    return float(value)


@dataclass(frozen=True)
class Header:
    """
    Document-level scalar fields.

    Attributes:
        doc_number: Bill identifier (e.g. "VENDBILL194")
        primary_date: Bill date, ISO when normalizable, else raw text
        due_date: Due date, ISO when normalizable, else raw text
        party_name: Vendor name
        sub_unit_name: Subsidiary name
        terms_name: Payment terms
    """
    doc_number: Optional[str] = None
    primary_date: Optional[str] = None
    due_date: Optional[str] = None
    party_name: Optional[str] = None
    sub_unit_name: Optional[str] = None
    terms_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'docNumber': self.doc_number,
            'primaryDate': self.primary_date,
            'dueDate': self.due_date,
            'partyName': self.party_name,
            'subUnitName': self.sub_unit_name,
            'termsName': self.terms_name,
        }


@dataclass(frozen=True)
class ItemLine:
    """One row of the items table."""
    name: str
    quantity: Decimal
    tax_rate_percent: Decimal
    tax_amount: Decimal
    unit_rate: Decimal
    amount: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'quantity': _number(self.quantity),
            'taxRatePercent': _number(self.tax_rate_percent),
            'taxAmount': _number(self.tax_amount),
            'unitRate': _number(self.unit_rate),
            'amount': _number(self.amount),
        }


@dataclass(frozen=True)
class ExpenseLine:
    """
    One row of the expenses (account) table.

    The money fields are optional because a single-line expense bill may
    have them filled in from the totals during reconciliation. A line
    made up entirely from totals has ``synthetic`` set.
    """
    account_name: str
    tax_rate_percent: Optional[Decimal] = None
    tax_amount: Optional[Decimal] = None
    amount: Optional[Decimal] = None
    synthetic: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'accountName': self.account_name,
            'taxRatePercent': _number(self.tax_rate_percent),
            'taxAmount': _number(self.tax_amount),
            'amount': _number(self.amount),
        }


@dataclass(frozen=True)
class Lines:
    """Item and expense rows, each in source order."""
    items: Tuple[ItemLine, ...] = ()
    expenses: Tuple[ExpenseLine, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items and not self.expenses

    def to_dict(self) -> Dict[str, Any]:
        return {
            'items': [line.to_dict() for line in self.items],
            'expenses': [line.to_dict() for line in self.expenses],
        }


@dataclass(frozen=True)
class Totals:
    """Document totals in the rule-set's single currency."""
    tax_total: Optional[Decimal] = None
    amount_total: Optional[Decimal] = None
    currency_code: str = "PHP"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'taxTotal': _number(self.tax_total),
            'amountTotal': _number(self.amount_total),
            'currencyCode': self.currency_code,
        }


@dataclass(frozen=True)
class ExtractedDocument:
    """
    Represents the structured result of extracting one vendor bill.

    Attributes:
        transaction_type: Fixed tag of the document kind ("vendorbill")
        header: Header fields
        lines: Item and expense rows
        totals: Document totals
        diagnostics: Codes flagging fallback paths or inconsistencies
        source_file: Originating filename, when known

    Example:
        >>> doc = ExtractedDocument(transaction_type="vendorbill")
        >>> doc.to_dict()["lines"]
        {'items': [], 'expenses': []}
    """
    transaction_type: str
    header: Header = field(default_factory=Header)
    lines: Lines = field(default_factory=Lines)
    totals: Totals = field(default_factory=Totals)
    diagnostics: Tuple[str, ...] = ()
    source_file: Optional[str] = None

    @property
    def used_fallback(self) -> bool:
        """True when the only expense line was synthesized from totals."""
        return any(line.synthetic for line in self.lines.expenses)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the JSON-ready dictionary form.

        Every optional key is present; absent values are None.
        """
        return {
            'transactionType': self.transaction_type,
            'header': self.header.to_dict(),
            'lines': self.lines.to_dict(),
            'totals': self.totals.to_dict(),
            'diagnostics': list(self.diagnostics),
            'sourceFile': self.source_file,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        return (
            f"ExtractedDocument("
            f"doc={self.header.doc_number}, "
            f"items={len(self.lines.items)}, "
            f"expenses={len(self.lines.expenses)}, "
            f"total={self.totals.amount_total})"
        )
