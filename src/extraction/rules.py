"""
Extraction Rule-Sets Module.

A rule-set is the complete, named bundle of conventions one document
template family is read with: the ordered header field rules, the two
table layouts, the totals markers and the currency code. A new layout is
registered as a new rule-set rather than stacked onto an existing one.

Header rules for a field are tried in order and the first match wins, so
primary label conventions are listed before looser fallbacks.

Author: ML Engineering Team
"""

import re
from dataclasses import dataclass
from typing import Dict, Pattern, Tuple

from src.utils.exceptions import UnknownRuleSetError

FLAT = "flat"
RAW = "raw"

ITEMS = "items"
EXPENSES = "expenses"


@dataclass(frozen=True)
class FieldRule:
    """
    One candidate pattern for a header field.

    Attributes:
        pattern: Compiled regex; group 1 is the value
        view: Which text view to search ("flat" or "raw")
        label: Short name used in debug logs
    """
    pattern: Pattern[str]
    view: str = FLAT
    label: str = ""


@dataclass(frozen=True)
class TableSpec:
    """
    Layout of one line-item table.

    Attributes:
        kind: "items" or "expenses"
        section_title: Matches the bare section title line
        column_header: Matches the leading words of the column-header line
        row_pattern: Strict end-to-end pattern for one logical row
    """
    kind: str
    section_title: Pattern[str]
    column_header: Pattern[str]
    row_pattern: Pattern[str]


@dataclass(frozen=True)
class RuleSet:
    """
    A named, versioned set of extraction conventions.

    Attributes:
        name: Registry key
        transaction_type: Tag written to every record
        currency_code: The single currency the documents use
        header_rules: Field name to ordered candidate rules
        date_fields: Header fields that go through date normalization
        tables: Table layouts, in the order they are extracted
        table_terminator: Leading token of the totals section
        value_tail: Matches a physical line ending in a value-shaped token
        tax_total: Tax total marker; group 1 is the amount
        amount_total: Amount total marker; group 1 is the amount
    """
    name: str
    transaction_type: str
    currency_code: str
    header_rules: Dict[str, Tuple[FieldRule, ...]]
    date_fields: Tuple[str, ...]
    tables: Tuple[TableSpec, ...]
    table_terminator: Pattern[str]
    value_tail: Pattern[str]
    tax_total: Pattern[str]
    amount_total: Pattern[str]

    def table(self, kind: str) -> TableSpec:
        """Return the layout for a table kind."""
        for spec in self.tables:
            if spec.kind == kind:
                return spec
        raise KeyError(kind)


def build_vendor_bill_rules(currency_code: str = "PHP") -> RuleSet:
    """
    Build the vendor-bill conventions.

    Layout this reads (as produced by PDF-to-text conversion):

        #VENDBILL194 3/27/2025
        Vendor: ACME Trading Subsidiary: Parent Co
        Due Date: 4/26/2025 Terms: Net 30
        Items
        Item Quantity Tax Rate Tax Amt Rate Amount
        UN125NE-ORG 2 12% PHP19,392.90 PHP80,803.55 PHP161,607.10
        Tax PHP19,392.90 Amount PHP161,607.10

    Args:
        currency_code: Currency prefix of every amount.

    Returns:
        The "vendorbill" rule-set.
    """
    cur = re.escape(currency_code)
    money = rf'{cur}\s*\d[\d,]*\.\d{{2}}'
    number = r'\d+(?:\.\d+)?'
    labels = r'(?:Vendor|Subsidiary|Due\s*Date|Bill\s*Date|Terms)'
    iso_like_date = r'\d{1,2}[/.\-]\d{1,2}[/.\-]\d{4}'

    i = re.IGNORECASE
    im = re.IGNORECASE | re.MULTILINE

    header_rules = {
        'doc_number': (
            FieldRule(re.compile(r'#\s*(VENDBILL\d+)', i), FLAT, 'hash-vendbill'),
            FieldRule(re.compile(r'Vendor\s+Bill\s*#\s*(\S+)', i), FLAT, 'vendor-bill-hash'),
        ),
        'primary_date': (
            FieldRule(re.compile(r'Bill\s*Date\s*[:\-]?\s*(\d[0-9/.\-]*)', i), FLAT, 'bill-date-label'),
            FieldRule(re.compile(rf'VENDBILL\d+\s+({iso_like_date})', i), FLAT, 'after-doc-number'),
        ),
        'due_date': (
            FieldRule(re.compile(r'Due\s*Date\s*[:\-]?\s*(\d[0-9/.\-]*)', i), FLAT, 'due-date-label'),
        ),
        'party_name': (
            FieldRule(
                re.compile(
                    rf'Vendor:[ \t]*(?!{labels}:)(\S.*?)'
                    rf'(?=\s+(?:Subsidiary|Due\s*Date|Terms|Bill\s*Date):|$)',
                    im
                ),
                RAW,
                'vendor-label'
            ),
            FieldRule(
                re.compile(
                    rf'Vendor:[ \t]*\n[ \t]*(?!{labels}:)(\S.*?)'
                    rf'(?=\s+(?:Subsidiary|Due\s*Date|Terms|Bill\s*Date):|[ \t]*$)',
                    im
                ),
                RAW,
                'vendor-label-next-line'
            ),
        ),
        'sub_unit_name': (
            FieldRule(
                re.compile(
                    rf'Subsidiary:[ \t]*(?!{labels}:)(\S.*?)'
                    rf'(?=\s+(?:Due\s*Date|Terms|Vendor|Bill\s*Date):|$)',
                    im
                ),
                RAW,
                'subsidiary-label'
            ),
            FieldRule(
                re.compile(
                    rf'Subsidiary:[ \t]*\n[ \t]*(?!{labels}:)(\S.*?)'
                    rf'(?=\s+(?:Due\s*Date|Terms|Vendor|Bill\s*Date):|[ \t]*$)',
                    im
                ),
                RAW,
                'subsidiary-label-next-line'
            ),
        ),
        'terms_name': (
            FieldRule(
                re.compile(
                    rf'\bTerms[ \t]*[:\-]?[ \t]*(?!{labels}\b)([^\s:\-].*?)'
                    rf'(?=[ \t]+{iso_like_date}|[ \t]+{labels}\b|$)',
                    im
                ),
                RAW,
                'terms-label'
            ),
        ),
    }

    items = TableSpec(
        kind=ITEMS,
        section_title=re.compile(r'^[ \t]*Items[ \t]*:?[ \t]*$', im),
        column_header=re.compile(
            r'Item\s+(?:Quantity|Qty)\.?\s+Tax\s+Rate', i
        ),
        row_pattern=re.compile(
            rf'^(?P<name>.+?)\s+(?P<quantity>{number})\s+(?P<tax_rate>{number})%'
            rf'\s+(?P<tax_amount>{money})\s+(?P<unit_rate>{money})\s+(?P<amount>{money})$',
            i
        ),
    )

    expenses = TableSpec(
        kind=EXPENSES,
        section_title=re.compile(r'^[ \t]*Expenses[ \t]*:?[ \t]*$', im),
        column_header=re.compile(
            r'(?:Account|Category)\s+Tax\s+Rate', i
        ),
        # Money columns are positional and may be missing on a printed row
        row_pattern=re.compile(
            rf'^(?P<account_name>.+?)\s+(?P<tax_rate>{number})%'
            rf'(?:\s+(?P<tax_amount>{money}))?(?:\s+(?P<amount>{money}))?$',
            i
        ),
    )

    return RuleSet(
        name="vendorbill",
        transaction_type="vendorbill",
        currency_code=currency_code,
        header_rules=header_rules,
        date_fields=('primary_date', 'due_date'),
        tables=(items, expenses),
        table_terminator=re.compile(rf'\bTax\s*{cur}', i),
        value_tail=re.compile(rf'(?:\d|%|{money})$', i),
        tax_total=re.compile(rf'\bTax\s*{cur}\s*(\d[\d,]*\.\d{{2}})', i),
        amount_total=re.compile(rf'\bAmount\s*{cur}\s*(\d[\d,]*\.\d{{2}})', i),
    )


RULE_SETS: Dict[str, RuleSet] = {
    "vendorbill": build_vendor_bill_rules(),
}


def get_rule_set(name: str) -> RuleSet:
    """
    Look up a registered rule-set.

    Raises:
        UnknownRuleSetError: If no rule-set has that name.
    """
    try:
        return RULE_SETS[name]
    except KeyError:
        raise UnknownRuleSetError(name, sorted(RULE_SETS))
