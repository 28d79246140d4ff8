"""
Extraction Module for Vendor Bill Extraction System.

This module provides the pattern-based extraction engine:
    - Text normalization into raw and flattened views
    - Named rule-sets of header, table and totals conventions
    - Header field, table block, row and totals extraction
    - The immutable ExtractedDocument record

Author: ML Engineering Team
"""

from .document import ExtractedDocument, Header, ItemLine, ExpenseLine, Lines, Totals
from .extractor import VendorBillExtractor
from .rules import RuleSet, get_rule_set
from .text_normalizer import NormalizedText, normalize_text

__all__ = [
    'VendorBillExtractor',
    'ExtractedDocument',
    'Header',
    'ItemLine',
    'ExpenseLine',
    'Lines',
    'Totals',
    'RuleSet',
    'get_rule_set',
    'NormalizedText',
    'normalize_text'
]
