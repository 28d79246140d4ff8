"""
Text Normalizer Module.

Derives the two read-only views every extraction stage works from:

    raw   - line terminators unified to '\\n', line breaks kept, because
            table rows are delimited by line breaks
    flat  - every whitespace run collapsed to one space and the ends
            trimmed, so header labels match regardless of where the
            source layout wrapped them
"""

import re
from dataclasses import dataclass

_LINE_BREAKS = re.compile(r'\r\n?')
_WHITESPACE = re.compile(r'\s+')


@dataclass(frozen=True)
class NormalizedText:
    """Both views of one source text."""
    raw: str
    flat: str


def normalize_text(text: str) -> NormalizedText:
    """
    Build the raw and flattened views of a document's text.

    Example:
        >>> views = normalize_text("Vendor:  ACME\\r\\nTerms: Net 30 ")
        >>> views.raw
        'Vendor:  ACME\\nTerms: Net 30 '
        >>> views.flat
        'Vendor: ACME Terms: Net 30'
    """
    raw = _LINE_BREAKS.sub('\n', text or '')
    flat = _WHITESPACE.sub(' ', raw).strip()
    return NormalizedText(raw=raw, flat=flat)
