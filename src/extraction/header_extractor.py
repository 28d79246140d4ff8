"""
Header Field Extractor Module.

Recovers document-level fields (number, dates, parties, terms) by running
each field's ordered rule list against the matching text view. The first
rule that matches wins; a field no rule matches is simply absent.

Author: ML Engineering Team
"""

from typing import Dict, Optional, Tuple

from src.utils.logger import get_logger
from src.postprocessor.normalizers import DateNormalizer
from .document import Header
from .rules import FLAT, FieldRule, RuleSet
from .text_normalizer import NormalizedText

# Initialize module logger
logger = get_logger(__name__)


class HeaderExtractor:
    """
    Applies a rule-set's header rules to a normalized document.

    Example:
        >>> extractor = HeaderExtractor(get_rule_set("vendorbill"))
        >>> header = extractor.extract(normalize_text("Due Date: 4/26/2025"))
        >>> header.due_date
        '2025-04-26'
    """

    def __init__(self, rule_set: RuleSet) -> None:
        self.rule_set = rule_set
        self.date_normalizer = DateNormalizer()

    def extract(self, text: NormalizedText) -> Header:
        """
        Extract all header fields.

        Args:
            text: Both views of the document.

        Returns:
            Header with every field either a non-empty string or None.
        """
        values: Dict[str, Optional[str]] = {}

        for field_name, rules in self.rule_set.header_rules.items():
            value = self.extract_field(text, rules)
            if value is None:
                logger.debug(f"Header field not found: {field_name}")
            elif field_name in self.rule_set.date_fields:
                value = self.date_normalizer.normalize(value)
            values[field_name] = value

        return Header(**values)

    def extract_field(
        self,
        text: NormalizedText,
        rules: Tuple[FieldRule, ...]
    ) -> Optional[str]:
        """
        Run one field's rules in order and return the first captured value.

        Args:
            text: Both views of the document.
            rules: Candidate rules, highest priority first.

        Returns:
            Trimmed captured value, or None when nothing matched.
        """
        for rule in rules:
            source = text.flat if rule.view == FLAT else text.raw
            match = rule.pattern.search(source)
            if not match:
                continue

            value = match.group(1).strip()
            if value:
                logger.debug(f"Header rule '{rule.label}' matched: '{value}'")
                return value

        return None
