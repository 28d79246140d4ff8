"""
Table Block Extractor Module.

Cuts the raw text of each line-item table out of the document. A block
starts on the line after the table's section title or its column-header
phrase (whichever comes first) and ends at the totals marker, at the start of
another table, or at the end of the text.

Author: ML Engineering Team
"""

from typing import Dict, List, Optional

from src.utils.logger import get_logger
from .rules import RuleSet, TableSpec

# Initialize module logger
logger = get_logger(__name__)


class TableBlockExtractor:
    """
    Locates table blocks in the raw (line-preserving) view.

    Example:
        >>> extractor = TableBlockExtractor(get_rule_set("vendorbill"))
        >>> blocks = extractor.extract_all(raw_text)
        >>> blocks["items"].splitlines()
    """

    def __init__(self, rule_set: RuleSet) -> None:
        self.rule_set = rule_set

    def has_table(self, raw: str, spec: TableSpec) -> bool:
        """Check whether the section title or column header is present."""
        return self._find_start(raw, spec) is not None

    def extract_block(self, raw: str, kind: str) -> str:
        """
        Return the text of one table, or '' when it is not present.

        Args:
            raw: Raw view of the document.
            kind: Table kind ("items" or "expenses").
        """
        spec = self.rule_set.table(kind)
        start = self._find_start(raw, spec)

        if start is None:
            logger.debug(f"No {kind} table marker found")
            return ""

        end = self._find_end(raw, spec, start)
        block = raw[start:end]

        logger.debug(f"{kind} block spans {start}-{end} ({len(block.splitlines())} lines)")
        return block

    def extract_all(self, raw: str) -> Dict[str, str]:
        """Return a block (possibly empty) for every table of the rule-set."""
        return {
            spec.kind: self.extract_block(raw, spec.kind)
            for spec in self.rule_set.tables
        }

    def _find_start(self, raw: str, spec: TableSpec) -> Optional[int]:
        """End of the line holding the earliest table marker, if any."""
        ends = [
            match.end()
            for match in (spec.section_title.search(raw), spec.column_header.search(raw))
            if match
        ]
        if not ends:
            return None

        # The column-header phrase may cover only the first columns
        line_end = raw.find('\n', min(ends))
        return len(raw) if line_end == -1 else line_end

    def _find_end(self, raw: str, spec: TableSpec, start: int) -> int:
        """Offset of the first terminator after ``start``, else end of text."""
        candidates: List[int] = []

        terminator = self.rule_set.table_terminator.search(raw, start)
        if terminator:
            candidates.append(terminator.start())

        for other in self.rule_set.tables:
            if other.kind == spec.kind:
                continue
            for marker in (other.section_title, other.column_header):
                match = marker.search(raw, start)
                if match:
                    candidates.append(match.start())

        return min(candidates) if candidates else len(raw)
