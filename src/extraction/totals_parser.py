"""
Totals Parser Module.

Finds the document's tax and amount totals anywhere in the raw text,
independent of where the tables are.
"""

from src.utils.logger import get_logger
from src.postprocessor.normalizers import AmountNormalizer
from .document import Totals
from .rules import RuleSet

# Initialize module logger
logger = get_logger(__name__)


class TotalsParser:
    """Reads the tax and amount totals of a rule-set."""

    def __init__(self, rule_set: RuleSet) -> None:
        self.rule_set = rule_set
        self.amounts = AmountNormalizer(rule_set.currency_code)

    def parse(self, raw: str) -> Totals:
        """
        Parse both totals; either may come back None.

        Example:
            >>> TotalsParser(rules).parse("Tax PHP100.00 Amount PHP1,000.00")
            Totals(tax_total=Decimal('100.00'), amount_total=Decimal('1000.00'), currency_code='PHP')
        """
        tax_match = self.rule_set.tax_total.search(raw)
        amount_match = self.rule_set.amount_total.search(raw)

        totals = Totals(
            tax_total=self.amounts.parse(tax_match.group(1)) if tax_match else None,
            amount_total=self.amounts.parse(amount_match.group(1)) if amount_match else None,
            currency_code=self.rule_set.currency_code,
        )

        if totals.amount_total is None:
            logger.debug("No amount total found")
        return totals
