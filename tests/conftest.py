"""Shared fixtures for the vendor bill extraction tests."""

import logging
from typing import Iterator

import pytest

from config import ConfigurationManager
from src.extraction.rules import RuleSet, get_rule_set
from src.utils.logger import LOGGER_NAMESPACE


BILL_WITH_ITEMS = """\
#VENDBILL194 3/27/2025
Vendor: ACME Trading Subsidiary: Parent Co
Due Date: 4/26/2025 Terms: Net 30
Items
Item Quantity Tax Rate Tax Amt Rate Amount
WIDGET-1 2 12% PHP100.00 PHP500.00 PHP1,000.00
Tax PHP100.00 Amount PHP1,000.00
"""

BILL_WITH_SINGLE_EXPENSE = """\
#VENDBILL200 5/1/2025
Vendor: Metro Power Corp Subsidiary: Parent Co
Due Date: 5/31/2025 Terms: Due on receipt
Expenses
Account Tax Rate Tax Amt Amount
6100 Utilities Expense 12% PHP120.00
Tax PHP120.00 Amount PHP1,120.00
"""

BILL_WITHOUT_TABLES = """\
#VENDBILL201 6/2/2025
Vendor: Northwind Services
Tax PHP60.00 Amount PHP560.00
"""

BILL_WITH_WRAPPED_ROW = """\
#VENDBILL202 7/1/2025
Vendor: Steelworks Inc
Items
Item Quantity Tax Rate Tax Amt Rate Amount
HEAVY DUTY STEEL BRACKET 4 12% PHP48.00 PHP100.00 PHP400.00
GALVANIZED FINISH
Tax PHP48.00 Amount PHP400.00
"""


@pytest.fixture(autouse=True)
def fresh_config() -> Iterator[None]:
    """Give every test the settings file as shipped and a quiet logger."""
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()

    app_logger = logging.getLogger(LOGGER_NAMESPACE)
    app_logger.handlers.clear()
    app_logger.propagate = True


@pytest.fixture
def rules() -> RuleSet:
    """The vendor-bill rule-set."""
    return get_rule_set("vendorbill")


@pytest.fixture
def bill_with_items() -> str:
    """Bill with one items-table row and totals."""
    return BILL_WITH_ITEMS


@pytest.fixture
def bill_with_single_expense() -> str:
    """Bill whose only expense row prints its tax but not its amount."""
    return BILL_WITH_SINGLE_EXPENSE


@pytest.fixture
def bill_without_tables() -> str:
    """Bill with totals but no table at all."""
    return BILL_WITHOUT_TABLES


@pytest.fixture
def bill_with_wrapped_row() -> str:
    """Bill whose item description wraps below the row's values."""
    return BILL_WITH_WRAPPED_ROW
