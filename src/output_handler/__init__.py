"""
Output Handler Module for Vendor Bill Extraction System.

This module provides functionality for:
    - JSON output, one file per extracted document
    - Excel summary workbooks for batches

Author: ML Engineering Team
"""

from .handler import OutputHandler
from .excel_exporter import ExcelExporter

__all__ = ['OutputHandler', 'ExcelExporter']
