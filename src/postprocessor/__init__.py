"""
Post-Processing Module for Vendor Bill Extraction System.

This module provides functionality for:
    - Currency amount and date normalization
    - Reconciliation of lines with document totals
    - Consistency validation and diagnostics

Author: ML Engineering Team
"""

from .processor import PostProcessor
from .reconciler import Reconciler
from .validators import DocumentValidator, DateValidator, AmountValidator, ValidationResult
from .normalizers import DateNormalizer, AmountNormalizer

__all__ = [
    'PostProcessor',
    'Reconciler',
    'DocumentValidator',
    'DateValidator',
    'AmountValidator',
    'ValidationResult',
    'DateNormalizer',
    'AmountNormalizer'
]
