"""
Vendor Bill Extraction System - Source Package.

This package contains all core modules for the deterministic vendor bill
extraction system. Each module has a single responsibility.

Modules:
    - input_handler: Text acquisition from PDF and text files
    - extraction: Rule-set driven header, table and totals extraction
    - postprocessor: Normalization, reconciliation and validation
    - output_handler: JSON and Excel output
    - pipeline: End-to-end orchestration
    - utils: Logging, exceptions and helpers

Architecture:
    Input → Text Normalizer → {Header, Tables → Rows, Totals}
          → Reconciliation → Validation → Output
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

__all__ = [
    'input_handler',
    'extraction',
    'postprocessor',
    'output_handler',
    'pipeline',
    'utils'
]
