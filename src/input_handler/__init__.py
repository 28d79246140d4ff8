"""
Input Handler Module for Vendor Bill Extraction System.

This module provides the text-acquisition adapter:
    - Detecting file types by extension
    - Reading plain text files
    - Extracting text from PDFs (pdfplumber, PyMuPDF fallback)

Supported formats:
    - PDF (digital, with a text layer)
    - Plain text (UTF-8)

Author: ML Engineering Team
"""

from .handler import InputHandler, TextDocument
from .pdf_processor import PDFProcessor

__all__ = ['InputHandler', 'TextDocument', 'PDFProcessor']
