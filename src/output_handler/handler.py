"""
Main Output Handler Module.

This module provides the OutputHandler class that writes extracted
documents: one JSON file per document and, when enabled, an Excel
summary of the whole batch.

Author: ML Engineering Team
"""

import json
from pathlib import Path
from typing import Any, Collection, Dict, Optional, Sequence, Set, Union

from config import get_config
from src.utils.logger import get_logger
from src.utils.helpers import ensure_directory, safe_filename
from src.utils.exceptions import JsonExportError
from src.extraction.document import ExtractedDocument
from .excel_exporter import ExcelExporter

# Initialize module logger
logger = get_logger(__name__)


class OutputHandler:
    """
    Unified output handler for extracted documents.

    Attributes:
        output_dir: Directory all outputs are written to
        json_enabled: Whether JSON files are written
        excel_enabled: Whether the Excel summary is written

    Example:
        >>> handler = OutputHandler(output_dir="outputs")
        >>> info = handler.save(documents)
        >>> info["json_paths"]
    """

    def __init__(
        self,
        output_dir: Optional[Union[str, Path]] = None,
        json_enabled: Optional[bool] = None,
        excel_enabled: Optional[bool] = None
    ) -> None:
        """
        Initialize the output handler.

        Args:
            output_dir: Override config for the output directory.
            json_enabled: Override config for JSON output.
            excel_enabled: Override config for Excel output.
        """
        self.output_dir = Path(output_dir or get_config("paths.output_dir", "outputs"))
        self.json_enabled = json_enabled if json_enabled is not None else \
            get_config("output.json.enabled", True)
        self.excel_enabled = excel_enabled if excel_enabled is not None else \
            get_config("output.excel.enabled", False)
        self.indent = get_config("output.json.indent", 2)

        self._excel_exporter = None

        logger.debug(
            f"OutputHandler initialized "
            f"(json={self.json_enabled}, excel={self.excel_enabled})"
        )

    @property
    def excel_exporter(self) -> ExcelExporter:
        """Get or create the Excel exporter."""
        if self._excel_exporter is None:
            self._excel_exporter = ExcelExporter(self.output_dir)
        return self._excel_exporter

    def save(
        self,
        documents: Union[ExtractedDocument, Sequence[ExtractedDocument]],
        excel_filename: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Save documents to all enabled outputs.

        Returns:
            Dictionary with output details:
            {
                'json_paths': ['outputs/bill.json', ...],
                'excel_path': 'outputs/bill_extractions.xlsx'
            }

        Raises:
            OutputError: If any enabled output cannot be written.
        """
        if isinstance(documents, ExtractedDocument):
            documents = [documents]

        output_info: Dict[str, Any] = {'json_paths': [], 'excel_path': None}

        if self.json_enabled:
            taken: Set[str] = set()
            for document in documents:
                filename = self._json_filename(document, taken)
                taken.add(filename)
                output_info['json_paths'].append(self.to_json(document, filename))

        if self.excel_enabled and documents:
            output_info['excel_path'] = self.excel_exporter.export(documents, excel_filename)

        return output_info

    def to_json(self, document: ExtractedDocument, filename: Optional[str] = None) -> str:
        """
        Write one document as JSON.

        Args:
            document: Document to write.
            filename: Output filename; defaults to the source file's stem
                (or the document number) with a .json suffix.

        Returns:
            Path to the written file.

        Raises:
            JsonExportError: If the file cannot be written.
        """
        ensure_directory(self.output_dir)
        filepath = self.output_dir / (filename or self._json_filename(document))

        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(document.to_dict(), f, indent=self.indent)
        except OSError as e:
            logger.error(f"JSON export failed: {e}")
            raise JsonExportError(str(filepath), str(e))

        logger.info(f"JSON saved: {filepath}")
        return str(filepath)

    def _json_filename(self, document: ExtractedDocument, taken: Collection[str] = ()) -> str:
        """
        Output filename for a document, unique among ``taken``.

        "bill.pdf" gives bill.json; a second "bill.*" in the same batch
        gives bill_txt.json, then bill_txt_2.json and so on.
        """
        if document.source_file:
            source = Path(document.source_file)
            stem = source.stem
            alternate = f"{stem}_{source.suffix.lstrip('.')}" if source.suffix else stem
        else:
            stem = alternate = document.header.doc_number or document.transaction_type

        for candidate in (stem, alternate):
            filename = safe_filename(f"{candidate}.json")
            if filename not in taken:
                return filename

        counter = 2
        while safe_filename(f"{alternate}_{counter}.json") in taken:
            counter += 1
        return safe_filename(f"{alternate}_{counter}.json")
