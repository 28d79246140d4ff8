"""
Excel Exporter Module.

Writes extracted vendor bills to an Excel workbook with openpyxl:

    Documents - one row per bill: header fields, totals, diagnostics
    Lines     - one row per item or expense line, keyed by source file
                and document number

Author: ML Engineering Team
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from config import get_config
from src.utils.logger import get_logger
from src.utils.helpers import ensure_directory, generate_timestamp
from src.utils.exceptions import ExcelExportError
from src.extraction.document import ExtractedDocument

# Initialize module logger
logger = get_logger(__name__)


class ExcelExporter:
    """
    Exports extracted documents to Excel format.

    Attributes:
        output_dir: Directory for output files

    Example:
        >>> exporter = ExcelExporter()
        >>> filepath = exporter.export(documents, "bills.xlsx")
    """

    DOCUMENT_COLUMNS = [
        ('Source File', 'sourceFile'),
        ('Type', 'transactionType'),
        ('Doc Number', 'docNumber'),
        ('Bill Date', 'primaryDate'),
        ('Due Date', 'dueDate'),
        ('Vendor', 'partyName'),
        ('Subsidiary', 'subUnitName'),
        ('Terms', 'termsName'),
        ('Tax Total', 'taxTotal'),
        ('Amount Total', 'amountTotal'),
        ('Currency', 'currencyCode'),
        ('Diagnostics', 'diagnostics'),
    ]

    LINE_COLUMNS = [
        ('Source File', 'sourceFile'),
        ('Doc Number', 'docNumber'),
        ('Table', 'table'),
        ('Name / Account', 'name'),
        ('Quantity', 'quantity'),
        ('Tax Rate %', 'taxRatePercent'),
        ('Tax Amount', 'taxAmount'),
        ('Rate', 'unitRate'),
        ('Amount', 'amount'),
    ]

    def __init__(self, output_dir: Optional[Union[str, Path]] = None) -> None:
        """Initialize the Excel exporter with configuration."""
        self.output_dir = Path(output_dir or get_config("paths.output_dir", "outputs"))
        logger.debug(f"ExcelExporter initialized (output_dir: {self.output_dir})")

    def export(
        self,
        documents: Union[ExtractedDocument, Sequence[ExtractedDocument]],
        filename: Optional[str] = None
    ) -> str:
        """
        Export documents to an Excel file.

        Args:
            documents: Single document or list of documents.
            filename: Output filename. If None, auto-generated.

        Returns:
            Path to the created Excel file.

        Raises:
            ExcelExportError: If there is nothing to export or saving fails.
        """
        if isinstance(documents, ExtractedDocument):
            documents = [documents]

        ensure_directory(self.output_dir)
        filepath = self.output_dir / (filename or self.get_default_filename())

        if not documents:
            raise ExcelExportError(str(filepath), "No documents to export")

        try:
            workbook = openpyxl.Workbook()

            sheet = workbook.active
            sheet.title = "Documents"
            self._write_sheet(sheet, self.DOCUMENT_COLUMNS, self._document_rows(documents), "4472C4")

            lines_sheet = workbook.create_sheet(title="Lines")
            self._write_sheet(lines_sheet, self.LINE_COLUMNS, self._line_rows(documents), "548235")

            workbook.save(filepath)

        except Exception as e:
            logger.error(f"Excel export failed: {e}")
            raise ExcelExportError(str(filepath), str(e))

        logger.info(f"Excel file saved: {filepath} ({len(documents)} documents)")
        return str(filepath)

    def _document_rows(self, documents: Sequence[ExtractedDocument]) -> List[Dict[str, Any]]:
        rows = []
        for document in documents:
            data = document.to_dict()
            row = {
                'sourceFile': data['sourceFile'],
                'transactionType': data['transactionType'],
                'diagnostics': ", ".join(data['diagnostics']),
            }
            row.update(data['header'])
            row.update(data['totals'])
            rows.append(row)
        return rows

    def _line_rows(self, documents: Sequence[ExtractedDocument]) -> List[Dict[str, Any]]:
        rows = []
        for document in documents:
            data = document.to_dict()
            key = {
                'sourceFile': data['sourceFile'],
                'docNumber': data['header']['docNumber'],
            }
            for item in data['lines']['items']:
                rows.append({**key, 'table': 'items', **item})
            for expense in data['lines']['expenses']:
                row = {**key, 'table': 'expenses', **expense}
                row['name'] = row.pop('accountName')
                rows.append(row)
        return rows

    def _write_sheet(
        self,
        sheet,
        columns: List[Tuple[str, str]],
        rows: List[Dict[str, Any]],
        header_color: str
    ) -> None:
        """Write a header row and data rows, then size the columns."""
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color=header_color, end_color=header_color, fill_type="solid")
        thin = Side(style='thin')
        border = Border(left=thin, right=thin, top=thin, bottom=thin)

        for col, (header_name, _) in enumerate(columns, 1):
            cell = sheet.cell(row=1, column=col, value=header_name)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = border

        for row_num, row in enumerate(rows, 2):
            for col, (_, key) in enumerate(columns, 1):
                value = row.get(key)
                cell = sheet.cell(row=row_num, column=col, value='' if value is None else value)
                cell.border = border

        for col, (header_name, key) in enumerate(columns, 1):
            max_length = max(
                [len(header_name)] + [len(str(row.get(key) or '')) for row in rows]
            )
            sheet.column_dimensions[get_column_letter(col)].width = min(max_length + 2, 50)

        sheet.freeze_panes = 'A2'

    def get_default_filename(self) -> str:
        """Configured filename, or a timestamped one."""
        configured = get_config("output.excel.filename")
        if configured:
            return configured
        return f"bill_extractions_{generate_timestamp()}.xlsx"
