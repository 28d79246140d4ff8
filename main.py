#!/usr/bin/env python3
"""
Vendor Bill Extraction System - Main Entry Point.

Reads vendor bills (PDF with a text layer, or plain text), extracts header
fields, item and expense lines and totals, and writes one JSON record per
bill.

Usage:
    Command Line:
        python main.py --input bill.pdf --output results/
        python main.py --input ./bills/ --output ./results/ --excel

    Python:
        from main import run_extraction
        results = run_extraction("bill.pdf")

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager, get_config
from src.utils.logger import get_logger, set_level, setup_logger_from_config
from src.utils.helpers import collect_input_files
from src.utils.exceptions import BillExtractionError


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Vendor Bill Extraction System",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Process a single bill:
        python main.py --input bill.pdf --output results/

    Process a directory with an Excel summary:
        python main.py --input ./bills/ --output ./results/ --excel
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Input file or directory containing bills (.pdf, .txt)"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output directory (default: paths.output_dir from settings)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--rule-set",
        type=str,
        default=None,
        help="Name of the extraction rule-set (default: extraction.rule_set)"
    )

    parser.add_argument(
        "--excel",
        action="store_true",
        help="Also write an Excel summary of all processed bills"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging from parsed arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)

    if args.rule_set:
        config.set("extraction.rule_set", args.rule_set)
    if args.excel:
        config.set("output.excel.enabled", True)

    logger = setup_logger_from_config()

    if args.debug:
        set_level("DEBUG")
    elif args.quiet:
        set_level("WARNING")

    logger.info("=" * 60)
    logger.info("VENDOR BILL EXTRACTION SYSTEM")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Rule-set: {config.get('extraction.rule_set', 'vendorbill')}")
    logger.info(f"Input: {args.input}")

    return config


def run_extraction(
    input_path: str,
    output_path: Optional[str] = None,
    write_outputs: bool = True
) -> List[Dict[str, Any]]:
    """
    Run the extraction pipeline over a file or directory.

    A file whose text cannot be acquired is logged and skipped; the other
    files are still processed.

    Args:
        input_path: Path to input file or directory.
        output_path: Output directory; defaults to paths.output_dir.
        write_outputs: Whether to write JSON/Excel files.

    Returns:
        List of extracted document dictionaries.

    Example:
        >>> results = run_extraction("bills/", "outputs/")
        >>> results[0]["header"]["docNumber"]
        'VENDBILL194'
    """
    logger = get_logger(__name__)

    from src.pipeline import BillExtractionPipeline
    from src.output_handler import OutputHandler

    pipeline = BillExtractionPipeline()

    extensions = get_config("input.supported_extensions", [".pdf", ".txt"])
    files_to_process = collect_input_files(input_path, extensions)
    logger.info(f"Processing {len(files_to_process)} files...")

    documents = []
    for file_path in files_to_process:
        logger.info(f"Processing: {file_path.name}")

        try:
            document = pipeline.extract_file(file_path)
        except BillExtractionError as e:
            logger.error(f"Error processing {file_path.name}: {e}")
            continue

        documents.append(document)
        logger.info(
            f"  Extracted: Bill #{document.header.doc_number or 'N/A'}, "
            f"{len(document.lines.items)} items, "
            f"{len(document.lines.expenses)} expenses"
        )
        if document.used_fallback:
            logger.warning(f"  {file_path.name}: lines synthesized from totals")

    if documents and write_outputs:
        output_handler = OutputHandler(output_dir=output_path)
        output_info = output_handler.save(documents)

        logger.info(f"JSON records written: {len(output_info['json_paths'])}")
        if output_info.get('excel_path'):
            logger.info(f"Excel output: {output_info['excel_path']}")

    return [document.to_dict() for document in documents]


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_arguments(argv)

    try:
        initialize_system(args)
        logger = get_logger(__name__)

        if not Path(args.input).exists():
            logger.error(f"Input path not found: {args.input}")
            return 1

        results = run_extraction(input_path=args.input, output_path=args.output)

        if not results:
            logger.error("No bills could be processed")
            return 1

        logger.info("=" * 60)
        logger.info(f"Extraction complete. Processed {len(results)} bills.")
        logger.info("=" * 60)

        return 0

    except BillExtractionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
