"""
Helper Utilities Module.

Small filesystem and formatting helpers shared by the input and output
handlers and the command-line entry point.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - get_file_extension: Extract file extension safely
    - generate_timestamp: Generate formatted timestamps
    - safe_filename: Sanitize filenames for filesystem
    - validate_file_exists: Check a path points at a regular file
    - collect_input_files: Expand a file-or-directory argument
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs/json")
        PosixPath('outputs/json')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract the lowercase file extension (with the dot) from a filepath.

    Example:
        >>> get_file_extension("bill.PDF")
        '.pdf'
        >>> get_file_extension("noextension")
        ''
    """
    return Path(filepath).suffix.lower()


def generate_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """
    Generate a formatted timestamp string.

    Args:
        format_str: strftime format string.

    Returns:
        Formatted timestamp string.
    """
    return datetime.now().strftime(format_str)


def safe_filename(filename: str, replacement: str = "_") -> str:
    """
    Sanitize a filename by replacing characters not allowed on common
    filesystems.

    Example:
        >>> safe_filename("bill:123/test.json")
        'bill_123_test.json'
    """
    invalid_chars = r'[<>:"/\\|?*\x00-\x1f]'
    sanitized = re.sub(invalid_chars, replacement, filename)
    sanitized = sanitized.strip('. ')

    if not sanitized:
        sanitized = "unnamed"

    return sanitized


def validate_file_exists(filepath: Union[str, Path]) -> bool:
    """Check if a file exists and is a regular file."""
    path = Path(filepath)
    return path.exists() and path.is_file()


def collect_input_files(
    input_path: Union[str, Path],
    extensions: Iterable[str]
) -> List[Path]:
    """
    Expand an input argument into the list of files to process.

    A file is returned as-is (whatever its extension, so the input handler
    can report unsupported types). A directory is scanned, non-recursively,
    for files whose extension is in ``extensions``.

    Args:
        input_path: File or directory path.
        extensions: Lowercase extensions including the dot.

    Returns:
        Sorted list of file paths; empty if the path does not exist.
    """
    path = Path(input_path)
    wanted = {ext.lower() for ext in extensions}

    if path.is_file():
        return [path]

    if path.is_dir():
        return sorted(
            p for p in path.iterdir()
            if p.is_file() and p.suffix.lower() in wanted
        )

    return []
