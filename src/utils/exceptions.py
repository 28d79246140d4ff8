"""
Custom Exceptions Module.

This module defines all custom exceptions used throughout the vendor bill
extraction system. Pattern misses inside the extraction engine are not
errors and never raise; these exceptions cover the edges of the system
(text acquisition, rule-set selection and output).

Exception Hierarchy:
    BillExtractionError (base)
    ├── InputError
    │   ├── UnsupportedFileTypeError
    │   ├── FileNotFoundError
    │   └── TextAcquisitionError
    ├── RuleSetError
    │   └── UnknownRuleSetError
    └── OutputError
        ├── JsonExportError
        └── ExcelExportError
"""


class BillExtractionError(Exception):
    """
    Base exception for all vendor bill extraction errors.

    All custom exceptions in this system inherit from this class,
    allowing for easy catching of all system-specific errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(BillExtractionError):
    """Base exception for input handling errors."""
    pass


class UnsupportedFileTypeError(InputError):
    """
    Raised when an unsupported file type is provided.

    Example:
        >>> raise UnsupportedFileTypeError(".doc", [".pdf", ".txt"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


class FileNotFoundError(InputError):
    """Raised when input file cannot be found."""

    def __init__(self, filepath: str):
        message = f"File not found: {filepath}"
        details = {"filepath": filepath}
        super().__init__(message, details)


class TextAcquisitionError(InputError):
    """
    Raised when no text could be obtained from a document.

    This is the only failure that aborts a document: no partial record
    is produced for the input it names.
    """

    def __init__(self, source: str, reason: str = None):
        message = f"Could not acquire text from: {source}"
        details = {"source": source, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# RULE-SET ERRORS
# =============================================================================

class RuleSetError(BillExtractionError):
    """Base exception for extraction rule-set problems."""
    pass


class UnknownRuleSetError(RuleSetError):
    """Raised when a configured rule-set name is not registered."""

    def __init__(self, name: str, available: list):
        message = f"Unknown extraction rule-set: '{name}'"
        details = {"rule_set": name, "available": available}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(BillExtractionError):
    """Base exception for output handling errors."""
    pass


class JsonExportError(OutputError):
    """Raised when writing a JSON record fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to write JSON file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


class ExcelExportError(OutputError):
    """Raised when Excel export fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export Excel file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'BillExtractionError',
    'InputError',
    'UnsupportedFileTypeError',
    'FileNotFoundError',
    'TextAcquisitionError',
    'RuleSetError',
    'UnknownRuleSetError',
    'OutputError',
    'JsonExportError',
    'ExcelExportError',
]
