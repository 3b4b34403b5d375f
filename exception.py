class OrderParserError(Exception):
    """Base exception for order file parsing."""


class InputFileError(OrderParserError):
    """Input file cannot be found or read."""


class FieldDecodeError(OrderParserError):
    """A fixed-width field does not hold a value of the expected type."""


class OutputFileError(OrderParserError):
    """Report file cannot be written."""
