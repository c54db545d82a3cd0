class A1TableError(Exception):
    """Base error for all user-facing a1table exceptions."""


class FormatError(A1TableError, ValueError):
    """Raised when a string does not have the shape of a cell reference."""


class RangeError(A1TableError, ValueError):
    """Raised when a row or column coordinate is below 1."""


class ConfigurationError(A1TableError):
    """Raised when CSV options or environment defaults are invalid."""


class CsvFileError(A1TableError):
    """Raised when a CSV file cannot be read."""
