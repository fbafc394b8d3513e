"""
Error taxonomy shared by ingestion, storage, analytics and the HTTP layer.
"""


class CovidAnalyticsError(Exception):
    """Base class for all application errors."""

    status_code = 500


class TransportError(CovidAnalyticsError):
    """The CSV source could not be retrieved."""


class FormatError(CovidAnalyticsError):
    """The CSV source is not in the supported format."""


class RowParseError(CovidAnalyticsError):
    """A single CSV row could not be parsed; the row is skipped."""


class ValidationError(CovidAnalyticsError):
    """A request parameter is missing or malformed."""

    status_code = 400


class StorageError(CovidAnalyticsError):
    """A record store operation failed."""
