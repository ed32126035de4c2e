"""Custom exceptions for the logistics ledger."""


class LogisticsLedgerException(Exception):
    """Base exception for logistics ledger errors."""
    pass


class StoreError(LogisticsLedgerException):
    """Raised when the underlying in-memory database fails."""
    pass


class ValidationError(LogisticsLedgerException):
    """Raised when input sanitization fails at the API boundary."""
    pass


class InvalidStatusTransitionError(LogisticsLedgerException):
    """Raised when a trip status move is backward, skips a step, or passes Completed."""

    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot move trip from '{getattr(current, 'value', current)}' "
            f"to '{getattr(requested, 'value', requested)}'"
        )


class TripNotFoundError(LogisticsLedgerException):
    """Raised when trip is not found."""
    pass


class LoadNotFoundError(LogisticsLedgerException):
    """Raised when load is not found."""
    pass


class TemplateNotFoundError(LogisticsLedgerException):
    """Raised when load template is not found."""
    pass


class ConfigurationError(LogisticsLedgerException):
    """Raised when configuration is invalid or missing."""
    pass
