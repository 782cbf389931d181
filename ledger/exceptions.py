"""Domain-specific exceptions for the expense ledger."""

class ValidationError(ValueError):
    """Raised when an argument does not meet validation requirements."""


class RecordNotFoundError(LookupError):
    """Raised when a transaction cannot be located at the requested position."""
