"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class InvalidDisplayNameError(AccountsServiceError):
    """Raised when a display name is blank or too long."""
    pass
