"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidDisplayNameError,
)
from .profile_management import update_display_name

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidDisplayNameError',
    # Services
    'update_display_name',
]
