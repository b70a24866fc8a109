"""Profile management service."""

import logging

from django.db import transaction

from apps.accounts.models import User

from .exceptions import InvalidDisplayNameError

logger = logging.getLogger(__name__)

MAX_DISPLAY_NAME_LENGTH = 100


@transaction.atomic
def update_display_name(*, user: User, display_name: str) -> User:
    """
    Set the user's display name.

    The name is snapshotted onto memberships, cards and chat messages at
    write time, so changing it does not rewrite history.

    Args:
        user: User being updated
        display_name: New display name (trimmed)

    Returns:
        Updated User instance

    Raises:
        InvalidDisplayNameError: If the trimmed name is empty or too long
    """
    display_name = (display_name or '').strip()

    if not display_name:
        raise InvalidDisplayNameError("Display name cannot be empty")
    if len(display_name) > MAX_DISPLAY_NAME_LENGTH:
        raise InvalidDisplayNameError(
            f"Display name must be at most {MAX_DISPLAY_NAME_LENGTH} characters"
        )

    user.display_name = display_name
    user.save(update_fields=['display_name'])

    logger.info("User %s set display name", user.email)
    return user
