"""
Domain-specific exceptions for groups app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class GroupsServiceError(Exception):
    """Base exception for all groups service errors."""
    pass


class GroupNotFoundError(GroupsServiceError):
    """Raised when a group does not exist or is inaccessible."""
    pass


class InvalidInviteCodeError(GroupsServiceError):
    """Raised when no group matches an invite code."""
    pass


class AlreadyMemberError(GroupsServiceError):
    """Raised when a user tries to join a group they're already in."""
    pass


class NotMemberError(GroupsServiceError):
    """Raised when a user tries to perform an action requiring membership."""
    pass


class InsufficientPermissionsError(GroupsServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass


class CascadeDeleteError(GroupsServiceError):
    """
    Raised when a phased delete stops part way.

    Phases listed in ``completed_phases`` stay deleted. Running the same
    delete again resumes from the failed phase.
    """

    def __init__(self, message, *, failed_phase, completed_phases):
        super().__init__(message)
        self.failed_phase = failed_phase
        self.completed_phases = list(completed_phases)
