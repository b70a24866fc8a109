"""
Invite management service.

Handles invite code issuance and lookup. Codes are six uppercase
alphanumeric characters and are never regenerated once issued.
"""

from apps.groups.models import Group, generate_invite_code

from .exceptions import InvalidInviteCodeError


def normalize_invite_code(invite_code: str) -> str:
    """Strip whitespace and upper-case a code typed by a user."""
    return (invite_code or '').strip().upper()


def issue_invite_code(*, exclude: set = None) -> str:
    """
    Generate a code not currently used by any group.

    The unique constraint on ``Group.invite_code`` is still the final
    guard; callers retry on IntegrityError.
    """
    exclude = exclude or set()
    while True:
        code = generate_invite_code()
        if code in exclude:
            continue
        if not Group.objects.filter(invite_code=code).exists():
            return code
        exclude.add(code)


def get_group_by_invite_code(*, invite_code: str, for_update: bool = False) -> Group:
    """
    Find the group an invite code belongs to.

    Args:
        invite_code: Code as typed by the user
        for_update: Lock the group row (used while joining)

    Returns:
        Group instance

    Raises:
        InvalidInviteCodeError: If no group has this code
    """
    code = normalize_invite_code(invite_code)
    if not code:
        raise InvalidInviteCodeError("Invalid invite code")

    queryset = Group.objects.all()
    if for_update:
        queryset = queryset.select_for_update()

    try:
        return queryset.get(invite_code=code)
    except Group.DoesNotExist:
        raise InvalidInviteCodeError("Invalid invite code")
