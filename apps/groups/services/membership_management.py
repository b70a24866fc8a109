"""
Membership management service.

Handles joining by invite code and member listing.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.groups.models import GroupMembership

from .exceptions import AlreadyMemberError
from .group_management import get_group_for_member
from .invite_management import get_group_by_invite_code

logger = logging.getLogger(__name__)


@transaction.atomic
def join_group(*, invite_code: str, user: User) -> GroupMembership:
    """
    Join the group an invite code belongs to.

    The group row is locked while checking and inserting, and the
    (user, group) unique constraint backs up the check, so two people
    joining at once both end up as members.

    Args:
        invite_code: Code as typed by the user (case-insensitive)
        user: User joining the group

    Returns:
        Created GroupMembership instance

    Raises:
        InvalidInviteCodeError: If no group has this code
        AlreadyMemberError: If user is already a member
    """
    group = get_group_by_invite_code(invite_code=invite_code, for_update=True)

    if group.has_member(user):
        raise AlreadyMemberError(f"You are already a member of {group.name}")

    try:
        membership = GroupMembership.objects.create(
            user=user,
            group=group,
            name=user.get_display_name(),
            joined_at=timezone.now(),
        )
    except IntegrityError:
        # Database constraint caught duplicate membership
        raise AlreadyMemberError(f"You are already a member of {group.name}")

    logger.info("User %s joined group %s", user.email, group.id)
    return membership


def get_group_members(*, group_id: UUID, user: User) -> QuerySet[GroupMembership]:
    """
    Members of a group in join order (member only).

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not a member
    """
    group = get_group_for_member(group_id=group_id, user=user)

    return (
        GroupMembership.objects
        .filter(group=group)
        .select_related('user')
        .order_by('joined_at')
    )
