"""
Group management service.

Handles group creation, lookup and the owner-only cascading delete.
"""

import logging
from typing import Dict
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import Prefetch, QuerySet

from apps.accounts.models import User
from apps.chat.models import ChatMessage
from apps.groups.models import Group, GroupMembership
from apps.orders.models import Order, OrderCard

from .cascade import CascadePhase, run_cascade
from .exceptions import (
    GroupNotFoundError,
    InsufficientPermissionsError,
    NotMemberError,
)
from .invite_management import issue_invite_code

logger = logging.getLogger(__name__)


def create_group(
    *,
    name: str,
    owner: User,
    description: str = '',
    max_retries: int = 5
) -> Group:
    """
    Create a new group with the creator as its first member.

    This is a multi-step operation wrapped in a transaction:
    1. Issue an invite code not used by another group
    2. Create the group
    3. Create the owner membership

    Args:
        name: Group name
        owner: User who will own the group
        description: Optional group description
        max_retries: Maximum attempts to obtain a unique invite code

    Returns:
        Created Group instance

    Raises:
        RuntimeError: If cannot generate unique invite code after retries
    """
    tried = set()

    # Retry logic outside transaction to handle invite code collisions
    for attempt in range(max_retries):
        invite_code = issue_invite_code(exclude=tried)
        tried.add(invite_code)

        try:
            with transaction.atomic():
                group = Group.objects.create(
                    name=name.strip(),
                    owner=owner,
                    description=(description or '').strip(),
                    invite_code=invite_code
                )

                GroupMembership.objects.create(
                    user=owner,
                    group=group,
                    name=owner.get_display_name(),
                )

            logger.info("Group %s created by %s", group.id, owner.email)
            return group

        except IntegrityError:
            # Another group took the code between the check and the insert
            if attempt == max_retries - 1:
                raise RuntimeError(
                    f"Failed to generate unique invite code after {max_retries} attempts"
                )
            continue

    raise RuntimeError("Unexpected error in group creation")


def get_group_by_id(*, group_id: UUID) -> Group:
    """
    Get a group by ID with owner and memberships preloaded.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        return (
            Group.objects
            .select_related('owner')
            .prefetch_related(
                Prefetch(
                    'memberships',
                    queryset=GroupMembership.objects.select_related('user')
                )
            )
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")


def get_group_for_member(*, group_id: UUID, user: User) -> Group:
    """
    Get a group the user belongs to.

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not a member
    """
    group = get_group_by_id(group_id=group_id)
    if not group.has_member(user):
        raise NotMemberError("You must be a member of this group")
    return group


def get_user_groups(*, user: User) -> QuerySet[Group]:
    """Groups the user owns or belongs to, newest first."""
    return (
        Group.objects
        .filter(memberships__user=user)
        .select_related('owner')
        .prefetch_related('memberships')
        .distinct()
        .order_by('-created_at')
    )


def delete_group(*, group_id: UUID, user: User) -> Dict[str, int]:
    """
    Delete a group and everything scoped to it (owner only).

    Phases run in foreign-key order: cards, orders, chat messages, then
    the group with its memberships. Each phase commits separately, so this
    function is deliberately not atomic; if it raises part way, calling it
    again finishes the job.

    Args:
        group_id: UUID of the group
        user: User requesting deletion (must be owner)

    Returns:
        Mapping of phase name to rows deleted

    Raises:
        GroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If user is not the owner
        CascadeDeleteError: If a phase fails
    """
    try:
        group = Group.objects.get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not group.is_owner(user):
        raise InsufficientPermissionsError("Only the group owner can delete the group")

    deleted = run_cascade(
        label=f"group {group_id}",
        phases=[
            CascadePhase('cards', lambda: OrderCard.objects.filter(group_id=group_id)),
            CascadePhase('orders', lambda: Order.objects.filter(group_id=group_id)),
            CascadePhase('messages', lambda: ChatMessage.objects.filter(group_id=group_id)),
            CascadePhase('group', lambda: Group.objects.filter(id=group_id)),
        ],
    )

    logger.info("Group %s deleted by %s", group_id, user.email)
    return deleted
