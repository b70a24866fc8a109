"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
Authorization is checked here, not only in views.
"""

from .exceptions import (
    GroupsServiceError,
    GroupNotFoundError,
    InvalidInviteCodeError,
    AlreadyMemberError,
    NotMemberError,
    InsufficientPermissionsError,
    CascadeDeleteError,
)

from .cascade import (
    CascadePhase,
    run_cascade,
)

from .group_management import (
    create_group,
    delete_group,
    get_group_by_id,
    get_group_for_member,
    get_user_groups,
)

from .membership_management import (
    join_group,
    get_group_members,
)

from .invite_management import (
    normalize_invite_code,
    get_group_by_invite_code,
)


__all__ = [
    # Exceptions
    'GroupsServiceError',
    'GroupNotFoundError',
    'InvalidInviteCodeError',
    'AlreadyMemberError',
    'NotMemberError',
    'InsufficientPermissionsError',
    'CascadeDeleteError',

    # Cascade
    'CascadePhase',
    'run_cascade',

    # Group Management
    'create_group',
    'delete_group',
    'get_group_by_id',
    'get_group_for_member',
    'get_user_groups',

    # Membership Management
    'join_group',
    'get_group_members',

    # Invite Management
    'normalize_invite_code',
    'get_group_by_invite_code',
]
