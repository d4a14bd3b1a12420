"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions; uniqueness and the
one-owner-per-group rule are enforced by database constraints.
"""

from .exceptions import (
    GroupNotFoundError,
    UserNotFoundError,
    NotMemberError,
    DuplicateGroupNameError,
    AlreadyMemberError,
    AlreadyOwnerError,
    OwnerCannotLeaveError,
    CannotRemoveOwnerError,
)

from .group_management import (
    create_group,
    rename_group,
    delete_group,
    get_group_by_id,
    get_user_groups,
)

from .membership_management import (
    join_group,
    leave_group,
    remove_member,
    get_group_members,
)

from .role_management import (
    transfer_ownership,
)


__all__ = [
    # Exceptions
    'GroupNotFoundError',
    'UserNotFoundError',
    'NotMemberError',
    'DuplicateGroupNameError',
    'AlreadyMemberError',
    'AlreadyOwnerError',
    'OwnerCannotLeaveError',
    'CannotRemoveOwnerError',

    # Group Management
    'create_group',
    'rename_group',
    'delete_group',
    'get_group_by_id',
    'get_user_groups',

    # Membership Management
    'join_group',
    'leave_group',
    'remove_member',
    'get_group_members',

    # Role Management
    'transfer_ownership',
]
