"""
Domain-specific exceptions for groups app.

Each one is a NotFound, Conflict or Forbidden kind from apps.core, so views
can let them propagate and DRF renders the matching status code.
"""

from apps.core.exceptions import ConflictError, ForbiddenError, NotFoundError


class GroupNotFoundError(NotFoundError):
    """Raised when a group does not exist."""
    default_detail = 'Group not found.'
    default_code = 'group_not_found'


class UserNotFoundError(NotFoundError):
    """Raised when a referenced user does not exist."""
    default_detail = 'User not found.'
    default_code = 'user_not_found'


class NotMemberError(NotFoundError):
    """Raised when no membership exists for the (group, user) pair."""
    default_detail = 'User is not a member of this group.'
    default_code = 'not_member'


class DuplicateGroupNameError(ConflictError):
    """Raised when a group name is already taken."""
    default_detail = 'Group name already exists.'
    default_code = 'duplicate_group_name'


class AlreadyMemberError(ConflictError):
    """Raised when a user tries to join a group they're already in."""
    default_detail = 'User is already a member of this group.'
    default_code = 'already_member'


class AlreadyOwnerError(ConflictError):
    """Raised when ownership is transferred to the current owner."""
    default_detail = 'User already owns this group.'
    default_code = 'already_owner'


class OwnerCannotLeaveError(ForbiddenError):
    """Raised when a group owner tries to leave their group."""
    default_detail = 'Group owner cannot leave. Transfer ownership or delete the group.'
    default_code = 'owner_cannot_leave'


class CannotRemoveOwnerError(ForbiddenError):
    """Raised when attempting to remove the group owner."""
    default_detail = 'Cannot remove the group owner.'
    default_code = 'cannot_remove_owner'
