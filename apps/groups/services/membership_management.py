"""
Membership management service.

Handles group membership operations with concurrency protection.
The owner membership can never be removed through these operations.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import Case, IntegerField, QuerySet, Value, When

from apps.accounts.services import user_exists
from apps.core.db_errors import translate_constraint_violations
from apps.groups.models import Group, GroupMembership, GroupRole

from . import membership_store
from .exceptions import (
    AlreadyMemberError,
    CannotRemoveOwnerError,
    GroupNotFoundError,
    NotMemberError,
    OwnerCannotLeaveError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


def join_group(*, group_id: UUID, user_id: UUID) -> GroupMembership:
    """
    Join a group as a regular member.

    Uses row-level locking on the group while checking and creating the
    membership. The unique constraint on (group, user) settles any race
    that slips past the check.

    Args:
        group_id: UUID of the group
        user_id: UUID of the user joining

    Returns:
        Created GroupMembership instance

    Raises:
        GroupNotFoundError: If group doesn't exist
        UserNotFoundError: If user doesn't exist
        ConflictError: If user is already a member
    """
    with translate_constraint_violations(), transaction.atomic():
        try:
            Group.objects.select_for_update().get(id=group_id)
        except Group.DoesNotExist:
            raise GroupNotFoundError(f"Group with ID {group_id} not found")

        if not user_exists(user_id):
            raise UserNotFoundError(f"User with ID {user_id} not found")

        if membership_store.find_membership(group_id=group_id, user_id=user_id):
            raise AlreadyMemberError(f"User {user_id} is already a member of this group")

        membership = membership_store.insert_membership(
            group_id=group_id,
            user_id=user_id,
            role=GroupRole.MEMBER,
        )

    logger.info("User %s joined group %s", user_id, group_id)
    return membership


def _delete_non_owner(*, group_id: UUID, user_id: UUID, owner_error: Exception) -> None:
    membership = membership_store.find_membership(
        group_id=group_id,
        user_id=user_id,
        for_update=True,
    )
    if membership is None:
        raise NotMemberError(f"User {user_id} is not a member of this group")

    if membership.role == GroupRole.OWNER:
        raise owner_error

    membership_store.delete_membership(group_id=group_id, user_id=user_id)


@transaction.atomic
def leave_group(*, group_id: UUID, user_id: UUID) -> None:
    """
    Leave a group.

    Owner cannot leave their own group - they must transfer ownership or delete.

    Args:
        group_id: UUID of the group
        user_id: UUID of the user leaving

    Raises:
        NotMemberError: If user is not a member
        OwnerCannotLeaveError: If user is the owner
    """
    _delete_non_owner(
        group_id=group_id,
        user_id=user_id,
        owner_error=OwnerCannotLeaveError(
            "Group owner cannot leave. Transfer ownership or delete the group."
        ),
    )
    logger.info("User %s left group %s", user_id, group_id)


@transaction.atomic
def remove_member(*, group_id: UUID, user_id: UUID) -> None:
    """
    Remove a member from a group.

    Invoked on behalf of the group owner; callers authorize the actor first.
    Cannot remove the group owner.

    Args:
        group_id: UUID of the group
        user_id: UUID of the user to remove

    Raises:
        NotMemberError: If target user is not a member
        CannotRemoveOwnerError: If trying to remove the owner
    """
    _delete_non_owner(
        group_id=group_id,
        user_id=user_id,
        owner_error=CannotRemoveOwnerError("Cannot remove the group owner"),
    )
    logger.info("User %s removed from group %s", user_id, group_id)


def get_group_members(*, group_id: UUID) -> QuerySet[GroupMembership]:
    """
    Get all members of a group, owner first.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    if not Group.objects.filter(id=group_id).exists():
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    return (
        GroupMembership.objects
        .filter(group_id=group_id)
        .select_related('user')
        .annotate(
            role_rank=Case(
                When(role=GroupRole.OWNER, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            )
        )
        .order_by('role_rank', 'joined_at')
    )
