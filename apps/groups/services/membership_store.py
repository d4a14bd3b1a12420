"""
Membership store.

Storage-facing access to GroupMembership rows. No business rules live here:
callers decide what to write, and constraint violations surface as the
original IntegrityError.
"""

from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.groups.models import GroupMembership, GroupRole


def find_membership(
    *,
    group_id: UUID,
    user_id: UUID,
    for_update: bool = False
) -> Optional[GroupMembership]:
    """Return the membership for (group, user), or None."""
    queryset = GroupMembership.objects.all()
    if for_update:
        queryset = queryset.select_for_update()
    return queryset.filter(group_id=group_id, user_id=user_id).first()


def find_owner(*, group_id: UUID, for_update: bool = False) -> Optional[GroupMembership]:
    """Return the owner membership of a group, or None."""
    queryset = GroupMembership.objects.all()
    if for_update:
        queryset = queryset.select_for_update()
    return queryset.filter(group_id=group_id, role=GroupRole.OWNER).first()


def insert_membership(
    *,
    group_id: UUID,
    user_id: UUID,
    role: str = GroupRole.MEMBER
) -> GroupMembership:
    """
    Insert a membership row.

    Runs in a savepoint so a rejected insert leaves the caller's transaction
    usable.

    Raises:
        IntegrityError: If storage rejects the row (duplicate pair, second
            owner, missing group or user)
    """
    with transaction.atomic():
        return GroupMembership.objects.create(
            group_id=group_id,
            user_id=user_id,
            role=role,
        )


def delete_membership(*, group_id: UUID, user_id: UUID) -> bool:
    """Delete the membership for (group, user). Returns True if a row was removed."""
    deleted, _ = GroupMembership.objects.filter(group_id=group_id, user_id=user_id).delete()
    return deleted > 0


def set_role(membership: GroupMembership, role: str) -> GroupMembership:
    """Persist a role change on an existing membership."""
    with transaction.atomic():
        membership.role = role
        membership.save(update_fields=['role'])
    return membership


def count_owners(*, group_id: UUID) -> int:
    """Number of owner rows for a group. Used for verification only."""
    return GroupMembership.objects.filter(group_id=group_id, role=GroupRole.OWNER).count()
