"""
Role management service.

Handles ownership transfer with concurrency protection.
"""

import logging
from uuid import UUID

from django.db import transaction

from apps.core.db_errors import translate_constraint_violations
from apps.groups.models import Group, GroupMembership, GroupRole

from . import membership_store
from .exceptions import (
    AlreadyOwnerError,
    GroupNotFoundError,
    NotMemberError,
)

logger = logging.getLogger(__name__)


def transfer_ownership(*, group_id: UUID, new_owner_id: UUID) -> GroupMembership:
    """
    Hand group ownership to an existing member.

    The current owner is demoted before the new owner is promoted, so the
    one-owner-per-group constraint holds after every statement. The group's
    owner reference moves in the same transaction. Callers authorize the
    acting user as the current owner first.

    Args:
        group_id: UUID of the group
        new_owner_id: UUID of the member who becomes owner

    Returns:
        The new owner's GroupMembership

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If the target is not a member
        AlreadyOwnerError: If the target already owns the group
    """
    with translate_constraint_violations(), transaction.atomic():
        try:
            group = Group.objects.select_for_update().get(id=group_id)
        except Group.DoesNotExist:
            raise GroupNotFoundError(f"Group with ID {group_id} not found")

        target = membership_store.find_membership(
            group_id=group_id,
            user_id=new_owner_id,
            for_update=True,
        )
        if target is None:
            raise NotMemberError(f"User {new_owner_id} is not a member of this group")

        if target.role == GroupRole.OWNER:
            raise AlreadyOwnerError("User already owns this group")

        current = membership_store.find_owner(group_id=group_id, for_update=True)
        if current is not None:
            membership_store.set_role(current, GroupRole.MEMBER)

        membership_store.set_role(target, GroupRole.OWNER)

        group.owner_id = new_owner_id
        group.save(update_fields=['owner', 'updated_at'])

    logger.info(
        "Ownership of group %s transferred from user %s to user %s",
        group_id,
        current.user_id if current else None,
        new_owner_id,
    )
    return target
