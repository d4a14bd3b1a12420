"""
Group management service.

Handles group create/rename/delete with proper transaction safety.
Callers authorize the acting user before rename and delete.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Prefetch, QuerySet

from apps.accounts.services import user_exists
from apps.core.db_errors import translate_constraint_violations
from apps.groups.models import Group, GroupMembership, GroupRole

from . import membership_store
from .exceptions import (
    DuplicateGroupNameError,
    GroupNotFoundError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


def create_group(
    *,
    creator_id: UUID,
    name: str,
    description: str = ''
) -> Group:
    """
    Create a new group and add the creator as owner.

    This is a multi-step operation wrapped in a transaction:
    1. Create the group
    2. Create owner membership

    If either write fails, nothing is persisted. Two creators racing on the
    same name are settled by the unique constraint on the name.

    Args:
        creator_id: UUID of the user who will own the group
        name: Group name (globally unique)
        description: Optional group description

    Returns:
        Created Group instance

    Raises:
        UserNotFoundError: If creator does not exist
        ConflictError: If the name is already taken
    """
    if not user_exists(creator_id):
        raise UserNotFoundError(f"User with ID {creator_id} not found")

    with translate_constraint_violations(), transaction.atomic():
        if Group.objects.filter(name=name).exists():
            raise DuplicateGroupNameError("Group name already exists")

        group = Group.objects.create(name=name, description=description, owner_id=creator_id)
        membership_store.insert_membership(
            group_id=group.id,
            user_id=creator_id,
            role=GroupRole.OWNER,
        )

    logger.info("Group %s (%s) created by user %s", group.id, group.name, creator_id)
    return group


def get_group_by_id(*, group_id: UUID) -> Group:
    """
    Get a group by ID with its memberships prefetched.

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


def get_user_groups(*, user_id: UUID) -> QuerySet[Group]:
    """Groups the user belongs to, in any role."""
    return (
        Group.objects
        .filter(memberships__user_id=user_id)
        .select_related('owner')
        .prefetch_related('memberships')
        .distinct()
    )


def rename_group(
    *,
    group_id: UUID,
    name: Optional[str] = None,
    description: Optional[str] = None
) -> Group:
    """
    Update group name and/or description.

    Uses select_for_update to prevent concurrent modifications.

    Args:
        group_id: UUID of the group
        name: New name (optional)
        description: New description (optional)

    Returns:
        Updated Group instance

    Raises:
        ValueError: If neither field is given
        GroupNotFoundError: If group doesn't exist
        ConflictError: If the new name belongs to another group
    """
    if name is None and description is None:
        raise ValueError("Provide a new name or description")

    with translate_constraint_violations(), transaction.atomic():
        try:
            group = Group.objects.select_for_update().get(id=group_id)
        except Group.DoesNotExist:
            raise GroupNotFoundError(f"Group with ID {group_id} not found")

        update_fields = ['updated_at']

        if name is not None and name != group.name:
            if Group.objects.filter(name=name).exclude(id=group_id).exists():
                raise DuplicateGroupNameError("Group name already exists")
            group.name = name
            update_fields.append('name')

        if description is not None:
            group.description = description
            update_fields.append('description')

        group.save(update_fields=update_fields)

    logger.info("Group %s updated (%s)", group_id, ', '.join(update_fields[1:]) or 'no changes')
    return group


@transaction.atomic
def delete_group(*, group_id: UUID) -> None:
    """
    Delete a group.

    Cascading deletes remove all memberships.

    Args:
        group_id: UUID of the group

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        group = Group.objects.select_for_update().get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    group.delete()
    logger.info("Group %s deleted", group_id)
