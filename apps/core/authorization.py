"""
Ownership authorization.

One entry point decides whether a principal may mutate an existing resource.
The owner is always resolved from storage, never taken from the request.
Resource kinds form a closed set; each kind has exactly one resolver in
``_RESOLVERS``.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Union
from uuid import UUID

from django.core.exceptions import ImproperlyConfigured, ValidationError
from django.db import models

from apps.comments.models import Comment
from apps.groups.models import GroupRole
from apps.groups.services.membership_store import find_membership
from apps.posts.models import Post

from .exceptions import ForbiddenError

logger = logging.getLogger(__name__)


RESOURCE_NOT_FOUND = 'Resource not found'
NOT_A_MEMBER = 'You are not a member of this group'
OWNER_ONLY = 'Only the group owner can perform this action'


class ResourceKind(models.TextChoices):
    POST = 'post', 'Post'
    COMMENT = 'comment', 'Comment'
    GROUP = 'group', 'Group'


@dataclass(frozen=True)
class AuthorizationResult:
    allowed: bool
    reason: str = ''

    def __bool__(self):
        return self.allowed


ALLOW = AuthorizationResult(allowed=True)


def _deny(reason: str) -> AuthorizationResult:
    return AuthorizationResult(allowed=False, reason=reason)


def _same_id(left, right) -> bool:
    return str(left) == str(right)


def _authored_by(model, plural: str) -> Callable[[UUID, UUID], AuthorizationResult]:
    """Build a resolver for resources owned by their author."""

    def resolve(principal_id, resource_id) -> AuthorizationResult:
        try:
            author_id = (
                model.objects
                .filter(pk=resource_id)
                .values_list('author_id', flat=True)
                .first()
            )
        except (ValidationError, ValueError):
            # Malformed id: report it exactly like a missing row
            author_id = None

        if author_id is None:
            return _deny(RESOURCE_NOT_FOUND)
        if not _same_id(author_id, principal_id):
            return _deny(f'You can only modify your own {plural}')
        return ALLOW

    return resolve


def _group_owner(principal_id, group_id) -> AuthorizationResult:
    try:
        membership = find_membership(group_id=group_id, user_id=principal_id)
    except (ValidationError, ValueError):
        membership = None

    if membership is None:
        return _deny(NOT_A_MEMBER)
    if membership.role != GroupRole.OWNER:
        return _deny(OWNER_ONLY)
    return ALLOW


_RESOLVERS: dict[str, Callable[[UUID, UUID], AuthorizationResult]] = {
    ResourceKind.POST: _authored_by(Post, 'posts'),
    ResourceKind.COMMENT: _authored_by(Comment, 'comments'),
    ResourceKind.GROUP: _group_owner,
}

_unresolved = set(ResourceKind) - set(_RESOLVERS)
if _unresolved:
    raise ImproperlyConfigured(f"No ownership resolver for: {sorted(_unresolved)}")


def authorize(
    principal_id: UUID,
    resource_kind: Union[ResourceKind, str],
    resource_id: Union[UUID, str],
) -> AuthorizationResult:
    """
    Decide whether ``principal_id`` owns the given resource.

    Args:
        principal_id: Verified id of the acting user
        resource_kind: One of ResourceKind
        resource_id: Primary key of the post/comment/group

    Returns:
        AuthorizationResult; falsy when denied, with the reason set

    Raises:
        ValueError: If resource_kind is not a known ResourceKind
    """
    kind = ResourceKind(resource_kind)
    result = _RESOLVERS[kind](principal_id, resource_id)

    if not result.allowed:
        logger.info(
            "Denied %s %s to user %s: %s",
            kind.value, resource_id, principal_id, result.reason,
        )
    return result


def require_ownership(
    principal_id: UUID,
    resource_kind: Union[ResourceKind, str],
    resource_id: Union[UUID, str],
) -> None:
    """Raise ForbiddenError unless ``principal_id`` owns the resource."""
    result = authorize(principal_id, resource_kind, resource_id)
    if not result.allowed:
        raise ForbiddenError(result.reason)
