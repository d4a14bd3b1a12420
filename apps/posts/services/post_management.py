"""Post management service - CRUD operations for posts."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.accounts.services import UserNotFoundError, user_exists
from apps.posts.models import Post

from .exceptions import PostNotFoundError

logger = logging.getLogger(__name__)


def create_post(*, author_id: UUID, title: str, content: str) -> Post:
    """
    Create a post for an existing user.

    Raises:
        UserNotFoundError: If the author doesn't exist
    """
    if not user_exists(author_id):
        raise UserNotFoundError(f"User with ID {author_id} not found")

    post = Post.objects.create(author_id=author_id, title=title, content=content)
    logger.info("Post %s created by user %s", post.id, author_id)
    return post


def get_post_by_id(*, post_id: UUID) -> Post:
    """
    Get a post with its author.

    Raises:
        PostNotFoundError: If post doesn't exist
    """
    try:
        return Post.objects.select_related('author').get(id=post_id)
    except Post.DoesNotExist:
        raise PostNotFoundError(f"Post with ID {post_id} not found")


@transaction.atomic
def update_post(
    *,
    post_id: UUID,
    title: Optional[str] = None,
    content: Optional[str] = None
) -> Post:
    """
    Update title and/or content. Callers authorize the author first.

    Raises:
        PostNotFoundError: If post doesn't exist
    """
    try:
        post = Post.objects.select_for_update().get(id=post_id)
    except Post.DoesNotExist:
        raise PostNotFoundError(f"Post with ID {post_id} not found")

    update_fields = ['updated_at']

    if title is not None:
        post.title = title
        update_fields.append('title')

    if content is not None:
        post.content = content
        update_fields.append('content')

    post.save(update_fields=update_fields)
    return post


def delete_post(*, post_id: UUID) -> None:
    """
    Delete a post and, by cascade, its comments.

    Raises:
        PostNotFoundError: If post doesn't exist
    """
    deleted, _ = Post.objects.filter(id=post_id).delete()
    if not deleted:
        raise PostNotFoundError(f"Post with ID {post_id} not found")
    logger.info("Post %s deleted", post_id)
