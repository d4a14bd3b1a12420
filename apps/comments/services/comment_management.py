"""Comment management service - CRUD operations for comments."""

import logging
from uuid import UUID

from django.db import transaction

from apps.accounts.services import UserNotFoundError, user_exists
from apps.comments.models import Comment
from apps.posts.models import Post
from apps.posts.services import PostNotFoundError

from .exceptions import CommentNotFoundError

logger = logging.getLogger(__name__)


def create_comment(*, author_id: UUID, post_id: UUID, content: str) -> Comment:
    """
    Comment on an existing post.

    Raises:
        UserNotFoundError: If the author doesn't exist
        PostNotFoundError: If the post doesn't exist
    """
    if not user_exists(author_id):
        raise UserNotFoundError(f"User with ID {author_id} not found")

    if not Post.objects.filter(id=post_id).exists():
        raise PostNotFoundError(f"Post with ID {post_id} not found")

    comment = Comment.objects.create(author_id=author_id, post_id=post_id, content=content)
    logger.info("Comment %s created on post %s by user %s", comment.id, post_id, author_id)
    return comment


def get_comment_by_id(*, comment_id: UUID) -> Comment:
    """
    Get a comment with its author and post.

    Raises:
        CommentNotFoundError: If comment doesn't exist
    """
    try:
        return Comment.objects.select_related('author', 'post').get(id=comment_id)
    except Comment.DoesNotExist:
        raise CommentNotFoundError(f"Comment with ID {comment_id} not found")


@transaction.atomic
def update_comment(*, comment_id: UUID, content: str) -> Comment:
    """
    Replace the comment text. Callers authorize the author first.

    Raises:
        CommentNotFoundError: If comment doesn't exist
    """
    try:
        comment = Comment.objects.select_for_update().get(id=comment_id)
    except Comment.DoesNotExist:
        raise CommentNotFoundError(f"Comment with ID {comment_id} not found")

    comment.content = content
    comment.save(update_fields=['content', 'updated_at'])
    return comment


def delete_comment(*, comment_id: UUID) -> None:
    """
    Delete a comment.

    Raises:
        CommentNotFoundError: If comment doesn't exist
    """
    deleted, _ = Comment.objects.filter(id=comment_id).delete()
    if not deleted:
        raise CommentNotFoundError(f"Comment with ID {comment_id} not found")
    logger.info("Comment %s deleted", comment_id)
