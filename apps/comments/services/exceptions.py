"""Domain exceptions for comments app."""

from apps.core.exceptions import NotFoundError


class CommentNotFoundError(NotFoundError):
    """Comment does not exist."""
    default_detail = 'Comment not found.'
    default_code = 'comment_not_found'
