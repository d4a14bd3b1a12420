"""Domain exceptions for posts app."""

from apps.core.exceptions import NotFoundError


class PostNotFoundError(NotFoundError):
    """Post does not exist."""
    default_detail = 'Post not found.'
    default_code = 'post_not_found'
