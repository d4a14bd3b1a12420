"""Comments app services."""

from .exceptions import CommentNotFoundError
from .comment_management import (
    create_comment,
    get_comment_by_id,
    update_comment,
    delete_comment,
)

__all__ = [
    'CommentNotFoundError',
    'create_comment',
    'get_comment_by_id',
    'update_comment',
    'delete_comment',
]
