"""Posts app services."""

from .exceptions import PostNotFoundError
from .post_management import (
    create_post,
    get_post_by_id,
    update_post,
    delete_post,
)

__all__ = [
    'PostNotFoundError',
    'create_post',
    'get_post_by_id',
    'update_post',
    'delete_post',
]
