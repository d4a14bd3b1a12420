"""Services for accounts business logic."""

from .exceptions import (
    EmailAlreadyRegisteredError,
    PasswordConfirmationError,
    UserNotFoundError,
)
from .user_registration import register_user
from .user_lookup import user_exists, get_user_by_id
from .account_management import update_profile, delete_account

__all__ = [
    # Exceptions
    'EmailAlreadyRegisteredError',
    'PasswordConfirmationError',
    'UserNotFoundError',
    # Services
    'register_user',
    'user_exists',
    'get_user_by_id',
    'update_profile',
    'delete_account',
]
