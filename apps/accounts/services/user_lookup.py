"""User existence and lookup, consumed by other apps before they write."""

from uuid import UUID

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError

from .exceptions import UserNotFoundError

User = get_user_model()


def user_exists(user_id: UUID) -> bool:
    """Return True if an active user with this id exists."""
    try:
        return User.objects.active().filter(id=user_id).exists()
    except (ValidationError, ValueError):
        return False


def get_user_by_id(*, user_id: UUID) -> User:
    """
    Get an active user by ID.

    Raises:
        UserNotFoundError: If user doesn't exist
    """
    try:
        return User.objects.active().get(id=user_id)
    except (User.DoesNotExist, ValidationError, ValueError):
        raise UserNotFoundError(f"User with ID {user_id} not found")
