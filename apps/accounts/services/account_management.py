"""Account management service: profile changes and account deletion."""

import logging
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from .exceptions import (
    EmailAlreadyRegisteredError,
    PasswordConfirmationError,
    UserNotFoundError,
)

User = get_user_model()

logger = logging.getLogger(__name__)


def _lock_active_user(user_id: UUID) -> User:
    try:
        return User.objects.active().select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")


def update_profile(
    *,
    user_id: UUID,
    display_name: Optional[str] = None,
    email: Optional[str] = None
) -> User:
    """
    Change display name and/or email.

    Raises:
        UserNotFoundError: If user doesn't exist
        EmailAlreadyRegisteredError: If the new email belongs to another account
    """
    with transaction.atomic():
        user = _lock_active_user(user_id)
        update_fields = []

        if display_name is not None:
            user.display_name = display_name
            update_fields.append('display_name')

        if email is not None:
            email = User.objects.normalize_email(email)
            if User.objects.filter(email__iexact=email).exclude(id=user_id).exists():
                raise EmailAlreadyRegisteredError("An account with this email already exists")
            user.email = email
            update_fields.append('email')

        if update_fields:
            try:
                with transaction.atomic():
                    user.save(update_fields=update_fields)
            except IntegrityError:
                # Another account claimed the email since the check
                raise EmailAlreadyRegisteredError("An account with this email already exists")

    logger.info("User %s updated profile (%s)", user_id, ', '.join(update_fields) or 'no changes')
    return user


@transaction.atomic
def delete_account(*, user_id: UUID, password: str) -> None:
    """
    Permanently delete an account.

    Posts, comments and memberships go with the user. Groups the user owns
    are deleted along with all their memberships.

    Args:
        user_id: User's ID
        password: User's password for confirmation

    Raises:
        UserNotFoundError: If user doesn't exist
        PasswordConfirmationError: If password is incorrect
    """
    user = _lock_active_user(user_id)

    if not user.check_password(password):
        raise PasswordConfirmationError("Invalid password")

    owned_groups = user.owned_groups.count()
    user.delete()
    logger.info("Deleted user %s and %d owned group(s)", user_id, owned_groups)
