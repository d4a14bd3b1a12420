"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import EmailAlreadyRegisteredError

User = get_user_model()

logger = logging.getLogger(__name__)


def register_user(
    *,
    email: str,
    password: str,
    display_name: str = ""
) -> User:
    """
    Register a new user.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        display_name: Optional display name

    Returns:
        Created User instance

    Raises:
        EmailAlreadyRegisteredError: If the email is taken
    """
    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyRegisteredError("An account with this email already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                display_name=display_name
            )
    except IntegrityError:
        # Concurrent registration with the same email
        raise EmailAlreadyRegisteredError("An account with this email already exists")

    logger.info("Registered user %s", user.id)
    return user
