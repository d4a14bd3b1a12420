"""Domain-specific exceptions for accounts services."""

from apps.core.exceptions import ConflictError, ForbiddenError, NotFoundError


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when the email belongs to an existing account."""
    default_detail = 'An account with this email already exists.'
    default_code = 'email_taken'


class UserNotFoundError(NotFoundError):
    """Raised when user does not exist."""
    default_detail = 'User not found.'
    default_code = 'user_not_found'


class PasswordConfirmationError(ForbiddenError):
    """Raised when the password given to confirm a sensitive action is wrong."""
    default_detail = 'Invalid password.'
    default_code = 'invalid_password'
