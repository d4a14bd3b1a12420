"""
Domain exceptions shared by every app.

These are DRF APIExceptions so a view that lets them propagate renders the
matching HTTP status. App-specific errors subclass one of the three kinds
below, which lets callers catch either the precise error or the generic kind.
"""
from rest_framework.exceptions import APIException


class DomainError(APIException):
    """Base exception for business rule violations."""
    status_code = 400
    default_detail = 'The request violates a business rule.'
    default_code = 'domain_error'


class NotFoundError(DomainError):
    """Referenced group, user, membership or resource is absent."""
    status_code = 404
    default_detail = 'Not found.'
    default_code = 'not_found'


class ConflictError(DomainError):
    """Write collides with existing state (duplicate name, duplicate membership)."""
    status_code = 409
    default_detail = 'Conflict with existing state.'
    default_code = 'conflict'


class ForbiddenError(DomainError):
    """Owner-protected action attempted by a non-owner."""
    status_code = 403
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'forbidden'
