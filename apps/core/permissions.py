from rest_framework import permissions

from .authorization import authorize


class IsResourceOwner(permissions.BasePermission):
    """
    Permission: User must own the resource addressed by the URL.

    The view declares ``ownership_kind`` (a ResourceKind); the resource id is
    read from the view's lookup kwarg. Ownership is resolved from storage.
    """

    message = 'You do not have permission to perform this action.'

    def has_permission(self, request, view):
        kind = getattr(view, 'ownership_kind', None)
        if kind is None:
            return True

        lookup_kwarg = getattr(view, 'lookup_url_kwarg', None) or getattr(view, 'lookup_field', 'pk')
        resource_id = view.kwargs.get(lookup_kwarg)

        result = authorize(request.user.id, kind, resource_id)
        if not result.allowed:
            self.message = result.reason
        return result.allowed
