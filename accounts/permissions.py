from rest_framework import permissions

from .models import Role
from .principal import Principal

ADMIN_SURFACE = frozenset({Role.ADMIN, Role.RESTAURANT_OWNER})
ADMIN_ONLY = frozenset({Role.ADMIN})


def resolve_principal(request):
    """Return the request's Principal, building it once if auth did not."""
    principal = getattr(request, 'principal', None)
    if principal is None:
        principal = Principal.from_user(request.user)
        request.principal = principal
    return principal


class HasCapability(permissions.BasePermission):
    """Grant access when the principal's role is in the view's capability table.

    Views declare ``capabilities``: a mapping of action name to the set of
    roles allowed to perform it. Actions missing from the table fall back to
    ``default_capability``.
    """

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        principal = resolve_principal(request)
        allowed = getattr(view, 'capabilities', {}).get(
            getattr(view, 'action', None),
            getattr(view, 'default_capability', ADMIN_SURFACE))
        return principal.role in allowed


class IsAdminUser(permissions.BasePermission):
    """Allow access only to admin users"""

    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.role == Role.ADMIN


class IsAdminOrRestaurantOwner(permissions.BasePermission):
    """Allow access to admins and restaurant owners"""

    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.role in ADMIN_SURFACE
