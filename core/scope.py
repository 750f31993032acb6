"""
Query scope: the row-level predicate enforcing ownership for a principal.

``build_scope`` returns a plain :class:`~django.db.models.Q` value so the
predicate can be inspected and tested without touching the database. Admins
get the caller-supplied filter unconstrained; restaurant owners get it ANDed
with an ownership constraint on the restaurant, reached through ``owner_path``.
"""

from django.db.models import Q

from accounts.models import Role

RESTAURANT = 'restaurant'
DISH = 'dish'

# Lookup from each resource to the owning user id and to its parent restaurant
OWNER_PATHS = {
    RESTAURANT: 'owner_id',
    DISH: 'restaurant__owner_id',
}
PARENT_PATHS = {
    RESTAURANT: None,
    DISH: 'restaurant_id',
}


class ScopeError(ValueError):
    pass


def build_scope(principal, resource, parent_id=None):
    """Build the Q predicate for ``resource`` as seen by ``principal``.

    ``parent_id`` is the caller-supplied restaurant filter; it only applies to
    resources that have a parent restaurant.
    """
    if resource not in OWNER_PATHS:
        raise ScopeError(f"Unknown resource: {resource}")

    scope = Q()

    parent_path = PARENT_PATHS[resource]
    if parent_id not in (None, '') and parent_path:
        scope &= Q(**{parent_path: parent_id})

    if principal.role == Role.ADMIN:
        return scope
    if principal.role == Role.RESTAURANT_OWNER:
        return scope & Q(**{OWNER_PATHS[resource]: principal.id})

    # Roles outside the admin surface see nothing
    return scope & Q(pk__in=[])
