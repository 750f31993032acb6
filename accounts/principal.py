from dataclasses import dataclass

from .models import Role


@dataclass(frozen=True)
class Principal:
    """The authenticated actor of a request, resolved once from its token."""
    id: int
    role: Role

    @classmethod
    def from_user(cls, user):
        return cls(id=user.pk, role=Role(user.role))

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    @property
    def is_restaurant_owner(self):
        return self.role == Role.RESTAURANT_OWNER
