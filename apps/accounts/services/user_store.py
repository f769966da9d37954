"""User persistence used by the registration workflow."""

from typing import Iterable

from django.db import transaction

from ..models import Role, User
from .exceptions import RoleNotFoundError


class UserStore:
    """
    Thin ORM wrapper for creating users.

    ``save`` and ``set_roles`` do not open transactions themselves; wrap
    them in ``atomic()`` to make them one unit.
    """

    def new_empty(self) -> User:
        return User()

    def atomic(self):
        return transaction.atomic()

    def save(self, user: User) -> None:
        """
        Validate model constraints and persist.

        Raises:
            django.core.exceptions.ValidationError: If a field is invalid
            django.db.IntegrityError: If the email is already taken
        """
        user.full_clean(exclude=['last_login'])
        user.save()

    def set_roles(self, user: User, role_ids: Iterable[int]) -> None:
        """
        Replace the user's roles with exactly ``role_ids``.

        Raises:
            RoleNotFoundError: If any of the ids has no role row
        """
        role_ids = set(role_ids)
        roles = list(Role.objects.filter(id__in=role_ids))

        missing = role_ids - {role.id for role in roles}
        if missing:
            raise RoleNotFoundError(f"Role(s) not found: {sorted(missing)}")

        user.roles.set(roles)
