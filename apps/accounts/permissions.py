from rest_framework import permissions

from .memory import MemoryStore


class IsRegistrationOpen(permissions.BasePermission):
    """
    Permission: Public registration must be enabled (``site.registrable``).
    """

    message = 'Registration is currently closed.'

    def has_permission(self, request, view):
        memory = getattr(view, 'memory', None) or MemoryStore()
        return bool(memory.get('site.registrable', True))
