"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    RoleNotFoundError,
)
from .listener import RegistrationListener, RegistrationOutcome
from .user_store import UserStore
from .user_registration import Registration

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'RoleNotFoundError',
    # Listener
    'RegistrationListener',
    'RegistrationOutcome',
    # Services
    'UserStore',
    'Registration',
]
