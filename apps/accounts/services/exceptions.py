"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    pass


class RoleNotFoundError(AccountsServiceError):
    """Raised when a role id has no matching role."""
    pass
