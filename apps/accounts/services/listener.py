"""Callback interface the registration workflow reports to."""

from enum import Enum
from typing import Any, Dict, List, Protocol


class RegistrationOutcome(str, Enum):
    FORM_RENDERED = 'form_rendered'
    VALIDATION_FAILED = 'validation_failed'
    CREATED = 'created'
    CREATED_WITHOUT_NOTIFICATION = 'created_without_notification'
    CREATION_FAILED = 'creation_failed'


class RegistrationListener(Protocol):
    """
    Presentation-side receiver of registration outcomes.

    Exactly one of these is called per request and its return value is
    passed back to the caller unchanged.
    """

    def index_succeed(self, data: Dict[str, Any]) -> Any:
        ...

    def create_validation_failed(self, errors: Dict[str, List[str]]) -> Any:
        ...

    def create_failed(self, data: Dict[str, str]) -> Any:
        ...

    def create_succeed(self) -> Any:
        ...

    def create_succeed_without_notification(self) -> Any:
        ...
