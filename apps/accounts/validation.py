"""Rule-set based validation of account input."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .serializers import UserRegistrationSerializer


@dataclass
class ValidationResult:
    ok: bool
    errors: Dict[str, List[str]] = field(default_factory=dict)
    cleaned: Dict[str, Any] = field(default_factory=dict)

    def fails(self) -> bool:
        return not self.ok


class AccountValidator:
    """
    Validate account input against a named rule set.

    Each rule set maps to a DRF serializer; field errors are returned as
    plain lists of strings keyed by field name.
    """

    rulesets = {
        'register': UserRegistrationSerializer,
    }

    def validate(self, ruleset: str, data: dict) -> ValidationResult:
        try:
            serializer_class = self.rulesets[ruleset]
        except KeyError:
            raise ValueError(f"Unknown validation rule set: {ruleset}")

        serializer = serializer_class(data=data)

        if not serializer.is_valid():
            errors = {
                name: [str(message) for message in messages]
                for name, messages in serializer.errors.items()
            }
            return ValidationResult(ok=False, errors=errors)

        return ValidationResult(ok=True, cleaned=dict(serializer.validated_data))
