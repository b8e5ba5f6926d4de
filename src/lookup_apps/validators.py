"""Input validation run before any network call is made."""

import re
from typing import Any, Optional, Pattern

from pydantic import BaseModel, Field

from .errors import NetworkUnreachable, ValidationFailed


USERNAME_MAX_LENGTH = 39

# Letters and digits, with single hyphens that are neither leading nor trailing
USERNAME_PATTERN: Pattern[str] = re.compile(
    r"^[A-Za-z0-9](?:-?[A-Za-z0-9])*$"
)

USERNAME_REQUIRED_MESSAGE = "Please enter a GitHub username"
USERNAME_INVALID_MESSAGE = (
    "Please enter a valid GitHub username (letters, digits and single "
    "hyphens only, at most 39 characters)"
)
GEOLOCATION_UNSUPPORTED_MESSAGE = "Geolocation is not supported on this host."


class ValidationResult(BaseModel):
    """Result of a validation operation."""

    is_valid: bool
    value: Optional[str] = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error message."""
        self.is_valid = False
        self.errors.append(message)

    def unwrap(self) -> str:
        """Return the validated value, or raise the first error."""
        if not self.is_valid:
            raise ValidationFailed(self.errors[0])
        return self.value or ""


def validate_required(value: Any, field_name: str) -> ValidationResult:
    """Validate that a value is present."""
    result = ValidationResult(is_valid=True)

    if value is None:
        result.add_error(f"{field_name} is required")
    elif isinstance(value, str) and not value.strip():
        result.add_error(f"{field_name} cannot be empty")

    return result


def validate_length(
    value: str,
    field_name: str,
    min_length: int | None = None,
    max_length: int | None = None,
) -> ValidationResult:
    """Validate string length."""
    result = ValidationResult(is_valid=True)

    if min_length is not None and len(value) < min_length:
        result.add_error(
            f"{field_name} must be at least {min_length} characters")

    if max_length is not None and len(value) > max_length:
        result.add_error(
            f"{field_name} must be at most {max_length} characters")

    return result


def validate_username(value: Optional[str]) -> ValidationResult:
    """Validate a GitHub username.

    Empty input and malformed input are reported with different messages,
    so the user can tell a missing value from a typo.
    """
    if not validate_required(value, "username").is_valid:
        return ValidationResult(is_valid=False, errors=[USERNAME_REQUIRED_MESSAGE])

    username = value.strip()
    length = validate_length(username, "username",
                             min_length=1, max_length=USERNAME_MAX_LENGTH)

    if not length.is_valid or not USERNAME_PATTERN.fullmatch(username):
        return ValidationResult(
            is_valid=False,
            errors=[USERNAME_INVALID_MESSAGE],
            warnings=length.errors,
        )

    return ValidationResult(is_valid=True, value=username)


def require_capability(capability: Any, message: str = GEOLOCATION_UNSUPPORTED_MESSAGE) -> None:
    """Raise if an optional host capability is not available."""
    if capability is None:
        raise NetworkUnreachable(message)
