"""Input validation for deck topics."""
from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_MAX_LENGTH = 2000


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None


def validate_text(value: Any, max_length: int = DEFAULT_MAX_LENGTH) -> ValidationResult:
    """Check that a topic is a non-blank string of at most `max_length` characters."""
    if not isinstance(value, str):
        return ValidationResult(False, "Input must be a string")
    if not value.strip():
        return ValidationResult(False, "Input cannot be empty")
    if len(value) > max_length:
        return ValidationResult(False, f"Input exceeds maximum length of {max_length} characters")
    return ValidationResult(True)
