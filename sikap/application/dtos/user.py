"""DTOs for user lookups."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserResult:
    """User read-model."""

    id: str
    username: str
    email: str | None
    is_active: bool
