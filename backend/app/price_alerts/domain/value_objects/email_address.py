"""EmailAddress value object for validated, normalized email storage."""

import re
from dataclasses import dataclass


_EMAIL_PATTERN = re.compile(
    r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$"
)


def normalize_email(raw: str) -> str:
    """Trim and lowercase an address without validating it."""
    return (raw or "").strip().lower()


@dataclass(frozen=True)
class EmailAddress:
    """Immutable value object representing a validated email address.

    The stored value is always trimmed and lowercased so that cache keys and
    store lookups agree on a single spelling per mailbox.

    Attributes:
        value: The normalized email address string.
    """

    value: str

    def __post_init__(self) -> None:
        normalized = normalize_email(self.value)
        if not _EMAIL_PATTERN.match(normalized):
            raise ValueError(f"Invalid email address: {self.value!r}")
        object.__setattr__(self, "value", normalized)

    @classmethod
    def parse(cls, raw: str) -> "EmailAddress | None":
        """Build an address, returning None instead of raising."""
        try:
            return cls(raw)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value
