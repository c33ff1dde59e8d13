"""
Account records returned by the 1Password CLI.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidTimestampError

STATE_ACTIVE = "ACTIVE"
STATE_SUSPENDED = "SUSPENDED"

# `op` reports users that never signed in with the zero timestamp
NEVER_AUTHENTICATED = ("", "0001-01-01T00:00:00Z", "0001-01-01T00:00:00+00:00")


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp as reported by `op`.

    Args:
        value: Raw timestamp string, e.g. "2022-01-01T10:00:00Z" or "2022-01-01"

    Returns:
        Timezone-aware datetime, or None if the user never authenticated
    """
    if value is None:
        return None
    value = value.strip()
    if value in NEVER_AUTHENTICATED:
        return None

    raw = value[:-1] + "+00:00" if value.endswith("Z") else value
    # Nanosecond precision is trimmed to what fromisoformat accepts
    if "." in raw:
        head, _, tail = raw.partition(".")
        digits = ""
        while tail and tail[0].isdigit():
            digits, tail = digits + tail[0], tail[1:]
        raw = f"{head}.{digits[:6].ljust(6, '0')}{tail}"

    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        raise InvalidTimestampError(f"Unrecognised timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class Account:
    """A 1Password user account."""

    def __init__(self, id: str, email: str = "", state: str = "", name: str = "",
                 last_auth_at: Optional[datetime] = None):
        self.id = id
        self.email = email
        self.state = state
        self.name = name
        self.last_auth_at = last_auth_at

    @classmethod
    def from_json(cls, record: Dict[str, Any]) -> "Account":
        """Build an account from a `op user list`/`op user get` JSON record."""
        return cls(
            id=record["id"],
            email=record.get("email") or "",
            state=(record.get("state") or "").upper(),
            name=record.get("name") or "",
            last_auth_at=parse_timestamp(record.get("last_auth_at")),
        )

    @property
    def is_suspended(self) -> bool:
        return self.state == STATE_SUSPENDED

    def describe(self) -> str:
        """Short human-readable label used in console output."""
        return f"{self.id} ({self.email or 'no email'})"

    def __repr__(self):
        return f"Account(id={self.id!r}, email={self.email!r}, state={self.state!r})"


class DeletionReport:
    """Outcome of the deletion stage."""

    def __init__(self):
        self.deleted: List[Account] = []
        self.failed: List[Tuple[Account, str]] = []

    @property
    def attempted(self) -> int:
        return len(self.deleted) + len(self.failed)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)
