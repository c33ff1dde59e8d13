"""
Account eligibility logic.

Provides pure functions for deciding whether a suspended account should be
deleted, without any I/O operations.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Set, Tuple

from .models import Account


def compute_cutoff(inactivity_days: int, today: Optional[date] = None) -> date:
    """Get the cutoff date for the inactivity threshold.

    Args:
        inactivity_days: Number of days without authentication
        today: Reference date, defaults to the current UTC date

    Returns:
        Accounts last authenticated strictly before this date are inactive
    """
    if today is None:
        today = datetime.now(timezone.utc).date()
    return today - timedelta(days=inactivity_days)


class AccountAnalyzer:
    """Analyzes accounts and makes deletion decisions."""

    def __init__(self, cutoff: date, exclusions: Set[str], include_never_authenticated: bool = True):
        """Initialize account analyzer.

        Args:
            cutoff: Last-authentication dates before this one are inactive
            exclusions: Emails that must never be deleted (exact match)
            include_never_authenticated: Treat accounts without any sign-in as inactive
        """
        self.cutoff = cutoff
        self.exclusions = exclusions
        self.include_never_authenticated = include_never_authenticated

    def is_inactive(self, account: Account) -> bool:
        """Check whether the account last authenticated before the cutoff."""
        if account.last_auth_at is None:
            return self.include_never_authenticated
        last_auth = account.last_auth_at.astimezone(timezone.utc).date()
        return last_auth < self.cutoff

    def is_excluded(self, account: Account) -> bool:
        return account.email in self.exclusions

    def evaluate(self, account: Account) -> Tuple[str, str]:
        """Determine whether an account should be deleted and why.

        Args:
            account: Account with details (email, last_auth_at) loaded

        Returns:
            Tuple of (action, reason), action is either "skip" or "delete"
        """
        if not account.is_suspended:
            return ("skip", f"state {account.state or 'unknown'}")

        if not self.is_inactive(account):
            return ("skip", f"active since {self.cutoff.isoformat()}")

        if self.is_excluded(account):
            return ("skip", "excluded")

        if account.last_auth_at is None:
            return ("delete", "never authenticated")
        return ("delete", f"last authenticated {account.last_auth_at.date().isoformat()}")
