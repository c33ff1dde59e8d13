"""
Callback interface for Suspended User Cleanup.

Lets callers observe the cleanup stages without parsing console output.
"""

from typing import Any, Dict

from .models import Account, DeletionReport


class ProcessingCallback:
    """Callback interface for progress updates."""

    def on_start(self, stats: Dict[str, Any]) -> None:
        """Called when processing starts."""
        pass

    def on_stage_start(self, stage: str, total_items: int) -> None:
        """Called when starting a processing stage."""
        pass

    def on_account_evaluated(self, action: str, account: Account, reason: str) -> None:
        """Called when a suspended account has been checked for eligibility."""
        pass

    def on_delete_result(self, account: Account, success: bool, error: str = "") -> None:
        """Called after each delete attempt."""
        pass

    def on_complete(self, report: DeletionReport) -> None:
        """Called when the deletion stage is complete."""
        pass

    def on_error(self, error: str, details: str = "") -> None:
        """Called when an error occurs."""
        pass
