"""
Main cleanup orchestrator.

Runs the session check, fetch, inactivity filter, confirmation and deletion
stages one after another against the 1Password CLI.
"""

from typing import Callable, List, Optional, Tuple

from .account_analyzer import AccountAnalyzer, compute_cutoff
from .callback import ProcessingCallback
from .config import ConfigManager
from .errors import InvalidTimestampError, OPCommandError
from .models import Account, DeletionReport
from .op_client import OnePasswordCLI

STATUS_NO_SUSPENDED = "no_suspended"
STATUS_NO_CANDIDATES = "no_candidates"
STATUS_DECLINED = "declined"
STATUS_COMPLETED = "completed"


def confirm_deletion(candidates: List[Account], input_func: Callable[[str], str] = input) -> bool:
    """Show the candidates and ask the operator for a y/N answer.

    Args:
        candidates: Accounts about to be deleted
        input_func: Prompt function, defaults to input()

    Returns:
        True only if the operator answered 'y' or 'Y'
    """
    print("\nThe following users will be PERMANENTLY deleted:")
    for account in candidates:
        print(f"  {account.id}  {account.email}")
    print(f"\nTotal: {len(candidates)} user(s)")

    try:
        answer = input_func(f"Delete {len(candidates)} user(s)? [y/N]: ")
    except EOFError:
        return False
    return answer.strip() in ("y", "Y")


class UserProcessor:
    """Main cleanup orchestrator."""

    def __init__(self, config_manager: ConfigManager, client: Optional[OnePasswordCLI] = None,
                 input_func: Callable[[str], str] = input, today=None):
        """Initialize user processor.

        Args:
            config_manager: Configuration manager instance
            client: 1Password CLI wrapper, built from op_settings if omitted
            input_func: Prompt function used by the confirmation gate
            today: Reference date for the cutoff, defaults to the current UTC date
        """
        self.config = config_manager.config
        self.config_manager = config_manager
        self.verbose = self.config["cleanup_settings"]["verbose"]
        self.input_func = input_func

        if client is None:
            op_settings = config_manager.get_op_settings()
            client = OnePasswordCLI(op_settings["op_path"], op_settings.get("account"))
        self.client = client

        self.inactivity_days = config_manager.get_inactivity_days()
        self.cutoff = compute_cutoff(self.inactivity_days, today)
        self.analyzer = AccountAnalyzer(
            self.cutoff,
            config_manager.load_exclusions(),
            self.config["cleanup_settings"]["include_never_authenticated"],
        )

    def ensure_session(self) -> None:
        """Make sure `op` is signed in, prompting for sign-in if needed.

        Raises:
            SignInError: If interactive sign-in fails
        """
        if self.client.is_signed_in():
            return

        print("[i] Not signed in to 1Password, starting interactive sign-in...")
        self.client.sign_in()
        if self.verbose:
            print("[i] Signed in to 1Password")

    def fetch_suspended(self) -> List[Account]:
        """Fetch all users and keep the suspended ones."""
        users = self.client.list_users()
        suspended = [user for user in users if user.is_suspended]
        if self.verbose:
            print(f"[i] {len(users)} users, {len(suspended)} suspended")
        return suspended

    def find_candidates(self, suspended: List[Account],
                        callback: Optional[ProcessingCallback] = None) -> List[Account]:
        """Load details for each suspended user and apply the eligibility rules.

        Args:
            suspended: Suspended accounts from the user list
            callback: Optional callback for progress updates

        Returns:
            Accounts eligible for deletion, in input order
        """
        if self.verbose:
            print(f"[i] Only deleting users last authenticated BEFORE {self.cutoff.isoformat()} "
                  f"(>{self.inactivity_days} days)")

        if callback:
            callback.on_stage_start("Checking inactivity", len(suspended))

        candidates = []
        for summary in suspended:
            try:
                account = self.client.get_user(summary.id)
            except (OPCommandError, InvalidTimestampError) as e:
                print(f"[!] Could not load details for {summary.describe()}: {e}")
                if callback:
                    callback.on_error(f"Could not load details for {summary.id}", str(e))
                continue

            # Detail record state wins; the list view only fills a missing one
            if not account.state:
                account.state = summary.state

            action, reason = self.analyzer.evaluate(account)
            if callback:
                callback.on_account_evaluated(action, account, reason)

            if action == "delete":
                candidates.append(account)
            elif self.verbose:
                print(f"  - SKIP ({reason}): {account.describe()}")

        return candidates

    def delete_candidates(self, candidates: List[Account],
                          callback: Optional[ProcessingCallback] = None) -> DeletionReport:
        """Delete each candidate, continuing past individual failures.

        Args:
            candidates: Confirmed accounts to delete
            callback: Optional callback for progress updates

        Returns:
            Report of deleted and failed accounts
        """
        if callback:
            callback.on_stage_start("Deleting users", len(candidates))

        report = DeletionReport()
        for account in candidates:
            try:
                self.client.delete_user(account.id)
            except OPCommandError as e:
                report.failed.append((account, str(e)))
                print(f"  - FAILED to delete {account.describe()}: {e}")
                if callback:
                    callback.on_delete_result(account, False, str(e))
                continue

            report.deleted.append(account)
            print(f"  - Deleted {account.describe()}")
            if callback:
                callback.on_delete_result(account, True)

        print("Cleanup complete.")
        if callback:
            callback.on_complete(report)
        return report

    def run(self, assume_yes: bool = False,
            callback: Optional[ProcessingCallback] = None) -> Tuple[str, DeletionReport]:
        """Run the complete cleanup process.

        Args:
            assume_yes: Skip the confirmation prompt
            callback: Optional callback object for progress updates

        Returns:
            Tuple of (status, report); status is one of the STATUS_* constants
        """
        if callback:
            callback.on_start(self.get_stats())

        report = DeletionReport()
        self.ensure_session()

        suspended = self.fetch_suspended()
        if not suspended:
            print("No suspended users found.")
            return STATUS_NO_SUSPENDED, report

        candidates = self.find_candidates(suspended, callback)
        if not candidates:
            print("No users eligible for deletion.")
            return STATUS_NO_CANDIDATES, report
        print(f"[i] Found {len(candidates)} user(s) eligible for deletion")

        if not assume_yes and not confirm_deletion(candidates, self.input_func):
            print("Aborted, no users were deleted.")
            return STATUS_DECLINED, report

        report = self.delete_candidates(candidates, callback)
        return STATUS_COMPLETED, report

    def get_stats(self) -> dict:
        """Get processing configuration.

        Returns:
            Dictionary describing the current run settings
        """
        return {
            "inactivity_days": self.inactivity_days,
            "cutoff": self.cutoff.isoformat(),
            "excluded_emails": len(self.analyzer.exclusions),
            "include_never_authenticated": self.analyzer.include_never_authenticated,
            "account": self.client.account,
        }
