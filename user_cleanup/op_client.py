"""
1Password CLI wrapper.

Runs the `op` binary for the few operations the cleanup needs and turns its
JSON output into Account records.
"""

import json
import os
import re
import subprocess
import sys
from typing import Any, Callable, Dict, List, Optional

from .errors import OPCommandError, SignInError
from .models import Account

SESSION_EXPORT_RE = re.compile(r'export\s+(OP_SESSION_\w+)="?([^"\s]+)"?')


class OnePasswordCLI:
    """Thin, synchronous wrapper around the `op` command."""

    def __init__(self, op_path: str = "op", account: Optional[str] = None,
                 runner: Callable[..., subprocess.CompletedProcess] = subprocess.run):
        """Initialize the CLI wrapper.

        Args:
            op_path: Path or name of the `op` executable
            account: Optional account shorthand, sign-in address or ID
            runner: Callable with the signature of subprocess.run
        """
        self.op_path = op_path
        self.account = account
        self.runner = runner
        self.session_env: Dict[str, str] = {}

    def _command(self, *args: str) -> List[str]:
        command = [self.op_path, *args]
        if self.account:
            command += ["--account", self.account]
        return command

    def _env(self) -> Dict[str, str]:
        env = dict(os.environ)
        env.update(self.session_env)
        return env

    def _run(self, *args: str) -> str:
        """Run an `op` command and return its stdout.

        Raises:
            OPCommandError: If the command exits non-zero
        """
        command = self._command(*args)
        result = self.runner(command, capture_output=True, text=True, env=self._env())
        if result.returncode != 0:
            raise OPCommandError(command, result.returncode, result.stderr or result.stdout or "")
        return result.stdout or ""

    def _run_json(self, *args: str) -> Any:
        output = self._run(*args, "--format=json")
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise OPCommandError(self._command(*args, "--format=json"), 0, f"invalid JSON output: {e}")

    def is_signed_in(self) -> bool:
        """Check whether there is an authenticated `op` session."""
        try:
            self._run("whoami")
        except OPCommandError:
            return False
        return True

    def sign_in(self) -> None:
        """Sign in interactively.

        The operator's terminal stays attached to stdin so `op` can prompt
        for the password. Diagnostics on stderr are captured, echoed back to
        the terminal and carried by SignInError on failure. Session tokens
        printed on stdout by the manual sign-in flow are kept for the
        remaining calls.

        Raises:
            SignInError: If `op signin` fails
        """
        command = self._command("signin")
        try:
            result = self.runner(command, stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                                 text=True, env=self._env())
        except OSError as e:
            raise SignInError(str(e))

        output = result.stdout or ""
        errors = result.stderr or ""
        if errors:
            sys.stderr.write(errors)
        if result.returncode != 0:
            raise SignInError(errors.strip() or output or
                              f"op signin exited with code {result.returncode}")

        for name, token in SESSION_EXPORT_RE.findall(output):
            self.session_env[name] = token

    def list_users(self) -> List[Account]:
        """List every user in the account (single call, no paging)."""
        records = self._run_json("user", "list")
        return [Account.from_json(record) for record in records or []]

    def get_user(self, user_id: str) -> Account:
        """Fetch the full record of a single user."""
        return Account.from_json(self._run_json("user", "get", user_id))

    def delete_user(self, user_id: str) -> None:
        """Permanently delete a user.

        Raises:
            OPCommandError: If `op` reports a failure
        """
        self._run("user", "delete", user_id)
