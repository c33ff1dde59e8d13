"""
Exception types for Suspended User Cleanup.
"""


class CleanupError(Exception):
    """Base class for all cleanup errors."""


class OPCommandError(CleanupError):
    """Raised when an `op` command exits non-zero or returns unreadable output."""

    def __init__(self, command, returncode: int, output: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.output = output.strip()
        message = f"'{' '.join(self.command)}' failed with exit code {returncode}"
        if self.output:
            message += f": {self.output}"
        super().__init__(message)


class SignInError(CleanupError):
    """Raised when interactive sign-in to 1Password fails."""

    def __init__(self, output: str = ""):
        self.output = output.strip()
        super().__init__(self.output or "sign-in failed")


class InvalidTimestampError(CleanupError, ValueError):
    """Raised when a last-authentication timestamp cannot be parsed."""


class ConfigError(CleanupError, ValueError):
    """Raised when a configuration value is invalid."""
