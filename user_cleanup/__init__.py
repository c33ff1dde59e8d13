"""
Suspended User Cleanup Package

Deletes long-inactive, suspended 1Password users through the `op` CLI.
"""

__version__ = "1.0.0"

from .account_analyzer import AccountAnalyzer, compute_cutoff
from .config import ConfigManager
from .models import Account, DeletionReport
from .op_client import OnePasswordCLI
from .user_processor import UserProcessor, confirm_deletion

__all__ = [
    "Account",
    "AccountAnalyzer",
    "ConfigManager",
    "DeletionReport",
    "OnePasswordCLI",
    "UserProcessor",
    "compute_cutoff",
    "confirm_deletion",
]
