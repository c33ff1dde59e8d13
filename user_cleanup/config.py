"""
Configuration management for Suspended User Cleanup.

Handles loading and validation of configuration files with support for
local overrides and environment settings from a .env file.
"""

import copy
import json
import os
from typing import Any, Dict, Optional, Set

from dotenv import load_dotenv

from .errors import ConfigError


class ConfigManager:
    """Handles configuration loading and validation."""

    DEFAULT_CONFIG = {
        "op_settings": {
            "op_path": "op",
            "account": None
        },
        "cleanup_settings": {
            "inactivity_days": 365,
            "include_never_authenticated": True,
            "fail_on_delete_errors": False,
            "verbose": True
        },
        "exclusion_settings": {
            "exclusion_file": "exclusions.txt",
            "excluded_emails": [
                "user1@example.com"
            ]
        }
    }

    def __init__(self, config_file: str = "config.json", local_config_file: str = "config.local.json"):
        """Initialize configuration manager.

        Args:
            config_file: Main configuration file path
            local_config_file: Local overrides configuration file path
        """
        self.config_file = config_file
        self.local_config_file = local_config_file
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from files with fallback to defaults."""
        config = copy.deepcopy(self.DEFAULT_CONFIG)

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                user_config = json.load(f)
            self._merge_config(config, user_config)
        except FileNotFoundError:
            print(f"[!] {self.config_file} not found, using default configuration")
        except json.JSONDecodeError as e:
            print(f"[!] Error parsing {self.config_file}: {e}, using default configuration")

        # Load local overrides
        try:
            with open(self.local_config_file, "r", encoding="utf-8") as f:
                local_config = json.load(f)
            self._merge_config(config, local_config)
            print(f"[i] Loaded local configuration overrides from {self.local_config_file}")
        except FileNotFoundError:
            pass
        except json.JSONDecodeError as e:
            print(f"[!] Error parsing {self.local_config_file}: {e}, ignoring local config")

        self._apply_environment(config)
        return config

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        """Recursively merge configuration dictionaries.

        Args:
            base: Base configuration dictionary to merge into
            override: Override configuration dictionary to merge from
        """
        for section, values in override.items():
            if section not in base:
                base[section] = values
            elif isinstance(values, dict) and isinstance(base[section], dict):
                self._merge_config(base[section], values)
            else:
                base[section] = values

    def _apply_environment(self, config: Dict[str, Any]) -> None:
        """Apply OP_ACCOUNT / OP_PATH from the environment or a .env file."""
        load_dotenv()
        account = os.getenv("OP_ACCOUNT")
        if account:
            config["op_settings"]["account"] = account
        op_path = os.getenv("OP_PATH")
        if op_path:
            config["op_settings"]["op_path"] = op_path

    def load_exclusions(self) -> Set[str]:
        """Load excluded emails from the config and the exclusion file.

        Matching is exact, so entries are stripped but never case-folded.

        Returns:
            Set of email addresses that must never be deleted
        """
        settings = self.config["exclusion_settings"]
        items = set(e.strip() for e in settings.get("excluded_emails", []) if e and e.strip())

        exclusion_file = settings.get("exclusion_file")
        if not exclusion_file:
            return items

        try:
            with open(exclusion_file, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#"):
                        items.add(line)
        except FileNotFoundError:
            pass

        return items

    def get_inactivity_days(self) -> int:
        """Get the inactivity threshold in days.

        Raises:
            ConfigError: If the configured value is not a non-negative integer
        """
        days = self.config["cleanup_settings"]["inactivity_days"]
        if isinstance(days, bool) or not isinstance(days, int) or days < 0:
            raise ConfigError(f"inactivity_days must be a non-negative integer, got {days!r}")
        return days

    def get_op_settings(self) -> Dict[str, Optional[str]]:
        """Get 1Password CLI settings."""
        return self.config["op_settings"]

    def get_cleanup_settings(self) -> Dict[str, Any]:
        """Get cleanup processing settings."""
        return self.config["cleanup_settings"]
