#!/usr/bin/env python3
"""
Suspended 1Password user cleanup.

Usage:
  1) Install the 1Password CLI (`op`) and make sure you are an owner or admin
  2) Optionally set OP_ACCOUNT in the environment or a .env file
  3) Adjust inactivity_days and excluded_emails in config.json
  4) Run: python user_cleanup_cli.py
"""

import sys
from user_cleanup.cli import main

if __name__ == "__main__":
    sys.exit(main())
