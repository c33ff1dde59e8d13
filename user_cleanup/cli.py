"""
Command Line Interface for Suspended User Cleanup.

Provides the CLI entry point for the cleanup tool.
"""

import argparse
import sys

from . import __version__
from .config import ConfigManager
from .errors import CleanupError, SignInError
from .user_processor import STATUS_COMPLETED, STATUS_DECLINED, UserProcessor


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        description="Delete suspended 1Password users that have been inactive for a long time."
    )
    parser.add_argument("--config", default="config.json", help="Configuration file")
    parser.add_argument("--local-config", default="config.local.json",
                        help="Local overrides configuration file")
    parser.add_argument("--yes", action="store_true",
                        help="Do not ask for confirmation before deleting")
    return parser


def main(argv=None) -> int:
    """CLI entry point for Suspended User Cleanup."""
    args = build_parser().parse_args(argv)

    try:
        print(f"Suspended User Cleanup v{__version__}")
        print("=" * 40)

        config_manager = ConfigManager(args.config, args.local_config)
        processor = UserProcessor(config_manager)

        status, report = processor.run(assume_yes=args.yes)

        if status == STATUS_DECLINED:
            return 1
        if status != STATUS_COMPLETED:
            return 0

        print(f"\n[done] Deleted: {len(report.deleted)}")
        print(f"[done] Failed:  {len(report.failed)}")
        if report.has_failures and config_manager.get_cleanup_settings()["fail_on_delete_errors"]:
            return 2
        return 0

    except SignInError as e:
        print(f"[!] Sign-in failed: {e}")
        return 1
    except CleanupError as e:
        print(f"[!] {e}")
        return 1
    except FileNotFoundError as e:
        print(f"[!] 1Password CLI not found: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n[!] Interrupted by user")
        return 1
    except Exception as e:
        print(f"[!] Unexpected error: {e}")
        raise


if __name__ == "__main__":
    sys.exit(main())
