"""
Material migration script.

Moves legacy materials onto base products and product variants without
going through the API.

Usage:
    # Migrate everything, 50 at a time
    python scripts/migrate_materials.py --user-id <uuid> --batch-size 50

    # Retry specific materials, overwriting variants that already exist
    python scripts/migrate_materials.py --user-id <uuid> \
        --ids 0b8f...,91c2... --force

Ctrl+C stops after the material in progress and still prints the summary.
"""

import argparse
import os
import signal
import sys
import threading
from typing import Optional

# Allow imports from the project root when running as a script
_root_dir = os.path.join(os.path.dirname(__file__), "..")
sys.path.insert(0, _root_dir)

from dotenv import load_dotenv
load_dotenv(os.path.join(_root_dir, ".env"))

from config import settings
from models.migration import BulkMigrationResult
from services.migration_service import get_migration_service


def parse_ids(raw: Optional[str]) -> Optional[list[str]]:
    """Split a comma-separated id list; None or blank means all materials."""
    if not raw or not raw.strip():
        return None
    return [part.strip() for part in raw.split(",") if part.strip()]


def print_summary(result: BulkMigrationResult) -> None:
    print()
    print("=" * 60)
    print(f"Selected:    {result.total_processed}")
    print(f"Successful:  {result.successful_migrations}")
    print(f"Failed:      {result.failed_migrations}")
    if result.cancelled:
        print("Run was cancelled before finishing.")
    if result.stopped_on_error:
        print("Run stopped after a batch with failures.")
    print("=" * 60)

    failures = [r for r in result.results if not r.success]
    for r in failures:
        print(f"  FAILED {r.material_id}: [{r.error_code.value}] {r.error_message}")


def main():
    parser = argparse.ArgumentParser(
        description="Migrate legacy materials to base products and product variants."
    )
    parser.add_argument(
        "--user-id",
        required=True,
        help="User the migration runs as (recorded in logs)"
    )
    parser.add_argument(
        "--ids",
        help="Comma-separated material ids (default: all materials)"
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=settings.migration_default_batch_size,
        help=f"Materials per batch (default: {settings.migration_default_batch_size})"
    )
    parser.add_argument(
        "--stop-on-error",
        action="store_true",
        help="Stop after the first batch that contains a failure"
    )
    parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Skip material data checks"
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Migrate invalid materials and overwrite existing variants"
    )
    args = parser.parse_args()

    if args.batch_size <= 0:
        parser.error("--batch-size must be greater than 0")

    cancel_event = threading.Event()

    def _handle_sigint(signum, frame):
        print("\nCancelling after the current material...")
        cancel_event.set()

    signal.signal(signal.SIGINT, _handle_sigint)

    service = get_migration_service()
    result = service.bulk_migrate(
        user_id=args.user_id,
        material_ids=parse_ids(args.ids),
        batch_size=args.batch_size,
        continue_on_error=not args.stop_on_error,
        skip_validation=args.skip_validation,
        force_migration=args.force,
        cancel_event=cancel_event
    )

    print_summary(result)
    sys.exit(1 if result.failed_migrations else 0)


if __name__ == "__main__":
    main()
