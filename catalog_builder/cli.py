"""Command-line interface for the catalog builder."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add parent directory to path to allow imports when run as script
sys.path.insert(0, str(Path(__file__).parent.parent))

__all__ = ["main", "parse_args", "run_build", "show_stats"]

from catalog_builder.builder import build_catalog
from catalog_builder.config import (
    API_BASE,
    BUCKET_NAME,
    CONTENT_DIR,
    SNAPSHOT_PATH,
    UPLOAD_SCRIPT_FORMAT,
    UPLOAD_SCRIPT_PATH,
    BuildSettings,
)
from catalog_builder.logging_config import setup_logging
from catalog_builder.models import BuildReport
from catalog_builder.stats import format_summary, summarize_snapshot
from catalog_builder.writers import (
    SCRIPT_FORMATS,
    load_snapshot,
    write_snapshot,
    write_upload_script,
)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build the product catalog snapshot and image upload script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build with the configured paths
  python -m catalog_builder.cli

  # Build from another content tree and emit a POSIX upload script
  python -m catalog_builder.cli --content-dir ../site/content/products \\
      --upload-script data/upload-assets.sh --script-format sh

  # See what would be built without writing anything
  python -m catalog_builder.cli --dry-run

  # Summarize an existing snapshot
  python -m catalog_builder.cli --stats data/products.json
        """,
    )

    parser.add_argument(
        "--content-dir",
        default=CONTENT_DIR,
        help=f"Directory with one folder per product (default: {CONTENT_DIR})",
    )
    parser.add_argument(
        "--snapshot",
        default=SNAPSHOT_PATH,
        help=f"Output catalog JSON (default: {SNAPSHOT_PATH})",
    )
    parser.add_argument(
        "--upload-script",
        default=UPLOAD_SCRIPT_PATH,
        help=f"Output upload script (default: {UPLOAD_SCRIPT_PATH})",
    )
    parser.add_argument(
        "--script-format",
        choices=SCRIPT_FORMATS,
        default=UPLOAD_SCRIPT_FORMAT,
        help=f"Upload script flavour (default: {UPLOAD_SCRIPT_FORMAT})",
    )
    parser.add_argument(
        "--api-base",
        default=API_BASE,
        help=f"Base URL image links point at (default: {API_BASE})",
    )
    parser.add_argument(
        "--bucket",
        default=BUCKET_NAME,
        help=f"Blob storage bucket for uploads (default: {BUCKET_NAME})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build and report without writing the snapshot or upload script",
    )
    parser.add_argument(
        "--stats",
        metavar="SNAPSHOT",
        help="Print a per-category summary of an existing snapshot and exit",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show per-product debug output",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Don't write the JSONL build log",
    )

    return parser.parse_args(argv)


def show_stats(snapshot_path: str) -> None:
    """Display snapshot statistics."""
    entries = load_snapshot(snapshot_path)

    print(f"\n{'='*50}")
    print(f"Snapshot: {snapshot_path}")
    print(f"{'='*50}\n")
    print(format_summary(summarize_snapshot(entries)))
    print()


def run_build(args: argparse.Namespace) -> BuildReport:
    """Build the catalog and write its outputs unless this is a dry run."""
    settings = BuildSettings(api_base=args.api_base, bucket=args.bucket)
    report = build_catalog(args.content_dir, settings)

    if not args.dry_run:
        write_snapshot(report.entries, args.snapshot)
        write_upload_script(report.directives, args.upload_script, args.script_format)

    print(f"\n- Synced {len(report.entries)} products.")
    print(f"- Queued {len(report.directives)} images for upload.")
    if report.errors:
        print(f"- Skipped {len(report.errors)} products:")
        for error in report.errors:
            print(f"    {error.slug}: {error.message}")

    if args.dry_run:
        print("\nDry run: nothing written.")
    else:
        print(f"\nSnapshot: {args.snapshot}")
        print(f"Upload script: {args.upload_script}")
        print("\nFinal step: run the upload script, then deploy the API.")
    return report


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for CLI."""
    args = parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=not args.no_log_file,
    )

    if args.stats:
        show_stats(args.stats)
        return

    if not Path(args.content_dir).is_dir():
        print(f"Error: content directory not found: {args.content_dir}", file=sys.stderr)
        sys.exit(1)

    run_build(args)


if __name__ == "__main__":
    main()
