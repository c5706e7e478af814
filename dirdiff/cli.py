"""Command-line interface for dirdiff."""

import argparse
import json
import logging
import sys

from .errors import DirDiffError, display_path
from .models import SyncConfig, SyncResult
from .scanner import HASH_ALGORITHMS
from .syncer import sync_trees

# Exit codes for each missing parameter, then for a failed sync
EXIT_CODES = {"srcdir": 1, "targetdir": 2, "diffdir": 3}
EXIT_SYNC_FAILED = 10


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dirdiff",
        description="Copy files that are new or changed in a source tree compared "
                    "to a target tree into a diff directory.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Changed and new files are copied to <diffdir>/<basename of targetdir>,
keeping their path relative to srcdir. Directories missing from the
target tree are created there directly.

Examples:
  %(prog)s --srcdir new/system-conf --targetdir old/system-conf --diffdir proc
  %(prog)s -v --hash xxh64 --srcdir src --targetdir target --diffdir diff
        """
    )

    parser.add_argument("--srcdir", default="", help="Source directory for comparison")
    parser.add_argument("--targetdir", default="", help="Target directory for comparison")
    parser.add_argument(
        "--diffdir",
        default="",
        help="Directory with diff files to copy to the final target"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--hash",
        choices=sorted(HASH_ALGORITHMS),
        default="sha256",
        help="Algorithm used to fingerprint file content (default: sha256)"
    )

    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress counter while walking the source tree"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the run summary as JSON"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def parse_args(argv=None) -> SyncConfig:
    """
    Parse command-line arguments into a SyncConfig.

    Exits with code 1, 2 or 3 when srcdir, targetdir or diffdir is empty.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    for name in ("srcdir", "targetdir", "diffdir"):
        if not getattr(args, name):
            print(f"Parameter '{name}' is empty.", file=sys.stderr)
            parser.print_usage(sys.stderr)
            sys.exit(EXIT_CODES[name])

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    return SyncConfig(
        source=args.srcdir,
        target=args.targetdir,
        diff_dir=args.diffdir,
        verbose=args.verbose,
        hash_algorithm=args.hash,
        show_progress=args.progress,
        json_summary=args.json,
    )


def print_summary(result: SyncResult) -> None:
    """Print the outcome of a completed run."""
    print("\n" + "=" * 60)
    print("SYNC COMPLETE!")
    print("=" * 60)
    print(f"Entries visited: {result.entries_visited}")
    print(f"Files staged: {len(result.staged)}")
    print(f"Directories created in target: {len(result.created_directories)}")
    print(f"Unchanged files: {result.unchanged}")

    failures = result.fingerprint_failures
    if failures:
        print(f"\n--- Fingerprint Errors ({len(failures)} files staged unverified) ---")
        for failure in failures[:10]:  # Show first 10
            print(f"  {display_path(failure.relative_path)}")
            print(f"    {failure.error}")
        if len(failures) > 10:
            print(f"  ... and {len(failures) - 10} more errors")
        print("-" * 20)


def main(argv=None) -> None:
    """Main entry point."""
    config = parse_args(argv)

    if config.verbose:
        print("=" * 60)
        print("DIRDIFF")
        print("=" * 60)
        print(f"Source: {display_path(config.source)}")
        print(f"Target: {display_path(config.target)}")
        print(f"Diff:   {display_path(config.diff_dir)}")
        print(f"Hash:   {config.hash_algorithm}\n")

    try:
        result = sync_trees(config)
    except DirDiffError as e:
        print("Sync process failed!", e)
        sys.exit(EXIT_SYNC_FAILED)

    if config.json_summary:
        print(json.dumps(result.to_dict(), indent=2))
    elif config.verbose:
        print_summary(result)
