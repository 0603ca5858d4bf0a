#!/usr/bin/env python3
"""
Duplex CLI — find duplicate files, mark them with rules and delete them.
Runs the interactive review loop by default, or deletes matches directly with --automatic.
At least one copy of every file is always kept.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import sys
import time
from typing import List, Optional, NoReturn

from duplex.core.models import DuplexParams, GroupCollection, HashAlgorithmName
from duplex.core.rules import RuleSet
from duplex.core.scanner import validate_search_folders
from duplex.core.stats import total_stats
from duplex.core.errors import DuplexError, RuleError
from duplex.commands import DeduplicationCommand
from duplex.services.deletion_service import DeletionExecutor
from duplex.interactive import display
from duplex.interactive.navigator import InteractiveNavigator
from duplex.interactive.session import ReviewSession, confirm_prompt
from duplex.utils.convert_utils import ConvertUtils
from duplex.aliases import HASH_ALIASES, HASH_CHOICES, HASH_HELP_TEXT, DESCRIPTION, EPILOG_TEXT

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self._last_progress: float = 0.0

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        sys.stdout.reconfigure(encoding='utf-8')
        sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="duplex",
            description=DESCRIPTION,
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Search targets
        parser.add_argument(
            "paths",
            nargs="*",
            default=[],
            help="Recursive search folders (same as --rfolder)"
        )
        parser.add_argument(
            "--rfolder", "-r",
            action="append",
            default=[],
            metavar="DIR",
            help="Add recursive search folder"
        )
        parser.add_argument(
            "--folder", "-f",
            action="append",
            default=[],
            metavar="DIR",
            help="Add search folder (files directly inside it only)"
        )
        parser.add_argument(
            "--md5list", "-m",
            action="append",
            default=[],
            metavar="FILE",
            help="Add md5 list file (output from md5deep -zr)"
        )

        # Rules and actions
        parser.add_argument(
            "--rule", "-u",
            action="append",
            default=[],
            metavar="REGEX",
            help="Add marking rule (case insensitive regex)"
        )
        parser.add_argument(
            "--automatic", "-a",
            action="store_true",
            help="Don't enter interactive mode (delete without confirmation)"
        )
        parser.add_argument(
            "--dry-run", "-d",
            action="store_true",
            dest="dry_run",
            help="Don't delete anything, just simulate"
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="Move deleted files to the system trash instead of removing them"
        )

        # Filtering options
        parser.add_argument(
            "--filter-small", "-s",
            default=None,
            type=str,
            metavar="SIZE",
            dest="filter_small",
            help="Ignore files of this size and smaller (e.g., 1000, 4K, 1.5MB)"
        )
        parser.add_argument(
            "--filter-large", "-b",
            default=None,
            type=str,
            metavar="SIZE",
            dest="filter_large",
            help="Ignore files of this size and larger (e.g., 10GB)"
        )

        # Hashing
        parser.add_argument(
            "--hash",
            choices=HASH_CHOICES,
            default="xxhash",
            type=str,
            help=HASH_HELP_TEXT
        )
        parser.add_argument(
            "--md5", "-5",
            action="store_true",
            help="Shortcut for --hash md5"
        )
        parser.add_argument(
            "--workers", "-w",
            default=1,
            type=int,
            metavar="N",
            help="Number of threads computing hashes. Default: 1"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Display only error messages"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Display verbose messages"
        )

        return parser

    @classmethod
    def parse_args(cls, args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        return cls.build_parser().parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before any file is touched."""
        if not (args.paths or args.rfolder or args.folder or args.md5list):
            self.build_parser().print_help(sys.stderr)
            self.error_exit("No search folders or md5 list files given")

        invalid = validate_search_folders(args.folder + args.rfolder + args.paths)
        for folder in invalid:
            print(f"Invalid path: {folder}", file=sys.stderr)
        if invalid:
            sys.exit(1)

        if args.workers < 1:
            self.error_exit("Number of workers must be at least 1")

        try:
            for value in (args.filter_small, args.filter_large):
                if value is not None:
                    ConvertUtils.human_to_bytes(value)
        except ValueError as e:
            self.error_exit(f"Invalid size format: {e}")

    def create_params(self, args: argparse.Namespace) -> DuplexParams:
        """Create the run configuration from CLI arguments."""
        try:
            algorithm = HashAlgorithmName.MD5 if args.md5 else HASH_ALIASES[args.hash]
            return DuplexParams(
                folders=tuple(str(os.path.abspath(p)) for p in args.folder),
                recursive_folders=tuple(str(os.path.abspath(p)) for p in args.rfolder + args.paths),
                manifests=tuple(args.md5list),
                rules=tuple(args.rule),
                automatic=args.automatic,
                dry_run=args.dry_run,
                use_trash=args.trash,
                quiet=args.quiet,
                verbose=args.verbose,
                hash_algorithm=algorithm,
                ignore_smaller=self._parse_size(args.filter_small),
                ignore_larger=self._parse_size(args.filter_large),
                workers=args.workers,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    @staticmethod
    def _parse_size(value: Optional[str]) -> Optional[int]:
        return None if value is None else ConvertUtils.human_to_bytes(value)

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console, at most once per second."""
        if self.quiet:
            return

        now = time.time()
        finished = total is not None and current >= total
        if now - self._last_progress < 1.0 and not finished:
            return
        self._last_progress = now

        if total and total > 0:
            percent = ConvertUtils.percent(current, total)
            sys.stderr.write(f"\r  [{stage}] {current:,}/{total:,} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current:,} files found...")
        sys.stderr.flush()

    def run_deduplication(self, params: DuplexParams) -> GroupCollection:
        """Execute the detection workflow."""
        command = DeduplicationCommand()
        if not self.quiet:
            print(f"Finding duplicates (hash: {params.hash_algorithm.display_name})...")

        try:
            groups, stats = command.execute(params, progress_callback=self.progress_callback)
        except DuplexError as e:
            self.error_exit(str(e))

        if not self.quiet:
            sys.stderr.write("\n")
            print(f"Files found: {len(command.get_files()):,}")
        if stats.hash_failures:
            self.warning(f"{stats.hash_failures:,} files could not be read and were ignored")
        if self.verbose:
            print(stats.print_summary())
        return groups

    def create_rules(self, params: DuplexParams) -> RuleSet:
        rules = RuleSet()
        for rule in params.rules:
            try:
                rules.add_pattern_rule(rule)
            except RuleError as e:
                self.error_exit(str(e))
        return rules

    def execute_automatic(self, groups: GroupCollection, rules: RuleSet, params: DuplexParams) -> None:
        """Deletes every marked file without asking."""
        if not rules:
            if not self.quiet:
                print("No rules given, nothing to delete.")
            return

        executor = DeletionExecutor(params)
        report = executor.execute(groups, rules, progress_callback=self.progress_callback)
        if not self.quiet:
            sys.stderr.write("\n")
            for line in display.format_deletion_report(report, self.verbose):
                print(line)
            if not report.dry_run:
                print(f"Deleted {report.deleted_count:,} files, "
                      f"freed {ConvertUtils.bytes_to_human(report.freed_bytes)}")
        rules.clear()

    def execute_interactive(self, groups: GroupCollection, rules: RuleSet, params: DuplexParams) -> None:
        navigator = InteractiveNavigator(
            groups,
            rules,
            DeletionExecutor(params),
            confirm=confirm_prompt
        )
        ReviewSession(navigator, quiet=self.quiet, verbose=self.verbose).run()

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"Warning: {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        configure_logging(self.verbose, self.quiet)

        self.validate_args(args)
        params = self.create_params(args)

        groups = self.run_deduplication(params)
        rules = self.create_rules(params)

        if params.automatic:
            self.execute_automatic(groups, rules, params)
        else:
            self.execute_interactive(groups, rules, params)

        # Final stats after deletes
        for line in display.format_total_stats(total_stats(groups, rules)):
            print(line)

        if self.verbose:
            print(f"\nCompleted in {time.time() - self.start_time:.2f} seconds")


def main(argv: Optional[List[str]] = None) -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run(argv)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
