"""CLI command for checking CRC32 tokens in file names."""

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

from crccheck.common import ConfigLoader, ConfigurationError, setup_logging
from .config import CRCCheckConfig
from .coordinator import BatchCoordinator
from .pipeline import FileResult
from .summary import format_report_line, format_summary, summarize

APP_NAME = "crccheck"

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CANCELLED = 130

logger = logging.getLogger(__name__)


def print_result(result: FileResult) -> None:
    """Print one report line to stdout."""
    print(format_report_line(result), flush=True)


def check_command(
    config: CRCCheckConfig,
    paths: List[Path],
    update: bool = False,
    add: bool = False,
    worker_threads_override: Optional[int] = None,
) -> int:
    """Check files and print one line per file plus a summary.

    Args:
        config: Configuration object
        paths: A single directory, or a list of file paths
        update: Rewrite tokens that do not match the content
        add: Add a token to names that have none
        worker_threads_override: Optional override for worker threads

    Returns:
        Exit code (0 when no file failed)
    """
    worker_threads = worker_threads_override if worker_threads_override is not None else config.checker.worker_threads

    coordinator = BatchCoordinator(
        worker_threads=worker_threads,
        worker_multiplier=config.checker.worker_multiplier,
        queue_maxsize=config.checker.queue_maxsize,
    )

    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: coordinator.cancel())
    try:
        batch = coordinator.run(paths, update=update, add=add, on_result=print_result)
    except OSError as e:
        print(f"{APP_NAME}: {e}", file=sys.stderr)
        return EXIT_FAILED
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    print(format_summary(summarize(batch.results), cancelled=batch.cancelled), file=sys.stderr)

    if coordinator.cancelled:
        return EXIT_CANCELLED
    if batch.failed:
        return EXIT_FAILED
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Check CRC32 checksums embedded in file names, e.g. archive[A1B2C3D4].zip"
    )
    parser.add_argument(
        "paths",
        type=Path,
        nargs="*",
        default=[Path(".")],
        help="Directory to scan (not recursive) or list of files (default: current directory)"
    )
    parser.add_argument(
        "-u", "--update",
        action="store_true",
        help="Update the checksum in the file name if it doesn't match"
    )
    parser.add_argument(
        "-a", "--add",
        action="store_true",
        help="Add a checksum to file names that have none"
    )
    parser.add_argument(
        "--workers",
        type=int,
        required=False,
        help="Number of worker threads (overrides config)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (defaults.toml)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (overrides config)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the crccheck command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be a positive integer")

    loader = ConfigLoader(
        app_name=APP_NAME,
        config_class=CRCCheckConfig
    )

    try:
        config = loader.load(defaults_path=args.config)
    except ConfigurationError as e:
        print(f"{APP_NAME}: {e.message}", file=sys.stderr)
        return EXIT_FAILED

    setup_logging(
        level=args.log_level or config.logging.level,
        format=config.logging.format,
        log_file=Path(config.logging.file) if config.logging.file else None,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
    )

    return check_command(
        config=config,
        paths=args.paths,
        update=args.update,
        add=args.add,
        worker_threads_override=args.workers,
    )


if __name__ == "__main__":
    sys.exit(main())
