"""CRC32 file name checker.

Pipeline per file: token extraction -> checksum -> policy -> rename,
run across many files by BatchCoordinator.
"""

from .coordinator import BatchCoordinator, BatchResult
from .discovery import FileTask, collect_tasks
from .errors import CheckerError, IoFailure, NoExtensionAnchor, RenameFailed, classify_error
from .pipeline import FileResult, check_file
from .policy import Decision, Outcome, decide
from .tokens import TokenMatch, extract_hash, find_token, format_token

__all__ = [
    "BatchCoordinator",
    "BatchResult",
    "FileTask",
    "collect_tasks",
    "CheckerError",
    "IoFailure",
    "NoExtensionAnchor",
    "RenameFailed",
    "classify_error",
    "FileResult",
    "check_file",
    "Decision",
    "Outcome",
    "decide",
    "TokenMatch",
    "extract_hash",
    "find_token",
    "format_token",
]
