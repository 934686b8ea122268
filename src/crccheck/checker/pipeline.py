"""Per-file checking pipeline: extract, compute, decide, rename."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from crccheck.common import compute_crc32
from .discovery import FileTask
from .errors import CheckerError, IoFailure, classify_error
from .policy import Outcome, decide
from .renamer import apply_rename
from .tokens import find_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileResult:
    """Result of checking one file.
    
    Attributes:
        path: Path the file had when the batch started
        outcome: Per-file classification
        expected: Checksum embedded in the name, if any
        computed: Checksum of the content, if it could be computed
        new_path: Path after a rename (ADDED/UPDATED only)
        error: Error message (FAILED only)
        error_category: Error category from classify_error (FAILED only)
    """
    path: Path
    outcome: Outcome
    expected: Optional[int] = None
    computed: Optional[int] = None
    new_path: Optional[Path] = None
    error: Optional[str] = None
    error_category: Optional[str] = None

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def failed(self) -> bool:
        return self.outcome is Outcome.FAILED


def failed_result(path: Path, error: Exception, **fields) -> FileResult:
    """Build a FAILED result for ``path`` from an exception."""
    message = error.message if isinstance(error, CheckerError) else str(error)
    return FileResult(
        path=path,
        outcome=Outcome.FAILED,
        error=message,
        error_category=classify_error(error),
        **fields,
    )


def compute_file_checksum(path: Path) -> int:
    """Compute the CRC32 of a file.
    
    Raises:
        IoFailure: If the file cannot be opened or read
    """
    try:
        return compute_crc32(path)
    except OSError as e:
        raise IoFailure(f"Cannot read {path.name}: {e.strerror or e}", path=str(path)) from e


def check_file(task: FileTask, update: bool = False, add: bool = False) -> FileResult:
    """Run the full pipeline for one file.
    
    Steps run strictly in order: token extraction, checksum computation,
    policy decision, rename. Checker errors are captured in the returned
    result instead of being raised.
    
    Args:
        task: File to check
        update: Rewrite tokens that do not match the content
        add: Add a token to names that have none
        
    Returns:
        FileResult for the file
    """
    path = task.path
    match = find_token(task.name)
    expected = match.value if match else None

    try:
        computed = compute_file_checksum(path)
    except CheckerError as e:
        return failed_result(path, e, expected=expected)

    try:
        decision = decide(task.name, match, computed, update, add)
        new_path = apply_rename(path, decision.new_name) if decision.requires_rename else None
    except CheckerError as e:
        return failed_result(path, e, expected=expected, computed=computed)

    return FileResult(
        path=path,
        outcome=decision.outcome,
        expected=expected,
        computed=computed,
        new_path=new_path,
    )
