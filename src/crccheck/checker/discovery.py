"""Candidate file discovery.

Turns the caller's path arguments into a list of FileTask objects, one per
distinct file. A single directory argument is listed non-recursively;
directories and other non-regular files are skipped.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from crccheck.common import normalize_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileTask:
    """One candidate file, owned by a single pipeline invocation."""
    path: Path

    @property
    def name(self) -> str:
        return self.path.name


def is_candidate(path: Path) -> bool:
    """Return True if ``path`` should be dispatched to the pipeline.

    Regular files qualify. Directories, FIFOs, sockets and device nodes do
    not: opening a FIFO would block the worker forever. Paths that do not
    resolve (missing files, dangling symlinks) are kept so that they are
    reported as read failures.
    """
    return path.is_file() or not path.exists()


def list_directory(directory: Path) -> List[Path]:
    """List the immediate children of a directory that are candidate files.
    
    Args:
        directory: Directory to list
        
    Returns:
        Child paths sorted by name
        
    Raises:
        OSError: If the directory cannot be listed
    """
    return sorted(child for child in directory.iterdir() if is_candidate(child))


def collect_tasks(paths: Iterable[Path | str]) -> List[FileTask]:
    """Build the task list for a batch.
    
    Each file appears at most once in the result, even when it is passed
    several times or under different spellings of the same path, so no two
    workers ever touch the same file.
    
    Args:
        paths: A single directory, or a list of file paths
        
    Returns:
        List of FileTask in input order
    """
    paths = [Path(p) for p in paths]

    if len(paths) == 1 and paths[0].is_dir():
        candidates = list_directory(paths[0])
        logger.info(f"Listed directory: {{'path': {str(paths[0])!r}, 'files': {len(candidates)}}}")
    else:
        candidates = paths

    tasks = []
    seen = set()
    for path in candidates:
        if not is_candidate(path):
            logger.debug(f"Skipping non-regular file: {{'path': {str(path)!r}}}")
            continue

        key = normalize_path(path)
        if key in seen:
            logger.debug(f"Skipping duplicate path: {{'path': {str(path)!r}}}")
            continue
        seen.add(key)
        tasks.append(FileTask(path=path))

    return tasks
