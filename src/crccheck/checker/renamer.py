"""File name rewriting and renaming."""

import errno
import logging
import os
import threading
from pathlib import Path

from .errors import NoExtensionAnchor, RenameFailed
from .tokens import TokenMatch, format_token

logger = logging.getLogger(__name__)

# errno values meaning the filesystem cannot create the hard link
_NO_HARDLINK_ERRNOS = frozenset(
    code for code in (
        getattr(errno, name, None)
        for name in ("EPERM", "EMLINK", "ENOSYS", "EOPNOTSUPP", "ENOTSUP")
    )
    if code is not None
)

_fallback_lock = threading.Lock()


def name_with_added_token(name: str, value: int) -> str:
    """Insert a token immediately before the final extension separator.
    
    Args:
        name: Original file name
        value: Checksum to embed
        
    Returns:
        New file name, e.g. ``archive.zip`` -> ``archive[A1B2C3D4].zip``
        
    Raises:
        NoExtensionAnchor: If the name has no extension. A leading dot
            (``.bashrc``) marks a hidden file, not an extension.
    """
    index = name.rfind('.')
    if index <= 0:
        raise NoExtensionAnchor(
            f"Cannot place checksum token, file name has no extension: {name}",
            name=name,
        )
    return f"{name[:index]}{format_token(value)}{name[index:]}"


def name_with_replaced_token(name: str, match: TokenMatch, value: int) -> str:
    """Replace an existing token with a new one.
    
    Only the span of ``match`` is rewritten; other bracketed text in the name,
    even if it looks like the same token, is left as is. If the rewrite would
    not change the name, the token is inserted before the extension instead.
    
    Args:
        name: Original file name
        match: Token previously found in ``name``
        value: New checksum
        
    Returns:
        New file name
        
    Raises:
        NoExtensionAnchor: If the fallback insertion has no extension to use
    """
    new_name = f"{name[:match.start]}{format_token(value)}{name[match.end:]}"
    if new_name == name:
        return name_with_added_token(name, value)
    return new_name


def apply_rename(path: Path, new_name: str) -> Path:
    """Rename a file within its directory without replacing another file.
    
    Args:
        path: Current file path
        new_name: New file name (no directory part)
        
    Returns:
        Path of the renamed file
        
    Raises:
        RenameFailed: If the name is invalid, the target already exists as a
            different file, or the filesystem refuses the rename
    """
    if not new_name or os.sep in new_name or (os.altsep and os.altsep in new_name):
        raise RenameFailed(f"Invalid target name: {new_name!r}", path=str(path), new_name=new_name)

    target = path.with_name(new_name)

    try:
        if _same_file(path, target):
            # Case-only rename on a case-insensitive filesystem
            path.rename(target)
        else:
            _rename_no_replace(path, target)
    except FileExistsError as e:
        raise RenameFailed(f"Target already exists: {target}", path=str(path), new_name=new_name) from e
    except OSError as e:
        raise RenameFailed(f"Cannot rename {path.name} to {new_name}: {e}", path=str(path), new_name=new_name) from e

    logger.debug(f"Renamed: {{'from': {path.name!r}, 'to': {new_name!r}}}")
    return target


def _rename_no_replace(path: Path, target: Path) -> None:
    """Move ``path`` to ``target``, failing if ``target`` exists.

    Creating the hard link is the atomic step: it raises FileExistsError when
    the target name is taken, even if another worker created it a moment
    earlier. The old name is removed afterwards. Filesystems without hard
    links fall back to check-then-rename under a process-wide lock.
    """
    try:
        os.link(path, target, follow_symlinks=False)
    except FileExistsError:
        raise
    except NotImplementedError:
        _locked_rename(path, target)
        return
    except OSError as e:
        if e.errno not in _NO_HARDLINK_ERRNOS:
            raise
        _locked_rename(path, target)
        return

    try:
        os.unlink(path)
    except OSError:
        # Undo the link so the directory is left as it was
        os.unlink(target)
        raise


def _locked_rename(path: Path, target: Path) -> None:
    with _fallback_lock:
        if os.path.lexists(target):
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(target))
        path.rename(target)


def _same_file(a: Path, b: Path) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False
