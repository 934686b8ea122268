"""Error classes for the checksum checker."""

from crccheck.common import CRCCheckError


class CheckerError(CRCCheckError):
    """Base error for checker operations."""
    pass


class IoFailure(CheckerError):
    """File could not be opened or read."""
    pass


class RenameFailed(CheckerError):
    """The new file name could not be applied."""
    pass


class NoExtensionAnchor(CheckerError):
    """File name has no extension separator to place a new token against."""
    pass


def classify_error(exception: Exception) -> str:
    """
    Classify an exception into an error category.
    
    Args:
        exception: The exception to classify
        
    Returns:
        Error category string: 'io', 'rename', 'no_extension',
        'permission' or 'unknown'
    """
    if isinstance(exception, IoFailure):
        return 'io'
    elif isinstance(exception, RenameFailed):
        return 'rename'
    elif isinstance(exception, NoExtensionAnchor):
        return 'no_extension'
    elif isinstance(exception, PermissionError):
        return 'permission'
    elif isinstance(exception, OSError):
        return 'io'
    else:
        return 'unknown'
