"""Path utilities for consistent path handling."""

import os
import unicodedata
from pathlib import Path


def normalize_path(path: Path | str) -> str:
    """
    Normalize a path for consistent comparison.
    
    Applies:
    - Conversion to an absolute path
    - Unicode NFC normalization (canonical composition)
    - Forward slash conversion for cross-platform consistency
    
    Two spellings of the same file ("a/../b.txt", "./b.txt", decomposed vs.
    composed accents) normalize to the same string.
    
    Args:
        path: Path object or string to normalize
        
    Returns:
        Normalized absolute path string with forward slashes
        
    Examples:
        >>> normalize_path("/photos/./café.jpg")
        '/photos/café.jpg'
    """
    path_str = os.path.abspath(str(path))
    
    # Normalize Unicode to NFC (Canonical Composition)
    normalized = unicodedata.normalize('NFC', path_str)
    
    # Convert backslashes to forward slashes for cross-platform consistency
    normalized = normalized.replace('\\', '/')
    
    return normalized
