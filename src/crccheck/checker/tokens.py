"""Checksum token extraction from file names.

A token is exactly eight hexadecimal digits wrapped in square brackets,
e.g. ``archive[A1B2C3D4].zip``. Names may carry other bracketed text
(``[1080p]``, ``[build]``), so the search runs right to left and falls back
to earlier pairs when a candidate is not a valid token.
"""

import logging
import string
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

TOKEN_LENGTH = 8
_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class TokenMatch:
    """A token found in a file name.
    
    Attributes:
        value: Parsed checksum as unsigned 32-bit integer
        start: Index of the opening bracket
        end: Index one past the closing bracket
    """
    value: int
    start: int
    end: int


def is_token_text(text: str) -> bool:
    """Return True if ``text`` is exactly eight hex digits (any case)."""
    return len(text) == TOKEN_LENGTH and all(c in _HEX_DIGITS for c in text)


def format_token(value: int) -> str:
    """Render a checksum as a bracketed token, e.g. ``[0000ABCD]``."""
    return f"[{value & 0xFFFFFFFF:08X}]"


def find_token(name: str) -> Optional[TokenMatch]:
    """Find the rightmost valid token in a file name.
    
    Takes the last ``]`` and the nearest ``[`` before it. If the text between
    them is not a token, the search continues in the text before that ``[``.
    
    Args:
        name: File name (not a full path)
        
    Returns:
        TokenMatch for the rightmost valid token, or None
    """
    limit = len(name)
    while True:
        right = name.rfind(']', 0, limit)
        if right < 0:
            return None
        left = name.rfind('[', 0, right)
        if left < 0:
            return None

        candidate = name[left + 1:right]
        if is_token_text(candidate):
            return TokenMatch(value=int(candidate, 16), start=left, end=right + 1)

        logger.debug(f"Rejected bracketed text: {{'name': {name!r}, 'candidate': {candidate!r}}}")
        limit = left


def extract_hash(name: str) -> Optional[int]:
    """Return the checksum of the rightmost valid token in ``name``, or None."""
    match = find_token(name)
    return match.value if match else None
