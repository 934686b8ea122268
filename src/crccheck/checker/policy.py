"""Reconciliation policy.

Decides what to do with a file given the checksum embedded in its name (if
any) and the checksum of its content. Pure: no I/O happens here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .renamer import name_with_added_token, name_with_replaced_token
from .tokens import TokenMatch


class Outcome(str, Enum):
    """Per-file classification reported to the caller."""

    OK = "OK"
    MISMATCH = "MISMATCH"
    UPDATED = "UPDATED"
    ADDED = "ADDED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class Decision:
    """Outcome of the policy plus the new name when a rename is required."""
    outcome: Outcome
    new_name: Optional[str] = None

    @property
    def requires_rename(self) -> bool:
        return self.new_name is not None


def decide(
    name: str,
    expected: Optional[TokenMatch],
    computed: int,
    update: bool,
    add: bool,
) -> Decision:
    """Decide the outcome for one file.
    
    Args:
        name: File name (not a full path)
        expected: Token found in the name, or None
        computed: CRC32 of the file content
        update: Rewrite tokens that do not match the content
        add: Add a token to names that have none
        
    Returns:
        Decision with the outcome and, for ADDED/UPDATED, the new name
        
    Raises:
        NoExtensionAnchor: If a token must be inserted into a name with no
            extension
    """
    if expected is None:
        if not add:
            return Decision(Outcome.SKIPPED)
        return Decision(Outcome.ADDED, name_with_added_token(name, computed))

    if expected.value == computed:
        return Decision(Outcome.OK)

    if not update:
        return Decision(Outcome.MISMATCH)

    return Decision(Outcome.UPDATED, name_with_replaced_token(name, expected, computed))
