"""Base error definitions for crccheck packages."""

from typing import Any, Dict


class CRCCheckError(Exception):
    """Base exception for all crccheck errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ConfigurationError(CRCCheckError):
    """Configuration is invalid or missing."""
    pass
