"""Logging configuration for the ``[logging]`` config section."""

from typing import Literal
from pydantic import BaseModel, Field, ConfigDict, ValidationInfo, field_validator


class LoggingConfig(BaseModel):
    """Logging configuration for crccheck.
    
    Logs go to stderr (and optionally a rotating JSON file); per-file report
    lines go to stdout and are not affected by these settings. The quiet
    WARNING default keeps a normal run down to report lines, failures and
    the summary.
    """
    
    model_config = ConfigDict(extra='forbid')
    
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Log level (INFO shows batch progress, DEBUG shows renames and rejected brackets)"
    )
    format: Literal["simple", "detailed", "json"] = Field(
        default="simple",
        description="Console log format"
    )
    file: str | None = Field(default=None, description="Optional JSON log file path")
    max_file_size_mb: int = Field(
        default=10,
        ge=1,
        description="Size at which the log file is rotated"
    )
    backup_count: int = Field(
        default=5,
        ge=0,
        description="Number of rotated log files to keep"
    )
    
    @field_validator('level', 'format', mode='before')
    @classmethod
    def normalize_case(cls, v: str, info: ValidationInfo) -> str:
        """Accept level and format in any case."""
        if not isinstance(v, str):
            return v
        return v.upper() if info.field_name == 'level' else v.lower()
