"""Configuration models for the checksum checker."""

from pydantic import BaseModel, Field, ConfigDict
from crccheck.common import LoggingConfig


class CheckerConfig(BaseModel):
    """Checker performance configuration."""
    
    model_config = ConfigDict(extra='forbid')
    
    worker_threads: int | None = Field(
        default=None,
        ge=1,
        description="Number of worker threads (default: worker_multiplier × CPU cores)"
    )
    worker_multiplier: float = Field(
        default=4.0,
        ge=1.0,
        description="CPU count multiplier used when worker_threads is not set"
    )
    queue_maxsize: int = Field(
        default=1000,
        ge=1,
        description="Maximum size of the work queue"
    )


class CRCCheckConfig(BaseModel):
    """Root configuration for crccheck."""
    
    model_config = ConfigDict(extra='forbid')
    
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    checker: CheckerConfig = Field(default_factory=CheckerConfig)
