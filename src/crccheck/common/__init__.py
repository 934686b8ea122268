"""Common utilities for crccheck packages."""

from .config import ConfigLoader
from .logging import setup_logging
from .logging_config import LoggingConfig
from .errors import CRCCheckError, ConfigurationError
from .path_utils import normalize_path
from .checksums import crc32_stream, compute_crc32
from .config_utils import get_cpu_count, auto_detect_io_workers

__all__ = [
    'ConfigLoader',
    'LoggingConfig',
    'setup_logging',
    'CRCCheckError',
    'ConfigurationError',
    'normalize_path',
    'crc32_stream',
    'compute_crc32',
    'get_cpu_count',
    'auto_detect_io_workers',
]
