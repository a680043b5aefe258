"""Utility functions for loadsplit"""

import logging
import os


DEFAULT_MAX_WORKERS = 4
DEFAULT_PATTERN = '*.dat'


def get_int_env(key: str) -> int:
    """Get integer value from environment variable, return 0 if not set or invalid."""
    val = os.getenv(key)
    if val is None:
        return 0
    try:
        return int(val)
    except ValueError:
        return 0


def get_str_env(key: str, default: str) -> str:
    """
    Get string from environment variable, return default if not set.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        String value or default
    """
    return os.getenv(key, default)


def get_bool_env(key: str, default: bool) -> bool:
    """
    Get boolean from environment variable, return default if not set.

    Recognizes: true/false, yes/no, 1/0 (case-insensitive)

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Boolean value or default
    """
    val = os.getenv(key)
    if val is None:
        return default
    val_lower = val.lower()
    if val_lower in ('true', 'yes', '1'):
        return True
    elif val_lower in ('false', 'no', '0'):
        return False
    return default


def get_max_workers() -> int:
    """Worker count from LOADSPLIT_MAX_WORKERS, falling back to the default of 4."""
    value = get_int_env('LOADSPLIT_MAX_WORKERS')
    return value if value > 0 else DEFAULT_MAX_WORKERS


def get_default_pattern() -> str:
    return get_str_env('LOADSPLIT_PATTERN', DEFAULT_PATTERN)


def get_log_level(default: str = 'INFO') -> int:
    """Resolve LOADSPLIT_LOG_LEVEL to a logging level, ignoring unknown names."""
    name = get_str_env('LOADSPLIT_LOG_LEVEL', default).upper()
    level = getattr(logging, name, None)
    if not isinstance(level, int):
        return getattr(logging, default.upper(), logging.INFO)
    return level


def human_readable_size(size_bytes: float) -> str:
    """Convert bytes to human-readable format."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024:
            return f'{size_bytes:.2f} {unit}'
        size_bytes /= 1024
    return f'{size_bytes:.2f} PB'


class ShutdownFilter(logging.Filter):
    """
    Logging filter to suppress shutdown-related error tracebacks.

    Filters out KeyboardInterrupt, CancelledError, and SystemExit errors
    that occur during graceful shutdown of the uvicorn server.
    """

    def filter(self, record):
        if record.levelname == 'ERROR':
            msg = str(record.getMessage())
            if any(x in msg for x in ['KeyboardInterrupt', 'CancelledError', 'Shutting down']):
                return False
            if record.exc_info:
                exc_type = record.exc_info[0]
                if exc_type and exc_type.__name__ in ('KeyboardInterrupt', 'CancelledError', 'SystemExit'):
                    return False
        return True


def setup_shutdown_filter():
    """
    Apply ShutdownFilter to uvicorn and asyncio loggers.

    Call this before running uvicorn to suppress shutdown tracebacks.
    """
    shutdown_filter = ShutdownFilter()
    for logger_name in ['uvicorn.error', 'uvicorn', 'asyncio']:
        logger = logging.getLogger(logger_name)
        logger.addFilter(shutdown_filter)
