"""
Logging Configuration
Sets up the 'polyconcrete' logger namespace.

Log records go to stderr so the mold summary printed on stdout stays clean.
The level can be overridden with the POLYCONCRETE_LOG_LEVEL environment
variable (e.g. POLYCONCRETE_LOG_LEVEL=DEBUG python -m polyconcrete).
"""
import logging
import os
import sys
from typing import Optional, Union

LOG_LEVEL_ENV = "POLYCONCRETE_LOG_LEVEL"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def resolve_level(level: Union[int, str]) -> int:
    """Accepts a logging constant or a level name such as 'debug'."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(level: Union[int, str, None] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'polyconcrete' logger and returns it.

    Args:
        level: Logging level or level name. Defaults to $POLYCONCRETE_LOG_LEVEL, then INFO.
        log_file: Optional path to save logs to a file.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV) or logging.INFO
    level = resolve_level(level)

    logger = logging.getLogger("polyconcrete")
    logger.setLevel(level)

    # Calling twice must not duplicate output
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
