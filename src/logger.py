import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

import colorlog

LOG_COLORS = {
    'DEBUG': 'bold_blue',
    'INFO': 'bold_green',
    'WARNING': 'bold_yellow',
    'ERROR': 'bold_red',
    'CRITICAL': 'bold_purple'
}

# Loggers that echo request URLs, which carry X-Plex-Token
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the Plex catalog client.

    Args:
        level: Overrides PLEX_LOG_LEVEL when given (e.g. "DEBUG" for -v)
    """
    log_level = (level or os.getenv('PLEX_LOG_LEVEL', 'INFO')).upper()
    log_file = os.getenv('PLEX_LOG_FILE')
    max_bytes = int(os.getenv('LOG_FILE_MAX_BYTES', '10485760'))  # 10 MB
    backup_count = int(os.getenv('LOG_FILE_BACKUP_COUNT', '5'))

    root = logging.getLogger()
    root.setLevel(log_level)

    if not root.hasHandlers():
        console = logging.StreamHandler()
        console.setFormatter(colorlog.ColoredFormatter(
            "%(log_color)s%(levelname)s:%(name)s:%(message)s",
            log_colors=LOG_COLORS
        ))
        root.addHandler(console)

        if log_file:
            rotating = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
            rotating.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            root.addHandler(rotating)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
