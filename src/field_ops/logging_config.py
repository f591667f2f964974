"""Logging configuration for the activity engine."""
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from shared.utils import now


class ColorFormatter(logging.Formatter):
    """Color-coded formatter for console output."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m'      # Reset
    }

    def format(self, record):
        # Color the level name only; the message stays plain
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"
        return super().format(record)


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, for the optional log file."""

    def format(self, record):
        log_entry = {
            'timestamp': now().isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Session key, photo id etc. passed as extra={'extra_fields': {...}}
        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        return json.dumps(log_entry)


def setup_logging(level=None, log_file=None):
    """Configure logging on the root logger.

    LOG_LEVEL picks the level unless one is passed in; LOG_COLORS=false
    disables colour even on a terminal. With log_file (or LOG_FILE) set, a
    rotating JSON log is written alongside the console output.
    """
    # Explicit level wins over the environment
    log_level_str = (level or os.getenv('LOG_LEVEL', 'INFO')).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    use_colors = os.getenv('LOG_COLORS', 'true').lower() in ('true', '1', 'yes')

    # Console handler (human-readable)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    if use_colors and sys.stdout.isatty():
        console_handler.setFormatter(ColorFormatter('%(asctime)s %(levelname)s %(name)-25s %(message)s'))
    else:
        console_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)-8s %(name)-25s %(message)s'))

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()
    logger.addHandler(console_handler)

    log_file = log_file or os.getenv('LOG_FILE')
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5*1024*1024,  # 5MB
            backupCount=3
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    # Upload retries and SQL echo are noisy at INFO
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    logger.debug(f"Logging initialized (level: {log_level_str}{', file: ' + log_file if log_file else ''})")
    return logger
