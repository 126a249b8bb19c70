import logging
import os
import sys
from pathlib import Path

LOG_DIR = Path.home() / ".local" / "share" / "jett" / "logs"
LOG_FILE_NAME = "jett.log"

FILE_FORMAT = '[%(asctime)s] %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'
CONSOLE_DEBUG_FORMAT = '%(levelname)-8s [%(name)s] %(message)s'

def _debug_requested() -> bool:
    return os.getenv('JETT_DEBUG', '').lower() in ('1', 'true', 'yes')

def console_level() -> int:
    """Console level from JETT_DEBUG or JETT_LOG_LEVEL; WARNING when neither is set."""
    if _debug_requested():
        return logging.DEBUG
    name = os.getenv('JETT_LOG_LEVEL', '').upper()
    level = logging.getLevelName(name) if name else logging.WARNING
    return level if isinstance(level, int) else logging.WARNING

def _file_handler(log_dir: Path):
    """Detailed log file handler, or None when the directory cannot be written."""
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_dir / LOG_FILE_NAME, encoding='utf-8')
    except OSError:
        return None
    handler.setFormatter(logging.Formatter(FILE_FORMAT, FILE_DATE_FORMAT))
    handler.setLevel(logging.DEBUG)
    return handler

def setup_logging(log_dir: Path = None):
    """
    Configure the ``jett`` logger.

    Everything goes to ``jett.log`` under log_dir; the console (stderr, since
    stdout carries the conversation) only shows the environment's level.
    An unwritable log directory leaves console logging only.
    """
    log_dir = LOG_DIR if log_dir is None else log_dir

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(
        CONSOLE_DEBUG_FORMAT if _debug_requested() else CONSOLE_FORMAT
    ))
    console_handler.setLevel(console_level())

    logger = logging.getLogger('jett')
    logger.setLevel(logging.DEBUG)  # Logger accepts all, handlers filter
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(console_handler)
    logger.propagate = False

    file_handler = _file_handler(log_dir)
    if file_handler is None:
        logger.warning(f"Cannot write logs to {log_dir}; logging to the console only")
    else:
        logger.addHandler(file_handler)

    return logger

def get_logger(name: str = None):
    """Get a logger instance for a specific module."""
    if name:
        return logging.getLogger(f'jett.{name}')
    return logging.getLogger('jett')
