"""Logging configuration for ReadTrace."""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from readtrace.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx", "sqlalchemy.engine", "passlib", "multipart")


def _file_handler(log_path: str, formatter: logging.Formatter) -> RotatingFileHandler:
    log_file = Path(log_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: Optional[str] = None):
    """Configure application logging.

    ``LOG_PATH`` in the environment takes precedence over the configured
    ``log_path``; when neither is set only stdout is used.
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    handlers = [console_handler]

    log_path = os.getenv('LOG_PATH', settings.log_path)
    if log_path:
        handlers.append(_file_handler(log_path, formatter))

    for handler in handlers:
        handler.setLevel(log_level)

    logging.basicConfig(level=log_level, handlers=handlers)
    logging.getLogger("readtrace").setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
