"""
Process-wide logging setup.

Every module logs through `get_logger(__name__)`; `setup_logging()` is
called once by `create_app()`. Console output is always on. A log file
is added when LOG_DIR is set (default `logs/`); set LOG_DIR to an empty
value to log to the console only, e.g. in containers.
"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP and Google SDK clients are chatty at DEBUG
QUIET_LOGGERS = ("httpx", "httpcore", "urllib3", "google", "grpc", "groq")

_logging_configured = False


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Configure the root logger.

    Repeated calls are no-ops, so tests can build several apps in one
    process without duplicating handlers.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for `civic_chat_YYYYMMDD.log`; no file when None

    Returns:
        The root logger
    """
    global _logging_configured

    root_logger = logging.getLogger()
    if _logging_configured:
        return root_logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.addHandler(console_handler)

    log_file = None
    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        log_file = directory / f"civic_chat_{datetime.now():%Y%m%d}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(logging.DEBUG)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logging_configured = True
    root_logger.debug(f"Logging configured: level={log_level}, file={log_file or '-'}")

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def truncate(text: str, max_len: int = 50) -> str:
    """Shorten user text for log lines."""
    if len(text) > max_len:
        return text[:max_len] + "..."
    return text
