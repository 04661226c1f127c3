"""
Logging Configuration
Console output plus rotating files; error.log and audit.log sit beside LOG_FILE.
"""

from loguru import logger
import sys
from pathlib import Path
from typing import Optional

from src.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
AUDIT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {message}"

_configured = False


def _is_audit(record) -> bool:
    return "AUDIT" in record["extra"]


def setup_logger(log_file: Optional[str] = None, level: Optional[str] = None):
    """
    Install the application sinks once per process.

    Every module calls this at import time; only the first call touches loguru.

    Args:
        log_file: Main log file (defaults to settings.LOG_FILE)
        level: Minimum level for console and main file (defaults to settings.LOG_LEVEL)

    Returns:
        logger: The shared loguru logger
    """
    global _configured
    if _configured:
        return logger

    log_path = Path(log_file or settings.LOG_FILE)
    level = level or settings.LOG_LEVEL
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=level, colorize=True)

    # path, level, retention, format, filter
    file_sinks = [
        (log_path, level, "30 days", FILE_FORMAT, None),
        (log_path.parent / "error.log", "ERROR", "90 days", FILE_FORMAT, None),
        (log_path.parent / "audit.log", "INFO", "365 days", AUDIT_FORMAT, _is_audit),
    ]
    for path, sink_level, retention, fmt, record_filter in file_sinks:
        logger.add(
            str(path),
            format=fmt,
            level=sink_level,
            filter=record_filter,
            rotation="10 MB",
            retention=retention,
            compression="zip"
        )

    _configured = True
    return logger


def log_audit(user_id: Optional[int], action: str, details: str):
    """Write one line to the audit trail; user_id is None when the caller is unknown"""
    logger.bind(AUDIT=True).info(f"USER_ID={user_id} | ACTION={action} | DETAILS={details}")
