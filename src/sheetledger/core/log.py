"""
Root logger configuration.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from sheetledger.api.middleware.logging import JSONLogFormatter

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO", json_logs: bool = False, log_file: Optional[str] = None
) -> None:
    """
    Configure root logger.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        json_logs: Emit one JSON object per line instead of plain text
        log_file: Optional log file path
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_logs:
        formatter: logging.Formatter = JSONLogFormatter()
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in list(root_logger.handlers):
        if getattr(handler, "_sheetledger", False):
            root_logger.removeHandler(handler)
            handler.close()

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler._sheetledger = True
        root_logger.addHandler(handler)

    # googleapiclient logs every discovery/cache miss at WARNING/INFO
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)
