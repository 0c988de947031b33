"""JSON-formatted logging utilities."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "decryption.log"

_STANDARD_ATTRS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Anything passed through ``extra=`` rides along
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class JSONFileHandler(logging.FileHandler):
    """File handler that writes JSONFormatter lines."""

    def __init__(self, filename, encoding: str = "utf-8"):
        super().__init__(filename, encoding=encoding)
        self.setFormatter(JSONFormatter())


def setup_logger(
    name: str,
    log_file: Path,
    level: int = logging.INFO,
) -> logging.Logger:
    """Attach a JSON file handler for log_file to the named logger."""
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Re-running setup must not duplicate handlers
    for handler in list(logger.handlers):
        if isinstance(handler, JSONFileHandler):
            logger.removeHandler(handler)
            handler.close()

    logger.addHandler(JSONFileHandler(log_file))

    return logger


def setup_logging(log_dir: Path, verbose: bool = False, name: Optional[str] = None) -> logging.Logger:
    """Configure file logging for a CLI run.

    Args:
        log_dir: Directory for the log file (created if missing)
        verbose: DEBUG level when True, INFO otherwise
        name: Logger to configure; the root logger by default
    """
    level = logging.DEBUG if verbose else logging.INFO
    return setup_logger(name or "", Path(log_dir) / LOG_FILE_NAME, level)
