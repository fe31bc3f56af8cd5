"""
Logging Setup

Root handler configuration for the dashboard core. Records emitted from
`cura.domains.<department>...` modules are tagged with their department
and screen so JSON logs can be filtered per screen.
"""

import json
import logging
import sys
from datetime import UTC, datetime

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(department)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Context attributes copied into JSON output when a record carries them
CONTEXT_FIELDS = ("department", "screen", "appointment_id", "operation", "item_key")

# Third-party loggers that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def department_of(logger_name: str) -> tuple[str, str]:
    """
    Department and screen module of a logger name.

    "cura.domains.laboratory.application.workflows.lab_tests" gives
    ("laboratory", "lab_tests"); names outside cura.domains give ("core", "").
    """
    parts = logger_name.split(".")
    if len(parts) >= 3 and parts[0] == "cura" and parts[1] == "domains":
        screen = parts[-1] if len(parts) > 3 else ""
        return parts[2], screen
    return "core", ""


class DepartmentContextFilter(logging.Filter):
    """Sets `department` and `screen` on records that do not carry them."""

    def filter(self, record: logging.LogRecord) -> bool:
        department, screen = department_of(record.name)
        if not hasattr(record, "department"):
            record.department = department
        if not hasattr(record, "screen"):
            record.screen = screen
        return True


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value not in (None, ""):
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored console log formatter."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        # Color a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _build_formatter(format_type: str) -> logging.Formatter:
    if format_type == "json":
        return JSONFormatter()
    if format_type == "colored":
        return ColoredFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    if format_type == "plain":
        return logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    raise ValueError(f"Unknown log format: {format_type}")


def configure_logging(
    level: str = "INFO",
    format_type: str = "colored",
    log_file: str | None = None,
) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'colored', 'json', or 'plain'
        log_file: Optional file path; the file always receives JSON

    Returns:
        The configured root logger
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    context_filter = DepartmentContextFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(_build_formatter(format_type))
    console_handler.addFilter(context_filter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter())
        file_handler.addFilter(context_filter)
        root_logger.addHandler(file_handler)

    if numeric_level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def configure_from_settings() -> logging.Logger:
    """Configure logging using LOG_LEVEL / LOG_FORMAT / LOG_FILE from settings."""
    from cura.config.settings import get_settings

    settings = get_settings()
    return configure_logging(
        level=settings.LOG_LEVEL,
        format_type=settings.LOG_FORMAT,
        log_file=settings.LOG_FILE,
    )
