import logging
import sys
from pathlib import Path

import structlog

from src.config.config import config


class CustomFormatter(logging.Formatter):
    """Formatter producing: [yyyy-mm-dd hh:mm:ss] [log_type] [module_name]: {message}"""

    def format(self, record):
        module_name = record.name.split('.')[-1] if '.' in record.name else record.name
        timestamp = self.formatTime(record, '%Y-%m-%d %H:%M:%S')
        formatted_message = f"[{timestamp}] [{record.levelname}] [{module_name}]: {record.getMessage()}"

        if record.exc_info:
            formatted_message += '\n' + self.formatException(record.exc_info)

        return formatted_message


def get_log_file_path() -> Path:
    """Get the log file path based on environment, creating the logs directory."""
    logs_dir = Path("logs")
    logs_dir.mkdir(exist_ok=True)
    return logs_dir / f"weather_chat_{config.environment}.log"


def _configure_structlog():
    """Route structlog events through the standard library handlers."""
    if config.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def setup_logging():
    """
    Configure logging for the application.

    Sets up console and file logging on the root logger with the format
    [yyyy-mm-dd hh:mm:ss] [log_type] [module_name]: {message}
    and renders structlog key/value events as text or JSON per ``log_format``.
    """
    log_file_path = get_log_file_path()
    level = getattr(logging, config.log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = CustomFormatter()

    file_handler = logging.FileHandler(log_file_path, encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    _configure_structlog()

    logger = structlog.get_logger(__name__)
    logger.info("Logging configured", log_file=str(log_file_path), log_format=config.log_format)
