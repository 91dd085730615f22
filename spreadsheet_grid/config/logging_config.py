"""
Logging configuration for the spreadsheet grid client.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional
import structlog
from structlog.stdlib import LoggerFactory

from .settings import Settings, get_settings

# Global logger cache
_loggers = {}


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Setup application logging configuration."""
    settings = settings or get_settings()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if not settings.DEBUG
            else structlog.dev.ConsoleRenderer(colors=True)
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, settings.LOG_LEVEL))
    console_handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
    root_logger.addHandler(console_handler)

    if settings.LOG_FILE:
        log_file_path = Path(settings.LOG_FILE)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

        if settings.LOG_ROTATION:
            file_handler = logging.handlers.RotatingFileHandler(
                settings.LOG_FILE,
                maxBytes=_parse_size(settings.LOG_MAX_SIZE),
                backupCount=settings.LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
        else:
            file_handler = logging.FileHandler(
                settings.LOG_FILE,
                encoding='utf-8'
            )

        file_handler.setLevel(getattr(logging, settings.LOG_LEVEL))
        file_handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
        root_logger.addHandler(file_handler)

    _configure_specific_loggers(settings)

    logger = get_logger(__name__)
    logger.info(
        "Logging configured",
        level=settings.LOG_LEVEL,
        debug_mode=settings.DEBUG,
        log_file=settings.LOG_FILE
    )


def _configure_specific_loggers(settings: Settings) -> None:
    """Configure third-party and application loggers."""

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if settings.DEBUG else logging.WARNING)

    logging.getLogger("uvicorn.access").setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)

    for logger_name in ("handlers", "services", "models", "utils"):
        logging.getLogger(f"spreadsheet_grid.{logger_name}").setLevel(
            getattr(logging, settings.LOG_LEVEL))


def _parse_size(size_str: str) -> int:
    """Parse size string (e.g., '10MB') to bytes."""
    size_str = size_str.upper().strip()

    multipliers = {
        'KB': 1024,
        'MB': 1024**2,
        'GB': 1024**3,
        'B': 1,
    }

    for suffix, multiplier in multipliers.items():
        if size_str.endswith(suffix):
            number = size_str[:-len(suffix)]
            try:
                return int(float(number) * multiplier)
            except ValueError:
                break

    try:
        return int(size_str)
    except ValueError:
        return 10 * 1024 * 1024  # Default 10MB


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    if name not in _loggers:
        _loggers[name] = structlog.get_logger(name)
    return _loggers[name]


class LoggerMixin:
    """Mixin class to add logging capabilities to other classes."""

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        """Get logger for this class."""
        return get_logger(self.__class__.__module__ + "." + self.__class__.__name__)


def configure_test_logging():
    """Configure logging for tests."""
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    logging.getLogger("httpx").setLevel(logging.ERROR)
    logging.getLogger("uvicorn").setLevel(logging.ERROR)
