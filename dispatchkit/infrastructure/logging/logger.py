"""Structured logging built on structlog and the stdlib logging module."""
import logging
import os
import threading
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, List, Optional

import structlog

if TYPE_CHECKING:
    from dispatchkit.config.schemas.logging_schema import LoggingConfig

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_configure_lock = threading.Lock()


def _shared_processors() -> List:
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(format_name: str):
    if format_name == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def _configure_structlog(format_name: str) -> None:
    structlog.configure(
        processors=_shared_processors() + [_renderer(format_name)],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def setup_logging(config: Optional["LoggingConfig"] = None) -> structlog.stdlib.BoundLogger:
    """
    Set up structured logging for the application using structlog.

    Args:
        config: Logging configuration. Defaults are used when None.

    Returns:
        Configured structlog logger instance.
    """
    if config is None:
        from dispatchkit.config.schemas.logging_schema import LoggingConfig

        config = LoggingConfig()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.level.upper()))

    handlers: List[logging.Handler] = []

    if config.destination in ("file", "both"):
        log_path = os.path.expandvars(config.file_path)
        log_dir = os.path.dirname(log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    if config.destination in ("stdout", "both"):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(console_handler)

    # Replace only the handlers this module installed previously
    for handler in root_logger.handlers[:]:
        if getattr(handler, "_dispatchkit_handler", False):
            root_logger.removeHandler(handler)
            handler.close()

    for handler in handlers:
        handler._dispatchkit_handler = True
        root_logger.addHandler(handler)

    with _configure_lock:
        _configure_structlog(config.format)

    logger = structlog.get_logger("dispatchkit")
    logger.debug(
        "Logging configured",
        log_level=config.level,
        log_destination=config.destination,
        log_format=config.format,
    )
    return logger


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger bound to the given name.

    A default console configuration is applied on first use when
    setup_logging has not been called yet.
    """
    if not structlog.is_configured():
        with _configure_lock:
            if not structlog.is_configured():
                _configure_structlog("console")
    return structlog.get_logger(name)
