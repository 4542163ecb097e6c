"""
Logging configuration for Deckforge using Logfire.

Logfire is used when LOGFIRE_TOKEN is configured; otherwise loggers fall back
to standard Python logging with a console handler.
"""
import logging
import os
from typing import Optional

import logfire

from config.settings import get_settings

LOGFIRE_CONFIGURED = False


def configure_logfire(force: bool = False) -> bool:
    """
    Configure Logfire once per process.

    Args:
        force: Force reconfiguration even if already configured

    Returns:
        True if Logfire is configured and should receive log records
    """
    global LOGFIRE_CONFIGURED

    if LOGFIRE_CONFIGURED and not force:
        return True

    settings = get_settings()
    if not settings.LOGFIRE_TOKEN:
        # No token configured, standard logging only
        LOGFIRE_CONFIGURED = False
        return False

    try:
        logfire.configure(
            token=settings.LOGFIRE_TOKEN,
            service_name="deckforge",
            service_version=os.getenv("APP_VERSION", "dev"),
            console=False
        )
        LOGFIRE_CONFIGURED = True
    except Exception as config_error:
        logging.getLogger(__name__).warning(
            "Logfire configuration failed, using standard logging: %s", config_error
        )
        LOGFIRE_CONFIGURED = False

    return LOGFIRE_CONFIGURED


class LogfireLogger:
    """Wrapper to make Logfire work like standard Python logging."""

    def __init__(self, name: str):
        self.name = name

    @staticmethod
    def _attributes(kwargs) -> dict:
        # logfire takes attributes as keyword arguments; flatten `extra`
        attributes = dict(kwargs.pop("extra", None) or {})
        kwargs.pop("exc_info", None)
        attributes.update(kwargs)
        return attributes

    def info(self, message, *args, **kwargs):
        if args:
            message = message % args
        logfire.info(f"[{self.name}] {message}", **self._attributes(kwargs))

    def warning(self, message, *args, **kwargs):
        if args:
            message = message % args
        logfire.warn(f"[{self.name}] {message}", **self._attributes(kwargs))

    warn = warning

    def error(self, message, *args, **kwargs):
        if args:
            message = message % args
        logfire.error(f"[{self.name}] {message}", **self._attributes(kwargs))

    def debug(self, message, *args, **kwargs):
        if args:
            message = message % args
        logfire.debug(f"[{self.name}] {message}", **self._attributes(kwargs))

    def exception(self, message, *args, **kwargs):
        if args:
            message = message % args
        logfire.error(f"[{self.name}] EXCEPTION: {message}", **self._attributes(kwargs))

    def setLevel(self, level):
        # No-op for compatibility
        pass


class StandardLogger:
    """Standard Python logger when Logfire is not configured."""

    def __init__(self, name: str, level: Optional[str] = None):
        self.logger = logging.getLogger(name)

        log_level_str = (level or get_settings().LOG_LEVEL or "INFO").upper()
        log_level = getattr(logging, log_level_str, logging.INFO)
        self.logger.setLevel(log_level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(log_level)
            handler.setFormatter(logging.Formatter('[%(levelname)s %(name)s] %(message)s'))
            self.logger.addHandler(handler)

    def info(self, message, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def warning(self, message, *args, **kwargs):
        self.logger.warning(message, *args, **kwargs)

    warn = warning

    def error(self, message, *args, **kwargs):
        self.logger.error(message, *args, **kwargs)

    def debug(self, message, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)

    def exception(self, message, *args, **kwargs):
        self.logger.exception(message, *args, **kwargs)

    def setLevel(self, level):
        self.logger.setLevel(level)


def setup_logger(name: str, level: Optional[str] = None):
    """
    Set up a logger using Logfire or standard Python logging if not configured.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (used for standard logger)

    Returns:
        LogfireLogger or StandardLogger instance
    """
    if configure_logfire():
        return LogfireLogger(name)
    return StandardLogger(name, level)
