"""Logging setup for content_duplicator.

Every module logs under the 'content_duplicator' namespace. That logger is
also the status channel of a duplication run: the engine reports each record
it duplicates, reuses or excludes at INFO, and clones left as draft or links
kept across a cycle at WARNING.

Example:
    >>> import logging
    >>> from content_duplicator.core.logging_config import configure_logging, get_logger
    >>> configure_logging(level=logging.INFO)
    >>> get_logger("engine").info("Duplicating entry #abc")
"""

import logging

LOGGER_NAME = "content_duplicator"

DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# Loggers of the HTTP stack used by the Content Management API store
HTTP_LOGGERS = ("urllib3", "requests")


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or its child `name` (e.g. 'content_duplicator.engine')."""
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """Set the level of the package logger and attach a handler to it.

    Calling this again changes the levels but does not add a second handler.

    Args:
        level: Level of the content_duplicator logger.
        http_level: Level of the urllib3 and requests loggers. If None, they
            follow `level` when it is DEBUG and stay at WARNING otherwise, so
            connection chatter only shows up when debugging.
        handler: Handler to attach. Defaults to a StreamHandler on stderr.

    Returns:
        The content_duplicator logger.
    """
    if http_level is None:
        http_level = level if level <= logging.DEBUG else max(level, logging.WARNING)

    logger = get_logger()
    logger.setLevel(level)
    if not logger.handlers:
        if handler is None:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        logger.addHandler(handler)

    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
    return logger


class LoggerMixin:
    """Give a class a `_logger` named after it under the package namespace.

    Example:
        >>> class ContentfulEnvironment(LoggerMixin):
        ...     def get_entry(self, entry_id):
        ...         self._logger.debug(f"GET entry {entry_id}")
        ...
        >>> # Logs to 'content_duplicator.ContentfulEnvironment'
    """

    @property
    def _logger(self) -> logging.Logger:
        return get_logger(type(self).__name__)


__all__ = [
    "LOGGER_NAME",
    "LoggerMixin",
    "configure_logging",
    "get_logger",
]
