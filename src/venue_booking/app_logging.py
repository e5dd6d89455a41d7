"""Logging configuration helpers."""

import logging

LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"

_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


class ContextFormatter(logging.Formatter):
    """Formatter that appends ``extra=`` fields as sorted key=value pairs.

    Booking, venue and subscription ids travel in ``extra``; without this they
    would never reach the log line.
    """

    def formatMessage(self, record: logging.LogRecord) -> str:
        message = super().formatMessage(record)
        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_FIELDS and not key.startswith("_")
        }
        if not context:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{message} [{pairs}]"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure the venue_booking logger with a single context-aware handler."""
    logger = logging.getLogger("venue_booking")
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
