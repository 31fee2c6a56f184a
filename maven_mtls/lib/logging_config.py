"""JSON logging configuration for Maven mTLS provisioning."""

import logging

from pythonjsonlogger import jsonlogger

LOGGER_NAME = "maven_mtls"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with focused field set.

    Includes only 6 fields: timestamp, level, message, exc_info, funcName, lineno.
    CI log viewers show one line per record, so module, process, thread and
    logger name are dropped.
    """

    def add_fields(self, log_record, record, message_dict):
        """Override to include only specified fields.

        Args:
            log_record: Dict to be logged as JSON
            record: LogRecord object from logging framework
            message_dict: Dict containing message and args
        """
        super().add_fields(log_record, record, message_dict)

        # Rename levelname to level for cleaner output
        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")

        # Keep only required fields for readable JSON logs
        allowed_fields = {
            "timestamp",
            "level",
            "message",
            "exc_info",
            "funcName",
            "lineno",
        }

        # Remove all fields not in allowed set
        keys_to_remove = [key for key in log_record if key not in allowed_fields]
        for key in keys_to_remove:
            log_record.pop(key)


def _setup_logger() -> logging.Logger:
    """Initialize and configure singleton logger.

    Library modules log through maven_mtls.lib.* loggers, which propagate
    to this one and share its handler.

    Returns:
        Configured logger with CustomJsonFormatter
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Prevent duplicate handlers if module reloaded
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = CustomJsonFormatter(
        fmt="%(timestamp)s %(levelname)s %(funcName)s %(lineno)d %(message)s",
        timestamp=True,
    )
    handler.setFormatter(formatter)

    logger.setLevel(logging.INFO)
    logger.addHandler(handler)
    logger.propagate = False  # Keep CI output to the single JSON stream

    return logger


# Singleton logger instance - import this in scripts
LOGGER = _setup_logger()
