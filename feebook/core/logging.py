"""Process-wide logging: JSON lines in deployed environments, plain text locally"""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from feebook.config import settings

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
JSON_FIELDS = "%(asctime)s %(level)s %(name)s %(message)s"
TEXT_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

# Libraries that log every request or statement at INFO
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


class LedgerJsonFormatter(jsonlogger.JsonFormatter):
    """
    Adds the deployment context to each line.

    ``correlation_id`` is only present when the caller passed it in ``extra``;
    request handlers pass the id set by RequestIDMiddleware.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.update(
            level=record.levelname,
            logger=record.name,
            environment=settings.ENVIRONMENT,
            app_name=settings.APP_NAME,
            academic_year=settings.ACADEMIC_YEAR,
        )
        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id is not None:
            log_record["correlation_id"] = correlation_id


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return LedgerJsonFormatter(fmt=JSON_FIELDS, datefmt=DATE_FORMAT)
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> logging.Handler:
    """
    Attach the stdout handler to the root logger.

    Calling it again reconfigures the existing handler instead of adding a
    second one.
    """
    root = logging.getLogger()
    handler = next((h for h in root.handlers if getattr(h, "_feebook_handler", False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler._feebook_handler = True
        root.addHandler(handler)

    handler.setFormatter(build_formatter(log_format or settings.LOG_FORMAT))
    root.setLevel((level or settings.LOG_LEVEL).upper())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
