"""Unit tests for logging setup and the error envelope."""

import json
import logging

from feebook.config import settings
from feebook.core.exceptions import ConflictError, NotFoundError
from feebook.core.logging import LedgerJsonFormatter, build_formatter, setup_logging
from feebook.schemas.responses import ErrorResponse


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("feebook.tests", logging.INFO, __file__, 1, "Payment recorded", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_lines_carry_context():
    line = json.loads(build_formatter("json").format(make_record(correlation_id="req-7", invoice_id="INV-1")))
    assert line["message"] == "Payment recorded"
    assert line["level"] == "INFO"
    assert line["logger"] == "feebook.tests"
    assert line["academic_year"] == settings.ACADEMIC_YEAR
    assert line["correlation_id"] == "req-7"
    assert line["invoice_id"] == "INV-1"


def test_correlation_id_omitted_when_absent():
    line = json.loads(LedgerJsonFormatter().format(make_record()))
    assert "correlation_id" not in line


def test_text_format_is_plain():
    assert not isinstance(build_formatter("text"), LedgerJsonFormatter)


def test_setup_logging_keeps_a_single_handler():
    root = logging.getLogger()
    first = setup_logging(level="warning", log_format="text")
    second = setup_logging(level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)

    assert first is second
    assert sum(1 for h in root.handlers if getattr(h, "_feebook_handler", False)) == 1
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_error_response_from_domain_error():
    body = ErrorResponse.from_error(NotFoundError("Payment", 42)).model_dump()
    assert body == {
        "success": False,
        "error": {"code": "RESOURCE_NOT_FOUND", "message": "Payment 42 does not exist."},
    }
    assert ErrorResponse.from_error(ConflictError("payments")).error.code == "WRITE_CONFLICT"
