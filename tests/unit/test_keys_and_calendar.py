"""Unit tests for fee entry keys and the academic calendar (pure logic, no DB)."""

from datetime import date

import pytest

from feebook.utils.calendar import AcademicCalendar
from feebook.utils.keys import (
    AcademicKey,
    GroupedKey,
    VehicleKey,
    is_grouped_key,
    parse_fee_entry_key,
)


def test_key_formats():
    assert str(AcademicKey(student_id=12, fee_type_id=3)) == "12-3"
    assert str(VehicleKey(assignment_id=4, month="Jan")) == "v-4-Jan"
    assert str(GroupedKey(invoice_id="INV-77")) == "manual-INV-77"


def test_parse_academic_key():
    key = parse_fee_entry_key("12-3")
    assert key == AcademicKey(student_id=12, fee_type_id=3)


def test_parse_vehicle_key():
    key = parse_fee_entry_key("v-4-Mar")
    assert isinstance(key, VehicleKey)
    assert key.assignment_id == 4
    assert key.month == "Mar"


def test_parse_grouped_key_keeps_dashes_in_invoice():
    key = parse_fee_entry_key("manual-INV-2025-01")
    assert key == GroupedKey(invoice_id="INV-2025-01")
    assert is_grouped_key("manual-INV-2025-01")
    assert not is_grouped_key("1-2")


@pytest.mark.parametrize("text", ["", "abc", "12", "12-x", "v-x-Jun", "v-1-Apr", "v-1"])
def test_parse_rejects_malformed_keys(text):
    with pytest.raises(ValueError):
        parse_fee_entry_key(text)


def test_keys_are_hashable():
    seen = {AcademicKey(student_id=1, fee_type_id=1), AcademicKey(student_id=1, fee_type_id=1)}
    assert len(seen) == 1


def test_calendar_months_wrap_into_second_year():
    cal = AcademicCalendar("2025-2026")
    assert cal.calendar_month("Jun") == (2025, 6)
    assert cal.calendar_month("Dec") == (2025, 12)
    assert cal.calendar_month("Jan") == (2026, 1)
    assert cal.calendar_month("Mar") == (2026, 3)


def test_calendar_due_dates_use_due_day():
    assert AcademicCalendar("2025-2026").due_date("Feb") == date(2026, 2, 10)
    assert AcademicCalendar("2026-2027", due_day=5).due_date("Jun") == date(2026, 6, 5)


def test_calendar_rejects_months_outside_cycle():
    with pytest.raises(ValueError):
        AcademicCalendar("2025-2026").calendar_month("Apr")
