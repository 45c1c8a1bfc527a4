"""Academic year calendar used for vehicle fee due dates"""

from datetime import date
from typing import Tuple

from feebook.models.enums import ACADEMIC_MONTHS

_MONTH_NUMBERS = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}


class AcademicCalendar:
    """
    Maps academic months onto calendar dates.

    The cycle starts in the first year of the academic year string; once the
    cycle wraps past December the remaining months fall in the second year.
    """

    def __init__(self, academic_year: str, due_day: int = 10):
        first, _, second = academic_year.partition("-")
        self.academic_year = academic_year
        self.first_year = int(first)
        self.second_year = int(second)
        self.due_day = due_day
        self.months: Tuple[str, ...] = ACADEMIC_MONTHS

    @classmethod
    def from_settings(cls) -> "AcademicCalendar":
        from feebook.config import settings

        return cls(settings.ACADEMIC_YEAR, settings.VEHICLE_FEE_DUE_DAY)

    def calendar_month(self, month: str) -> Tuple[int, int]:
        """(year, month number) for an academic month label"""
        if month not in self.months:
            raise ValueError(f"Unknown academic month: {month}")
        start = _MONTH_NUMBERS[self.months[0]]
        offset = start - 1 + self.months.index(month)
        year = self.first_year if offset < 12 else self.second_year
        return year, offset % 12 + 1

    def due_date(self, month: str) -> date:
        year, number = self.calendar_month(month)
        return date(year, number, self.due_day)
