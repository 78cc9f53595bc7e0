"""
School-day arithmetic: weekends and district holidays are not workdays.
"""
from datetime import date
from typing import Any, Iterable, List, Optional

import pandas as pd
from pandas.tseries.offsets import CustomBusinessDay

from sheets.sheets_dates import parse_sheet_date


class SchoolCalendar:
    """Weekend/holiday aware calendar."""

    def __init__(self, holidays: Optional[Iterable[Any]] = None):
        parsed = (parse_sheet_date(holiday) for holiday in (holidays or []))
        self.holidays: List[date] = sorted({day for day in parsed if day is not None})
        self._workday = CustomBusinessDay(holidays=self.holidays)

    def is_weekend(self, day: date) -> bool:
        return day.weekday() >= 5

    def is_holiday(self, day: date) -> bool:
        return day in self.holidays

    def is_school_day(self, day: date) -> bool:
        return not self.is_weekend(day) and not self.is_holiday(day)

    def add_workdays(self, start: date, workdays: int) -> date:
        """
        Date reached after counting `workdays` school days after `start`.

        `start` itself never counts, so a Friday start plus one workday is
        the following Monday.
        """
        if workdays <= 0:
            return start
        timestamp = pd.Timestamp(start).normalize()
        return (timestamp + workdays * self._workday).date()
