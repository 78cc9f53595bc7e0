"""
Date cell parsing shared by loaders, validators and the school calendar.
"""
from datetime import date, datetime
from typing import Any, Optional

import pandas as pd

from sheets.sheets_keys import is_empty_key

# Google Sheets serial dates count days from 1899-12-30
SHEETS_EPOCH = pd.Timestamp('1899-12-30')


def parse_sheet_date(value: Any) -> Optional[date]:
    """
    Parse a date cell (date, datetime, ISO/US string or Sheets serial number).

    Returns None for empty or unparseable values.
    """
    if is_empty_key(value) or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        if isinstance(value, (int, float)):
            timestamp = SHEETS_EPOCH + pd.to_timedelta(value, unit='D')
        else:
            timestamp = pd.to_datetime(str(value).strip())
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(timestamp):
        return None
    return timestamp.date()
