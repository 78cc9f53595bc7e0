"""Error types raised while loading sheets and sending reminders"""
from typing import Any


class NahsError(Exception):
    """Base class for all transition-workflow errors"""
    pass


class ConfigurationError(NahsError):
    """Invalid loader or service configuration (e.g. unknown key column)"""
    pass


class SourceUnavailableError(NahsError):
    """A spreadsheet or worksheet could not be opened or read"""
    pass


class MalformedKeyError(NahsError):
    """A key cell could not be coerced for a numeric-keyed loader"""

    def __init__(self, sheet_name: str, row_number: int, value: Any):
        self.sheet_name = sheet_name
        self.row_number = row_number
        self.value = value
        super().__init__(
            f"Malformed student ID {value!r} at row {row_number} in sheet '{sheet_name}'"
        )


class EmailDeliveryError(NahsError):
    """Reminder email could not be delivered"""
    pass
