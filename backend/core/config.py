"""
Runtime settings read from the environment.

`app.py` loads `.env` files with python-dotenv before anything here is used,
so local development and scheduled runs share the same variables.
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional

from core.constants import DEFAULT_FORM_URL, DEFAULT_TIMEZONE
from core.exceptions import ConfigurationError


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


def _env_list(name: str) -> List[str]:
    raw = os.getenv(name, '')
    return [item.strip() for item in raw.split(',') if item.strip()]


@dataclass
class Settings:
    """Settings for one scheduled run."""
    spreadsheet_id: str
    attendance_spreadsheet_id: Optional[str] = None
    schedules_spreadsheet_id: Optional[str] = None
    registrations_spreadsheet_id: Optional[str] = None
    tracking_spreadsheet_id: Optional[str] = None
    timezone: str = DEFAULT_TIMEZONE
    debug_mode: bool = False
    form_url: str = DEFAULT_FORM_URL
    sender_email: Optional[str] = None
    holidays: List[str] = field(default_factory=list)
    recipients: List[str] = field(default_factory=list)
    test_recipients: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from environment variables."""
        spreadsheet_id = os.getenv('NAHS_SPREADSHEET_ID')
        if not spreadsheet_id:
            raise ConfigurationError("NAHS_SPREADSHEET_ID environment variable is required")

        return cls(
            spreadsheet_id=spreadsheet_id,
            attendance_spreadsheet_id=os.getenv('NAHS_ATTENDANCE_SPREADSHEET_ID') or None,
            schedules_spreadsheet_id=os.getenv('NAHS_SCHEDULES_SPREADSHEET_ID') or None,
            registrations_spreadsheet_id=os.getenv('NAHS_REGISTRATIONS_SPREADSHEET_ID') or None,
            tracking_spreadsheet_id=os.getenv('NAHS_TRACKING_SPREADSHEET_ID') or None,
            timezone=os.getenv('NAHS_TIMEZONE', DEFAULT_TIMEZONE),
            debug_mode=_env_flag('NAHS_DEBUG_MODE'),
            form_url=os.getenv('NAHS_FORM_URL', DEFAULT_FORM_URL),
            sender_email=os.getenv('NAHS_SENDER_EMAIL') or None,
            holidays=_env_list('NAHS_HOLIDAY_DATES'),
            recipients=_env_list('NAHS_REMINDER_RECIPIENTS'),
            test_recipients=_env_list('NAHS_TEST_RECIPIENTS'),
        )

    def reminder_options(self) -> dict:
        """Options dict accepted by EmailReminderService."""
        options = {
            'debug_mode': self.debug_mode,
            'timezone': self.timezone,
            'form_url': self.form_url,
            'holidays': list(self.holidays),
            'recipients': list(self.recipients),
        }
        if self.test_recipients:
            options['test_recipients'] = list(self.test_recipients)
        return options
