"""
Loader configurations for the NAHS transition sheets.

Each loader is plain data: which sheet to read, which column identifies the
student, and whether a student may own several rows. External spreadsheet
IDs are filled in at runtime from Settings (see `configs_for_settings`).
"""
from dataclasses import dataclass, replace
from typing import Dict, Optional

from core.constants import (
    COL_START_DATE,
    COL_STUDENT,
    COL_STUDENT_ID,
    COL_STUDENT_ID_CONTACT,
    COL_STUDENT_ID_STU,
    COL_WITHDRAW_DATE,
    SHEET_ATTENDANCE,
    SHEET_CONTACT_INFO,
    SHEET_ENTRY_WITHDRAWAL,
    SHEET_FORM_RESPONSES,
    SHEET_REGISTRATIONS,
    SHEET_SCHEDULES,
    SHEET_TENTATIVE,
    SHEET_TRACKING,
    SHEET_WD_OTHER,
    SHEET_WITHDRAWN,
)


@dataclass(frozen=True)
class LoaderConfig:
    """How to turn one sheet into a Student Map."""
    name: str
    sheet_name: str
    key_column: str
    allow_multiple: bool = False
    spreadsheet_id: Optional[str] = None  # None: the reader's default spreadsheet
    numeric_key: bool = False
    positional_aliases: bool = False  # also index each record by column position
    exclude_when_present: Optional[str] = None  # skip rows where this column is filled
    embedded_id: bool = False  # key cell holds text like "Garcia, Ana (123456)"
    latest_by: Optional[str] = None  # date column deciding which duplicate row wins


CONTACT_DATA = LoaderConfig(
    name='contact',
    sheet_name=SHEET_CONTACT_INFO,
    key_column=COL_STUDENT_ID_CONTACT,
    allow_multiple=True,  # one row per guardian
)

STUDENT_ATTENDANCE_DATA = LoaderConfig(
    name='attendance',
    sheet_name=SHEET_ATTENDANCE,
    key_column=COL_STUDENT_ID_STU,
    numeric_key=True,
    positional_aliases=True,
)

ENTRY_WITHDRAWAL_DATA = LoaderConfig(
    name='entry_withdrawal',
    sheet_name=SHEET_ENTRY_WITHDRAWAL,
    key_column=COL_STUDENT_ID_CONTACT,
)

TENTATIVE_DATA = LoaderConfig(
    name='tentative',
    sheet_name=SHEET_TENTATIVE,
    key_column=COL_STUDENT_ID,
    allow_multiple=True,
)

WITHDRAWN_DATA = LoaderConfig(
    name='withdrawn',
    sheet_name=SHEET_WITHDRAWN,
    key_column=COL_STUDENT_ID,
)

WD_OTHER_DATA = LoaderConfig(
    name='wd_other',
    sheet_name=SHEET_WD_OTHER,
    key_column=COL_STUDENT_ID,
)

SCHEDULE_DATA = LoaderConfig(
    name='schedules',
    sheet_name=SHEET_SCHEDULES,
    key_column=COL_STUDENT_ID,
    allow_multiple=True,
    exclude_when_present=COL_WITHDRAW_DATE,  # dropped classes
)

FORM_RESPONSES_DATA = LoaderConfig(
    name='form_responses',
    sheet_name=SHEET_FORM_RESPONSES,
    key_column=COL_STUDENT,
    allow_multiple=True,  # one response per teacher
    embedded_id=True,
)

REGISTRATION_DATA = LoaderConfig(
    name='registrations',
    sheet_name=SHEET_REGISTRATIONS,
    key_column=COL_STUDENT_ID,
    latest_by=COL_START_DATE,  # re-registrations keep the newest row
)

TRACKING_DATA = LoaderConfig(
    name='tracking',
    sheet_name=SHEET_TRACKING,
    key_column=COL_STUDENT_ID,
)

ALL_LOADER_CONFIGS = [
    TENTATIVE_DATA,
    CONTACT_DATA,
    STUDENT_ATTENDANCE_DATA,
    ENTRY_WITHDRAWAL_DATA,
    WITHDRAWN_DATA,
    WD_OTHER_DATA,
    SCHEDULE_DATA,
    FORM_RESPONSES_DATA,
    REGISTRATION_DATA,
    TRACKING_DATA,
]


def configs_for_settings(settings) -> Dict[str, LoaderConfig]:
    """Return all loader configs by name, with external spreadsheet IDs applied."""
    configs = {config.name: config for config in ALL_LOADER_CONFIGS}
    external_ids = {
        'attendance': settings.attendance_spreadsheet_id,
        'schedules': settings.schedules_spreadsheet_id,
        'registrations': settings.registrations_spreadsheet_id,
        'tracking': settings.tracking_spreadsheet_id,
    }
    for name, spreadsheet_id in external_ids.items():
        if spreadsheet_id:
            configs[name] = replace(configs[name], spreadsheet_id=spreadsheet_id)
    return configs
