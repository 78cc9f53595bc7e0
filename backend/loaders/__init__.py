"""
Sheet loaders for the NAHS transition workflow.

Architecture:
    SheetReader → BaseDataLoader (strict) → StudentDataLoader (fail-soft)

Modules:
    config: LoaderConfig and one config per sheet
    base_loader: grid → Student Map
    student_loaders: per-sheet loaders and the aggregated run
"""

from .base_loader import BaseDataLoader, DataLoader, LoadStats, build_student_map
from .config import LoaderConfig
from .student_loaders import (
    StudentDataLoader,
    load_all_sources,
    load_contact_data,
    load_entry_withdrawal_data,
    load_form_responses_data,
    load_registration_data,
    load_schedule_data,
    load_student_attendance_data,
    load_tentative_data,
    load_tracking_data,
    load_wd_other_data,
    load_withdrawn_data,
)

__all__ = [
    'BaseDataLoader',
    'DataLoader',
    'LoadStats',
    'LoaderConfig',
    'StudentDataLoader',
    'build_student_map',
    'load_all_sources',
    'load_contact_data',
    'load_entry_withdrawal_data',
    'load_form_responses_data',
    'load_registration_data',
    'load_schedule_data',
    'load_student_attendance_data',
    'load_tentative_data',
    'load_tracking_data',
    'load_wd_other_data',
    'load_withdrawn_data',
]
