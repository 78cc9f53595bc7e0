"""
Public facade for sheet row helpers.

This module re-exports functions from smaller, focused modules so callers
have one import for key handling, merging, reporting and email checks.
"""

from sheets.sheets_dataframe import (
    record_to_row,
    student_map_to_dataframe,
)
from sheets.sheets_email import validate_email, validate_email_list
from sheets.sheets_keys import (
    coerce_numeric_key,
    extract_student_id,
    is_empty_key,
    normalize_key,
)
from sheets.sheets_merge import build_key_ring, merge_student_maps, student_key

__all__ = [
    "build_key_ring",
    "coerce_numeric_key",
    "extract_student_id",
    "is_empty_key",
    "merge_student_maps",
    "normalize_key",
    "record_to_row",
    "student_key",
    "student_map_to_dataframe",
    "validate_email",
    "validate_email_list",
]
