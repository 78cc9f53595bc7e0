"""
Fail-soft loaders for each transition sheet.

A reporting run reads several sheets; one missing or broken sheet must not
abort the rest. `StudentDataLoader` wraps `BaseDataLoader` and turns every
failure except a bad configuration into an empty map plus a logged error.
"""
from dataclasses import replace
from typing import Dict, Iterable, Optional

from core.exceptions import ConfigurationError, MalformedKeyError, SourceUnavailableError
from core.logger import logger
from loaders.base_loader import BaseDataLoader, LoadStats, StudentMap
from loaders.config import (
    ALL_LOADER_CONFIGS,
    CONTACT_DATA,
    ENTRY_WITHDRAWAL_DATA,
    FORM_RESPONSES_DATA,
    REGISTRATION_DATA,
    SCHEDULE_DATA,
    STUDENT_ATTENDANCE_DATA,
    TENTATIVE_DATA,
    TRACKING_DATA,
    WD_OTHER_DATA,
    WITHDRAWN_DATA,
    LoaderConfig,
)
from sheets.sheet_reader import SheetReader


class StudentDataLoader:
    """Loads one configured sheet, returning {} instead of raising on read failures."""

    def __init__(self, reader: SheetReader, config: LoaderConfig):
        self.config = config
        self.loader = BaseDataLoader(reader, config)
        self.last_error: Optional[Exception] = None

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def stats(self) -> LoadStats:
        return self.loader.stats

    def load_data(self) -> StudentMap:
        self.last_error = None
        logger.info(f"Loading {self.name} data from '{self.config.sheet_name}'...")
        try:
            return self.loader.load_data()
        except ConfigurationError:
            raise
        except SourceUnavailableError as e:
            self.last_error = e
            logger.warning(f"{self.name} data unavailable, continuing without it: {str(e)}")
        except MalformedKeyError as e:
            self.last_error = e
            logger.error(
                f"{self.name} data rejected ({self.stats.malformed_keys} malformed key): {str(e)}"
            )
        except Exception as e:
            self.last_error = e
            logger.error(f"Error loading {self.name} data: {str(e)}", exc_info=True)
        return {}


def contact_data_loader(reader: SheetReader) -> StudentDataLoader:
    return StudentDataLoader(reader, CONTACT_DATA)


def student_attendance_data_loader(reader: SheetReader, spreadsheet_id: Optional[str] = None) -> StudentDataLoader:
    config = STUDENT_ATTENDANCE_DATA
    if spreadsheet_id:
        config = replace(config, spreadsheet_id=spreadsheet_id)
    return StudentDataLoader(reader, config)


def entry_withdrawal_data_loader(reader: SheetReader) -> StudentDataLoader:
    return StudentDataLoader(reader, ENTRY_WITHDRAWAL_DATA)


def tentative_data_loader(reader: SheetReader) -> StudentDataLoader:
    return StudentDataLoader(reader, TENTATIVE_DATA)


def load_contact_data(reader: SheetReader) -> StudentMap:
    """Contact rows per student, one record per guardian row."""
    return contact_data_loader(reader).load_data()


def load_student_attendance_data(reader: SheetReader, spreadsheet_id: Optional[str] = None) -> StudentMap:
    """Attendance and enrollment counts keyed by numeric student ID."""
    return student_attendance_data_loader(reader, spreadsheet_id).load_data()


def load_entry_withdrawal_data(reader: SheetReader) -> StudentMap:
    return entry_withdrawal_data_loader(reader).load_data()


def load_tentative_data(reader: SheetReader) -> StudentMap:
    return tentative_data_loader(reader).load_data()


def load_withdrawn_data(reader: SheetReader) -> StudentMap:
    return StudentDataLoader(reader, WITHDRAWN_DATA).load_data()


def load_wd_other_data(reader: SheetReader) -> StudentMap:
    return StudentDataLoader(reader, WD_OTHER_DATA).load_data()


def load_schedule_data(reader: SheetReader) -> StudentMap:
    """Active class rows per student; rows with a withdraw date are skipped."""
    return StudentDataLoader(reader, SCHEDULE_DATA).load_data()


def load_form_responses_data(reader: SheetReader) -> StudentMap:
    """Teacher form responses per student, keyed by the ID embedded in the Student column."""
    return StudentDataLoader(reader, FORM_RESPONSES_DATA).load_data()


def load_registration_data(reader: SheetReader, spreadsheet_id: Optional[str] = None) -> StudentMap:
    """Latest registration row per student."""
    config = REGISTRATION_DATA
    if spreadsheet_id:
        config = replace(config, spreadsheet_id=spreadsheet_id)
    return StudentDataLoader(reader, config).load_data()


def load_tracking_data(reader: SheetReader, spreadsheet_id: Optional[str] = None) -> StudentMap:
    config = TRACKING_DATA
    if spreadsheet_id:
        config = replace(config, spreadsheet_id=spreadsheet_id)
    return StudentDataLoader(reader, config).load_data()

def load_all_sources(
    reader: SheetReader,
    configs: Optional[Iterable[LoaderConfig]] = None,
) -> Dict[str, StudentMap]:
    """
    Load every configured sheet, one map per loader name.

    Sheets load one after another and each result is independent. A
    configuration error only empties that source so the run continues.
    """
    configs = list(configs) if configs is not None else list(ALL_LOADER_CONFIGS)
    results: Dict[str, StudentMap] = {}
    for config in configs:
        try:
            results[config.name] = StudentDataLoader(reader, config).load_data()
        except ConfigurationError as e:
            logger.error(f"Skipping {config.name} data, bad configuration: {str(e)}")
            results[config.name] = {}

    loaded = sum(1 for student_map in results.values() if student_map)
    logger.info(f"Loaded {loaded} of {len(results)} data sources")
    return results
