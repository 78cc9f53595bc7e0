"""Validation for loader configurations and reminder service options"""
from typing import Any, Dict, List

import pandas as pd

from core.exceptions import ConfigurationError
from sheets.sheets_dates import parse_sheet_date

REMINDER_OPTIONS = {
    'debug_mode',
    'timezone',
    'test_recipients',
    'test_date',
    'form_url',
    'workdays_for_reminder',
    'due_workdays_after',
    'holidays',
    'recipients',
}


def validate_loader_config(config: Any) -> Any:
    """Validate a LoaderConfig before it is used to read a sheet"""
    errors = []
    
    if not config.name or not isinstance(config.name, str):
        errors.append('name is required and must be a non-empty string')
    
    if not config.sheet_name or not isinstance(config.sheet_name, str):
        errors.append('sheet_name is required and must be a non-empty string')
    
    if not config.key_column or not isinstance(config.key_column, str):
        errors.append('key_column is required and must be a non-empty string')
    
    if not isinstance(config.allow_multiple, bool):
        errors.append('allow_multiple must be a boolean')
    
    if config.spreadsheet_id is not None and not isinstance(config.spreadsheet_id, str):
        errors.append('spreadsheet_id must be a string')
    
    if config.exclude_when_present is not None and not isinstance(config.exclude_when_present, str):
        errors.append('exclude_when_present must be a column name')
    
    if not isinstance(config.embedded_id, bool):
        errors.append('embedded_id must be a boolean')
    
    if config.latest_by is not None:
        if not isinstance(config.latest_by, str) or not config.latest_by:
            errors.append('latest_by must be a column name')
        elif config.allow_multiple:
            errors.append('latest_by only applies when allow_multiple is False')
    
    if errors:
        raise ConfigurationError('; '.join(errors))
    
    return config


def _is_list_of_str(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


def validate_reminder_options(options: Dict[str, Any]) -> Dict[str, Any]:
    """Validate EmailReminderService options"""
    if not isinstance(options, dict):
        raise ConfigurationError('options must be a dict')
    
    errors: List[str] = []
    
    unknown = sorted(set(options) - REMINDER_OPTIONS)
    if unknown:
        errors.append(f"unknown options: {', '.join(unknown)}")
    
    if 'debug_mode' in options and not isinstance(options['debug_mode'], bool):
        errors.append('debug_mode must be a boolean')
    
    if 'timezone' in options:
        try:
            pd.Timestamp.now(tz=options['timezone'])
        except Exception:
            errors.append(f"timezone '{options['timezone']}' is not a known timezone")
    
    for key in ('workdays_for_reminder', 'due_workdays_after'):
        if key in options:
            value = options[key]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(f'{key} must be a non-negative integer')
    
    for key in ('test_recipients', 'recipients'):
        if options.get(key) is not None and not _is_list_of_str(options[key]):
            errors.append(f'{key} must be a list of strings')
    
    if options.get('holidays') is not None:
        if not isinstance(options['holidays'], (list, tuple)):
            errors.append('holidays must be a list of dates')
        else:
            for holiday in options['holidays']:
                # Same reading as SchoolCalendar: ints are Sheets serial dates
                if parse_sheet_date(holiday) is None:
                    errors.append(f'holiday {holiday!r} is not a valid date')
    
    if options.get('test_date') is not None:
        try:
            pd.Timestamp(options['test_date'])
        except (ValueError, TypeError):
            errors.append('test_date must be a date')
    
    if 'form_url' in options and (not isinstance(options['form_url'], str) or not options['form_url']):
        errors.append('form_url must be a non-empty string')
    
    if errors:
        raise ConfigurationError('; '.join(errors))
    
    return options
