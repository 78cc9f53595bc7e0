"""Tests for the fail-soft per-sheet loaders."""

import logging
from dataclasses import replace

import pytest

from core.constants import (
    SHEET_ATTENDANCE,
    SHEET_CONTACT_INFO,
    SHEET_FORM_RESPONSES,
    SHEET_REGISTRATIONS,
    SHEET_TRACKING,
)
from core.exceptions import ConfigurationError, MalformedKeyError, SourceUnavailableError
from loaders.config import (
    ENTRY_WITHDRAWAL_DATA,
    STUDENT_ATTENDANCE_DATA,
    configs_for_settings,
)
from loaders.student_loaders import (
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
    load_withdrawn_data,
    student_attendance_data_loader,
)
from core.config import Settings
from sheets.sheet_reader import InMemorySheetReader


def test_contact_data_groups_guardians(reader):
    contacts = load_contact_data(reader)
    assert list(contacts) == [123456, 234567]
    assert [c['Guardian 1 Email'] for c in contacts[123456]] == ['mom@example.com', 'dad@example.com']


def test_attendance_keyed_by_number_with_positional_access(reader):
    attendance = load_student_attendance_data(reader)
    assert list(attendance) == [123456, 234567]
    record = attendance[123456]
    assert record['Days Attended'] == 8
    assert record[3] == 8
    assert record['STU ID'] == '123456'


def test_entry_withdrawal_single_record(reader):
    data = load_entry_withdrawal_data(reader)
    assert data[345678]['Student First Name'] == 'Cruz'


def test_schedule_skips_withdrawn_classes(reader):
    schedules = load_schedule_data(reader)
    assert [s['Course Title'] for s in schedules[123456]] == ['English II', 'Biology']


def test_tentative_is_multi_valued(reader):
    tentative = load_tentative_data(reader)
    assert isinstance(tentative[123456], list)


def test_missing_sheet_returns_empty_map(reader, caplog):
    loader = StudentDataLoader(reader, replace(ENTRY_WITHDRAWAL_DATA, sheet_name='Nope'))
    with caplog.at_level(logging.WARNING):
        assert loader.load_data() == {}
    assert isinstance(loader.last_error, SourceUnavailableError)
    assert 'entry_withdrawal data unavailable' in caplog.text


def test_withdrawn_sheet_absent_is_not_fatal(reader):
    assert load_withdrawn_data(reader) == {}


def test_malformed_attendance_id_returns_empty_map(caplog):
    grid = [['Campus', 'Student Name', 'STU ID'], ['NAHS', 'Ana', 123456], ['NAHS', 'Bad', 'N/A']]
    reader = InMemorySheetReader({SHEET_ATTENDANCE: grid})
    loader = student_attendance_data_loader(reader)
    with caplog.at_level(logging.ERROR):
        assert loader.load_data() == {}
    assert isinstance(loader.last_error, MalformedKeyError)
    assert loader.stats.malformed_keys == 1
    assert "Malformed student ID 'N/A' at row 3" in caplog.text


def test_configuration_error_still_propagates():
    reader = InMemorySheetReader({SHEET_CONTACT_INFO: [['Name'], ['Ana']]})
    with pytest.raises(ConfigurationError):
        load_contact_data(reader)


def test_attendance_uses_external_spreadsheet():
    grid = [['STU ID', 'Days'], [1, 2]]
    reader = InMemorySheetReader({('attendance-id', SHEET_ATTENDANCE): grid})
    assert load_student_attendance_data(reader, spreadsheet_id='attendance-id') == {1: {0: 1, 1: 2, 'STU ID': 1, 'Days': 2}}
    assert reader.reads == [('attendance-id', SHEET_ATTENDANCE)]


def test_load_all_sources_survives_failures(reader):
    bad = replace(STUDENT_ATTENDANCE_DATA, name='broken', key_column='Missing')
    results = load_all_sources(reader, [ENTRY_WITHDRAWAL_DATA, bad])
    assert list(results) == ['entry_withdrawal', 'broken']
    assert results['broken'] == {}
    assert len(results['entry_withdrawal']) == 2


def test_load_all_sources_defaults_to_every_sheet(reader):
    results = load_all_sources(reader)
    assert set(results) == {
        'tentative', 'contact', 'attendance', 'entry_withdrawal',
        'withdrawn', 'wd_other', 'schedules',
        'form_responses', 'registrations', 'tracking',
    }
    assert results['withdrawn'] == {}
    assert results['form_responses'] == {}


def test_configs_for_settings_applies_external_ids():
    settings = Settings(spreadsheet_id='main', attendance_spreadsheet_id='att', schedules_spreadsheet_id='sch', tracking_spreadsheet_id='trk')
    configs = configs_for_settings(settings)
    assert configs['attendance'].spreadsheet_id == 'att'
    assert configs['schedules'].spreadsheet_id == 'sch'
    assert configs['tracking'].spreadsheet_id == 'trk'
    assert configs['registrations'].spreadsheet_id is None
    assert configs['contact'].spreadsheet_id is None


def test_form_responses_keyed_by_embedded_id(caplog):
    reader = InMemorySheetReader({SHEET_FORM_RESPONSES: [
        ['Timestamp', 'Email Address', 'Student', 'Academic Growth'],
        ['9/24/2024 8:00:00', 'flores@example.org', 'Garcia, Ana (123456)', 'Improving'],
        ['9/24/2024 9:00:00', 'ruiz@example.org', 'Garcia, Ana (123456)', 'Steady'],
        ['9/24/2024 9:30:00', 'torres@example.org', 'Garcia, Ana', 'Missing ID'],
    ]})
    with caplog.at_level(logging.WARNING):
        responses = load_form_responses_data(reader)
    assert list(responses) == [123456]
    assert [r['Email Address'] for r in responses[123456]] == ['flores@example.org', 'ruiz@example.org']
    assert 'Invalid student ID at row 4' in caplog.text


def test_registration_keeps_latest_start_date():
    grid = [
        ['STUDENT ID', 'Home Campus', 'Start Date'],
        [123456, 'North HS', '01/08/2025'],
        [123456, 'South HS', '08/19/2024'],
        [234567, 'East HS', '08/26/2024'],
    ]
    reader = InMemorySheetReader({('reg-id', SHEET_REGISTRATIONS): grid})
    registrations = load_registration_data(reader, spreadsheet_id='reg-id')
    assert registrations[123456]['Home Campus'] == 'North HS'
    assert registrations[234567]['Home Campus'] == 'East HS'


def test_tracking_reads_external_sheet():
    reader = InMemorySheetReader({('trk-id', SHEET_TRACKING): [['STUDENT ID', 'Status'], [123456, 'Returned']]})
    assert load_tracking_data(reader, spreadsheet_id='trk-id') == {123456: {'STUDENT ID': 123456, 'Status': 'Returned'}}
    assert reader.reads == [('trk-id', SHEET_TRACKING)]
