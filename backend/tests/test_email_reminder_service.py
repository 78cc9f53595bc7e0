"""Tests for the daily 10-day reminder."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from core.constants import REMINDER_SUBJECT, SHEET_TENTATIVE
from core.exceptions import ConfigurationError
from loaders.student_loaders import tentative_data_loader
from services.email_reminder_service import EmailReminderService
from services.email_sender import LoggingSender
from sheets.sheet_reader import InMemorySheetReader

MILESTONE_DAY = date(2024, 9, 23)  # 10 workdays after Monday 2024-09-09
RECIPIENTS = ['teacher.one@example.org', 'teacher.two@example.org']


@pytest.fixture
def sender():
    return MagicMock()


def make_service(reader, sender, **options):
    options.setdefault('recipients', RECIPIENTS)
    return EmailReminderService(
        student_loader=tentative_data_loader(reader),
        sender=sender,
        options=options,
    )


def test_sends_student_list_on_milestone_day(reader, sender):
    service = make_service(reader, sender, test_date=MILESTONE_DAY)
    result = service.send_daily_reminders()

    assert result == {
        'emails_sent': True,
        'students_count': 2,
        'email_type': 'student_list',
        'recipients': 2,
    }
    recipients, subject, body = sender.send.call_args[0]
    assert recipients == RECIPIENTS
    assert subject == REMINDER_SUBJECT
    assert 'Garcia, Ana (123456), Grade: 10' in body
    assert 'Unknown, Unknown (345678), Grade: Unknown' in body
    assert 'Lopez' not in body
    assert 'Due by end of day, 09-25-2024' in body


def test_sends_no_students_email(reader, sender):
    result = make_service(reader, sender, test_date=date(2024, 9, 20)).send_daily_reminders()
    assert result['email_type'] == 'no_students'
    assert result['students_count'] == 0
    assert "We do not have any students on today's 10-Day list!" in sender.send.call_args[0][2]


def test_skips_weekends(reader, sender):
    result = make_service(reader, sender, test_date='2024-09-21').send_daily_reminders()
    assert result == {
        'emails_sent': False,
        'students_count': 0,
        'reason': 'Weekend (reminders only sent on weekdays)',
    }
    sender.send.assert_not_called()


def test_skips_holidays(reader, sender):
    service = make_service(reader, sender, test_date=MILESTONE_DAY, holidays=['2024-09-23'])
    result = service.send_daily_reminders()
    assert result['reason'] == 'Holiday (reminders not sent on holidays)'
    sender.send.assert_not_called()


def test_holiday_shifts_milestone(reader, sender):
    service = make_service(reader, sender, test_date=date(2024, 9, 24), holidays=['09/16/2024'])
    result = service.send_daily_reminders()
    assert result['students_count'] == 2
    assert 'Lopez' not in service.sender.send.call_args[0][2]


def test_no_student_data(sender):
    loader = MagicMock()
    loader.load_data.return_value = {}
    service = EmailReminderService(loader, sender, {'test_date': MILESTONE_DAY, 'recipients': RECIPIENTS})
    result = service.send_daily_reminders()
    assert result == {'emails_sent': False, 'students_count': 0, 'reason': 'No student data available'}


def test_debug_mode_never_uses_real_sender(reader, sender):
    service = make_service(
        reader, sender,
        debug_mode=True,
        test_date=MILESTONE_DAY,
        test_recipients=['tester@example.org'],
    )
    result = service.send_daily_reminders()

    sender.send.assert_not_called()
    assert isinstance(service.sender, LoggingSender)
    assert service.sender.sent[0]['recipients'] == ['tester@example.org']
    assert result['recipients'] == 1


def test_no_valid_recipients(reader, sender):
    service = make_service(reader, sender, test_date=MILESTONE_DAY, recipients=['bad'])
    result = service.send_daily_reminders()
    assert result['emails_sent'] is False
    assert result['reason'] == 'No recipients configured'
    sender.send.assert_not_called()


def test_sender_required_outside_debug_mode():
    with pytest.raises(ConfigurationError, match='email sender is required'):
        EmailReminderService(options={})


@pytest.mark.parametrize('options, message', [
    ({'timezone': 'Mars/Olympus'}, 'not a known timezone'),
    ({'workdays_for_reminder': -1}, 'non-negative integer'),
    ({'debugMode': True}, 'unknown options: debugMode'),
    ({'holidays': ['not a date']}, 'is not a valid date'),
])
def test_invalid_options(options, message):
    with pytest.raises(ConfigurationError, match=message):
        EmailReminderService(sender=MagicMock(), options=options)


def test_today_uses_timezone(sender):
    service = EmailReminderService(sender=sender, options={'timezone': 'America/Chicago'})
    assert isinstance(service.today(), date)


def test_milestone_uses_first_row_with_start_date(sender):
    reader = InMemorySheetReader({SHEET_TENTATIVE: [
        ['STUDENT ID', 'LAST', 'FIRST', 'GRADE', 'FIRST DAY OF AEP'],
        [456789, 'Reyes', 'Carla', 12, ''],
        [456789, 'Reyes', 'Carla', 12, '09/09/2024'],
    ]})
    result = make_service(reader, sender, test_date=MILESTONE_DAY).send_daily_reminders()

    assert result['students_count'] == 1
    assert 'Reyes, Carla (456789), Grade: 12' in sender.send.call_args[0][2]


def test_serial_number_holidays_match_calendar(sender):
    # 45000 is the Sheets serial for 2023-03-15
    service = EmailReminderService(sender=sender, options={'holidays': [45000]})
    assert service.calendar.is_holiday(date(2023, 3, 15))
