"""
Daily teacher reminder for students reaching their 10-workday milestone.

Each school day the service loads the TENTATIVE student list, finds the
students whose FIRST DAY OF AEP is exactly N workdays before today, and emails
teachers a list asking for their progress input. On days with no such
students a short "no students today" email is sent instead.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from core.constants import (
    COL_FIRST,
    COL_FIRST_DAY_OF_AEP,
    COL_GRADE,
    COL_LAST,
    COL_STUDENT_ID,
    DEFAULT_FORM_URL,
    DEFAULT_TIMEZONE,
    DUE_WORKDAYS_AFTER,
    REMINDER_SUBJECT,
    WORKDAYS_FOR_REMINDER,
)
from core.exceptions import ConfigurationError
from core.logger import logger
from core.validators import validate_reminder_options
from loaders.base_loader import DataLoader, StudentMap
from services.email_sender import EmailSender, LoggingSender
from services.school_calendar import SchoolCalendar
from sheets.sheets_dates import parse_sheet_date
from sheets.sheets_email import validate_email_list
from sheets.sheets_merge import as_record_list


class EmailReminderService:
    """Finds milestone students and sends the daily teacher reminder."""

    def __init__(
        self,
        student_loader: Optional[DataLoader] = None,
        sender: Optional[EmailSender] = None,
        options: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            student_loader: Source of the student list (normally the TENTATIVE loader)
            sender: Delivery backend; ignored in debug mode
            options: debug_mode, timezone, test_recipients, test_date, form_url,
                workdays_for_reminder, due_workdays_after, holidays, recipients
        """
        options = validate_reminder_options(dict(options or {}))

        self.debug_mode = options.get('debug_mode', False)
        self.timezone = options.get('timezone', DEFAULT_TIMEZONE)
        self.test_recipients = options.get('test_recipients')
        self.test_date = options.get('test_date')
        self.form_url = options.get('form_url', DEFAULT_FORM_URL)
        self.workdays_for_reminder = options.get('workdays_for_reminder', WORKDAYS_FOR_REMINDER)
        self.due_workdays_after = options.get('due_workdays_after', DUE_WORKDAYS_AFTER)
        self.recipients = list(options.get('recipients') or [])
        self.calendar = SchoolCalendar(options.get('holidays'))
        self.student_loader = student_loader

        if self.debug_mode:
            # Debug runs never reach a real mailbox
            self.sender = LoggingSender()
        elif sender is None:
            raise ConfigurationError("An email sender is required unless debug_mode is enabled")
        else:
            self.sender = sender

    def today(self) -> date:
        """Current date in the configured timezone, or the test date."""
        if self.test_date is not None:
            if isinstance(self.test_date, datetime):
                return self.test_date.date()
            if isinstance(self.test_date, date):
                return self.test_date
            return pd.Timestamp(self.test_date).date()
        return pd.Timestamp.now(tz=self.timezone).date()

    def send_daily_reminders(self) -> Dict[str, Any]:
        """
        Run the daily reminder.

        Returns:
            Dict with emails_sent and students_count; when sent, also
            email_type and the number of recipients, otherwise a reason.
        """
        logger.info('=== Starting Email Reminder Service ===')
        today = self.today()
        logger.info(f"Processing reminders for: {today.isoformat()}")

        should_send, reason = self.should_send_reminders(today)
        if not should_send:
            logger.info(f"Reminders not sent: {reason}")
            return {'emails_sent': False, 'students_count': 0, 'reason': reason}

        student_data = self._load_student_data()
        if not student_data:
            logger.warning('No student data available for reminder processing')
            return {'emails_sent': False, 'students_count': 0, 'reason': 'No student data available'}

        students = self.find_students_at_milestone(student_data, today)
        logger.info(f"Found {len(students)} students at {self.workdays_for_reminder}-day milestone")

        recipients = self.get_email_recipients()
        if not recipients:
            logger.warning('No valid reminder recipients configured')
            return {
                'emails_sent': False,
                'students_count': len(students),
                'reason': 'No recipients configured',
            }

        email_type = self._send_reminder_email(students, today, recipients)
        logger.info('=== Email Reminder Service Completed ===')
        return {
            'emails_sent': True,
            'students_count': len(students),
            'email_type': email_type,
            'recipients': len(recipients),
        }

    def should_send_reminders(self, day: date) -> Tuple[bool, str]:
        """Return (send, reason) for the given day."""
        if self.calendar.is_weekend(day):
            return False, 'Weekend (reminders only sent on weekdays)'
        if self.calendar.is_holiday(day):
            return False, 'Holiday (reminders not sent on holidays)'
        return True, 'Valid school day'

    def _load_student_data(self) -> StudentMap:
        if self.student_loader is None:
            raise ConfigurationError("EmailReminderService needs a student loader to send reminders")
        student_data = self.student_loader.load_data()
        logger.info(f"Loaded data for {len(student_data)} students")
        return student_data

    def find_students_at_milestone(self, student_data: StudentMap, today: date) -> List[Dict[str, Any]]:
        """Students whose start date plus the reminder workdays falls on `today`."""
        students = []
        for student_id, value in student_data.items():
            record, start_date = self._first_dated_record(as_record_list(value))
            if start_date is None:
                if self.debug_mode:
                    logger.debug(f"Student {student_id}: Missing {COL_FIRST_DAY_OF_AEP} data")
                continue

            milestone = self.calendar.add_workdays(start_date, self.workdays_for_reminder)
            if milestone != today:
                continue

            students.append({
                'student_id': record.get(COL_STUDENT_ID) or student_id,
                'last_name': record.get(COL_LAST) or 'Unknown',
                'first_name': record.get(COL_FIRST) or 'Unknown',
                'grade': record.get(COL_GRADE) or 'Unknown',
                'start_date': start_date.strftime('%m/%d/%Y'),
                'milestone_date': milestone.strftime('%m/%d/%Y'),
            })
        return students

    @staticmethod
    def _first_dated_record(records: List[Dict[str, Any]]) -> Tuple[Dict[str, Any], Optional[date]]:
        """First record with a parseable start date; multi-row students may leave it blank on some rows."""
        for record in records:
            start_date = parse_sheet_date(record.get(COL_FIRST_DAY_OF_AEP))
            if start_date is not None:
                return record, start_date
        return {}, None

    def get_email_recipients(self) -> List[str]:
        if self.debug_mode and self.test_recipients:
            logger.info(f"Debug mode: Using test recipients - {', '.join(self.test_recipients)}")
            return validate_email_list(self.test_recipients)
        return validate_email_list(self.recipients)

    def _send_reminder_email(self, students: List[Dict[str, Any]], today: date, recipients: List[str]) -> str:
        due_date = self.calendar.add_workdays(today, self.due_workdays_after)
        if students:
            email_type = 'student_list'
            body = self.build_student_list_body(students, due_date)
        else:
            email_type = 'no_students'
            body = self.build_no_students_body()

        self.sender.send(recipients, REMINDER_SUBJECT, body)
        logger.info(f"Sent {email_type} email to {len(recipients)} recipients")
        return email_type

    def build_student_list_body(self, students: List[Dict[str, Any]], due_date: date) -> str:
        student_list = '\n'.join(
            f"{s['last_name']}, {s['first_name']} ({s['student_id']}), Grade: {s['grade']}"
            for s in students
        )
        return (
            "NAHS Teachers,\n\n"
            f"Below is today's list of students that have been enrolled for "
            f"{self.workdays_for_reminder} days at NAHS:\n\n"
            f"{student_list}\n\n"
            f"ACTION ITEM (Due by end of day, {due_date.strftime('%m-%d-%Y')}): "
            f"If you have one of these students on your roster, please go to: {self.form_url} "
            "and provide your input on their academic growth and behavioral progress.\n\n"
            "When inputting the period on the form, select the period that is listed on the "
            "student's schedule, the one you enter their attendance with.\n\n"
            "Thank you"
        )

    def build_no_students_body(self) -> str:
        return (
            "NAHS Teachers,\n\n"
            f"We do not have any students on today's {self.workdays_for_reminder}-Day list!\n\n"
            "Please work on any you have pending from before and be on the look out for "
            "the next list.\n\n"
            "Have a great day."
        )
