"""
Sheet and column names used by the NAHS transition spreadsheets.

Keeping them in one place means a renamed tab or header only needs to be
changed here.
"""

# Worksheet (tab) names
SHEET_TENTATIVE = 'TENTATIVE-Version2'
SHEET_CONTACT_INFO = 'ContactInfo'
SHEET_ENTRY_WITHDRAWAL = 'Entry_Withdrawal'
SHEET_WITHDRAWN = 'Withdrawn'
SHEET_WD_OTHER = 'W/D Other'
SHEET_SCHEDULES = 'Schedules'
SHEET_ATTENDANCE = 'Alt_HS_Attendance_Enrollment_Count'
SHEET_FORM_RESPONSES = 'Form Responses 1'
SHEET_REGISTRATIONS = 'Registrations SY 24.25'
SHEET_TRACKING = 'Sheet1'

# Column headers
COL_STUDENT_ID = 'STUDENT ID'
COL_STUDENT_ID_CONTACT = 'Student ID'
COL_STUDENT_ID_STU = 'STU ID'
COL_FIRST = 'FIRST'
COL_LAST = 'LAST'
COL_GRADE = 'GRADE'
COL_FIRST_DAY_OF_AEP = 'FIRST DAY OF AEP'
COL_WITHDRAW_DATE = 'Wdraw Date'
COL_STUDENT = 'Student'  # "Last, First (123456)" in form responses
COL_START_DATE = 'Start Date'
COL_STUDENT_FIRST_NAME = 'Student First Name'
COL_STUDENT_LAST_NAME = 'Student Last Name'
COL_STUDENT_NAME_FULL = 'Student Name(Last, First)'

# Reminder defaults
DEFAULT_TIMEZONE = 'America/Chicago'
DEFAULT_FORM_URL = 'https://forms.gle/1NirWqZkvcABGgYc9'
WORKDAYS_FOR_REMINDER = 10
DUE_WORKDAYS_AFTER = 2
REMINDER_SUBJECT = "Transition Reminder: Today's List of Students with 10 Days at NAHS"
