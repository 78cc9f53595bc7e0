import pytest

from core.constants import (
    SHEET_ATTENDANCE,
    SHEET_CONTACT_INFO,
    SHEET_ENTRY_WITHDRAWAL,
    SHEET_SCHEDULES,
    SHEET_TENTATIVE,
)
from sheets.sheet_reader import InMemorySheetReader


@pytest.fixture
def contact_grid():
    return [
        ['Current Building', 'Student ID', 'Student Name', 'Guardian 1 Email'],
        ['NAHS', 123456, 'Garcia, Ana', 'mom@example.com'],
        ['NAHS', 123456, 'Garcia, Ana', 'dad@example.com'],
        ['NAHS', 234567, 'Lopez, Ben', 'ben.parent@example.com'],
    ]


@pytest.fixture
def attendance_grid():
    return [
        ['Campus', 'Student Name', 'STU ID', 'Days Attended', 'Days Enrolled'],
        ['NAHS', 'Garcia, Ana', '123456', 8, 10],
        ['NAHS', 'Lopez, Ben', 234567.0, 9, 9],
    ]


@pytest.fixture
def entry_withdrawal_grid():
    return [
        ['Student ID', 'Student First Name', 'Student Last Name', 'Grade', 'Entry Date'],
        [123456, 'Ana', 'Garcia', 10, '08/19/2024'],
        [345678, 'Cruz', 'Diaz', 11, '08/26/2024'],
    ]


@pytest.fixture
def tentative_grid():
    return [
        ['STUDENT ID', 'LAST', 'FIRST', 'GRADE', 'FIRST DAY OF AEP'],
        [123456, 'Garcia', 'Ana', 10, '09/09/2024'],
        [234567, 'Lopez', 'Ben', 9, '09/10/2024'],
        [345678, '', '', '', '2024-09-09'],
    ]


@pytest.fixture
def schedule_grid():
    return [
        ['STUDENT ID', 'Teacher Name', 'Course Title', 'Per Beg', 'Wdraw Date'],
        [123456, 'Flores, Oscar', 'English II', '1st', ''],
        [123456, 'Torres, Omar', 'Algebra I', '2nd', '09/12/2024'],
        [123456, 'Ruiz, Patricia', 'Biology', '3rd', ''],
    ]


@pytest.fixture
def reader(contact_grid, attendance_grid, entry_withdrawal_grid, tentative_grid, schedule_grid):
    return InMemorySheetReader({
        SHEET_CONTACT_INFO: contact_grid,
        SHEET_ATTENDANCE: attendance_grid,
        SHEET_ENTRY_WITHDRAWAL: entry_withdrawal_grid,
        SHEET_TENTATIVE: tentative_grid,
        SHEET_SCHEDULES: schedule_grid,
    })
