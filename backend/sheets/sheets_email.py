"""
Email validation helpers for reminder recipients.
"""
import re
from typing import Iterable, List

import pandas as pd

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"


def validate_email(email: str) -> bool:
    """
    Validate email address format.

    Args:
        email: Email address string
    """
    if not email or pd.isna(email):
        return False

    return bool(re.match(EMAIL_PATTERN, str(email).strip()))


def validate_email_list(emails: Iterable[str]) -> List[str]:
    """
    Keep valid addresses, lower-cased, de-duplicated and sorted.

    Args:
        emails: Email addresses, possibly with duplicates or blanks
    """
    valid_emails = set()
    for email in emails:
        if validate_email(email):
            valid_emails.add(str(email).strip().lower())
    return sorted(valid_emails)
