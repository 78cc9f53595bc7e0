"""
Services that act on loaded student data.

This module exposes the reminder service and health helpers for convenient
imports.
"""

from .email_reminder_service import EmailReminderService  # noqa: F401
from .health import check_service_health, initialize_services  # noqa: F401
