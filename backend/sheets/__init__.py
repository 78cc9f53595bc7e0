"""
Google Sheets access and row helpers for the transition spreadsheets.

This module exposes the sheet readers for convenient imports.
"""

from .sheet_reader import (  # noqa: F401
    GoogleSheetReader,
    InMemorySheetReader,
    SheetReader,
)
