"""
Sheet readers: turn a named worksheet into a grid of cell values.

Loaders only depend on the `SheetReader` protocol, so the Google Sheets
implementation can be swapped for `InMemorySheetReader` in tests or offline
runs. Reads are one-shot: errors are reported immediately, never retried.
"""
import base64
import json
import os
from typing import Any, Dict, List, Optional, Protocol, Tuple, Union

import gspread
import gspread.exceptions
from google.oauth2 import service_account

from core.exceptions import ConfigurationError, SourceUnavailableError
from core.logger import logger

Grid = List[List[Any]]

SCOPES = [
    'https://www.googleapis.com/auth/spreadsheets.readonly',
    'https://www.googleapis.com/auth/drive.readonly',
]


class SheetReader(Protocol):
    """Anything that can return the full grid of a worksheet."""

    def read_grid(self, sheet_name: str, spreadsheet_id: Optional[str] = None) -> Grid:
        ...


def load_service_account_credentials(scopes: Optional[List[str]] = None) -> service_account.Credentials:
    """
    Build service account credentials from the environment.

    Sources are tried in order: SERVICE_ACCOUNT_BASE64, SERVICE_ACCOUNT_JSON,
    then the file at GOOGLE_SERVICE_ACCOUNT_PATH.
    """
    scopes = scopes or SCOPES
    service_account_base64 = os.getenv('SERVICE_ACCOUNT_BASE64')
    service_account_json = os.getenv('SERVICE_ACCOUNT_JSON')

    if service_account_base64:
        try:
            decoded_json = base64.b64decode(service_account_base64).decode('utf-8')
            service_account_info = json.loads(decoded_json)
            return service_account.Credentials.from_service_account_info(
                service_account_info, scopes=scopes
            )
        except Exception as e:
            raise ConfigurationError(f"Invalid SERVICE_ACCOUNT_BASE64: {e}")

    if service_account_json:
        try:
            service_account_info = json.loads(service_account_json)
            return service_account.Credentials.from_service_account_info(
                service_account_info, scopes=scopes
            )
        except (json.JSONDecodeError, ValueError) as e:
            raise ConfigurationError(f"Invalid SERVICE_ACCOUNT_JSON format: {e}")

    # Fall back to file path (for local development)
    service_account_path = os.getenv('GOOGLE_SERVICE_ACCOUNT_PATH', './service_account.json')
    if not os.path.exists(service_account_path):
        raise ConfigurationError(
            f"Service account file not found: {service_account_path}. "
            "Either set SERVICE_ACCOUNT_JSON environment variable or provide a valid file path."
        )
    return service_account.Credentials.from_service_account_file(
        service_account_path, scopes=scopes
    )


class GoogleSheetReader:
    """Reads worksheets from Google Sheets with a service account."""

    def __init__(self, spreadsheet_id: str, client: Optional[gspread.Client] = None):
        """
        Args:
            spreadsheet_id: Default spreadsheet for sheets that don't name their own
            client: Pre-built gspread client; built from the environment when omitted
        """
        if not spreadsheet_id:
            raise ConfigurationError("spreadsheet_id is required for GoogleSheetReader")
        self.spreadsheet_id = spreadsheet_id
        self.client = client or self._initialize_client()

    def _initialize_client(self) -> gspread.Client:
        """Initialize gspread client with service account credentials."""
        try:
            credentials = load_service_account_credentials()
            client = gspread.authorize(credentials)
            logger.info("Google Sheets client initialized successfully")
            return client
        except Exception as e:
            logger.error(f"Error initializing Google Sheets client: {str(e)}", exc_info=True)
            raise

    def read_grid(self, sheet_name: str, spreadsheet_id: Optional[str] = None) -> Grid:
        """
        Read every cell of a worksheet, header row first.

        Numbers are returned unformatted so IDs stay numeric; dates come back
        as their displayed string.
        """
        spreadsheet_id = spreadsheet_id or self.spreadsheet_id
        try:
            spreadsheet = self.client.open_by_key(spreadsheet_id)
            worksheet = spreadsheet.worksheet(sheet_name)
            grid = worksheet.get_all_values(
                value_render_option='UNFORMATTED_VALUE',
                date_time_render_option='FORMATTED_STRING',
            )
        except gspread.exceptions.SpreadsheetNotFound:
            raise SourceUnavailableError(f"Spreadsheet not found: {spreadsheet_id}")
        except gspread.exceptions.WorksheetNotFound:
            raise SourceUnavailableError(
                f"Worksheet '{sheet_name}' not found in spreadsheet {spreadsheet_id}"
            )
        except gspread.exceptions.APIError as e:
            raise SourceUnavailableError(
                f"Google Sheets API error reading '{sheet_name}': {str(e)}"
            )

        logger.debug(f"Read {len(grid)} rows from '{sheet_name}' ({spreadsheet_id})")
        return grid


class InMemorySheetReader:
    """
    Serves grids from a dict, for tests and offline runs.

    Keys are either a sheet name or a `(spreadsheet_id, sheet_name)` tuple;
    the tuple form wins when both are present.
    """

    def __init__(self, sheets: Optional[Dict[Union[str, Tuple[str, str]], Grid]] = None):
        self.sheets = dict(sheets or {})
        self.reads: List[Tuple[Optional[str], str]] = []

    def read_grid(self, sheet_name: str, spreadsheet_id: Optional[str] = None) -> Grid:
        self.reads.append((spreadsheet_id, sheet_name))
        grid = self.sheets.get((spreadsheet_id, sheet_name))
        if grid is None:
            grid = self.sheets.get(sheet_name)
        if grid is None:
            raise SourceUnavailableError(f"Worksheet '{sheet_name}' not found")
        return [list(row) for row in grid]
