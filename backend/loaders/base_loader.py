"""
Generic sheet → Student Map loading.

`BaseDataLoader` reads one worksheet through an injected `SheetReader`,
builds a record per data row and indexes the records by the key column.
It is strict: configuration errors, unreadable sheets and malformed numeric
keys all propagate. The fail-soft behaviour used by scheduled runs lives in
`loaders.student_loaders`.
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Protocol, Union

from core.exceptions import ConfigurationError, MalformedKeyError
from core.logger import logger
from core.validators import validate_loader_config
from loaders.config import LoaderConfig
from sheets.sheet_reader import Grid, SheetReader
from sheets.sheets_dates import parse_sheet_date
from sheets.sheets_keys import coerce_numeric_key, extract_student_id, is_empty_key, normalize_key

Record = Dict[Any, Any]
StudentMap = Dict[Any, Union[Record, List[Record]]]


class DataLoader(Protocol):
    """Anything that produces a Student Map."""

    def load_data(self) -> StudentMap:
        ...


@dataclass
class LoadStats:
    """Row counters for the most recent load."""
    rows_read: int = 0
    rows_loaded: int = 0
    rows_skipped: int = 0
    duplicates: int = 0
    malformed_keys: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class BaseDataLoader:
    """Turns one worksheet into a Student Map according to a LoaderConfig."""

    def __init__(self, reader: SheetReader, config: LoaderConfig):
        self.reader = reader
        self.config = validate_loader_config(config)
        self.stats = LoadStats()

    @property
    def sheet_name(self) -> str:
        return self.config.sheet_name

    def load_data(self) -> StudentMap:
        """
        Read the sheet and build the Student Map.

        Raises:
            ConfigurationError: key column missing from the header row
            SourceUnavailableError: the reader could not open the sheet
            MalformedKeyError: a numeric-keyed loader met a non-numeric ID
        """
        self.stats = LoadStats()
        grid = self.reader.read_grid(self.config.sheet_name, self.config.spreadsheet_id)
        student_map = self.process_grid(grid)
        logger.info(
            f"Loaded {len(student_map)} students from '{self.sheet_name}' "
            f"({self.stats.rows_loaded} of {self.stats.rows_read} rows)"
        )
        return student_map

    def process_grid(self, grid: Grid) -> StudentMap:
        """Build the map from an already-read grid (header row first)."""
        if not grid:
            logger.warning(f"Sheet '{self.sheet_name}' is empty")
            return {}

        headers = list(grid[0])
        key_index = self.find_column(headers, self.config.key_column)

        exclude_index = None
        if self.config.exclude_when_present:
            if self.config.exclude_when_present in headers:
                exclude_index = headers.index(self.config.exclude_when_present)
            else:
                logger.warning(
                    f"Filter column '{self.config.exclude_when_present}' not found in "
                    f"sheet '{self.sheet_name}'; all rows kept"
                )

        result: StudentMap = {}
        for offset, row in enumerate(grid[1:]):
            row_number = offset + 2  # 1-based, after the header row
            self.stats.rows_read += 1
            cells = self._fit_row(row, len(headers))

            raw_key = cells[key_index]
            if is_empty_key(raw_key):
                self.stats.rows_skipped += 1
                logger.warning(f"Empty student ID at row {row_number} in sheet '{self.sheet_name}', skipping")
                continue

            if exclude_index is not None and not is_empty_key(cells[exclude_index]):
                self.stats.rows_skipped += 1
                continue

            if self.config.embedded_id:
                key = extract_student_id(raw_key)
                if key is None:
                    self.stats.rows_skipped += 1
                    logger.warning(f"Invalid student ID at row {row_number} in sheet '{self.sheet_name}', skipping")
                    continue
            else:
                key = self.extract_key(raw_key, row_number)
            record = self.create_record(cells, headers)
            self._store(result, key, record)

        return result

    def find_column(self, headers: List[Any], column_name: str) -> int:
        if column_name not in headers:
            raise ConfigurationError(
                f"Key column '{column_name}' not found in sheet '{self.sheet_name}'. "
                f"Available headers: {headers}"
            )
        return headers.index(column_name)

    def extract_key(self, raw_key: Any, row_number: int) -> Any:
        if not self.config.numeric_key:
            return normalize_key(raw_key)

        key = coerce_numeric_key(raw_key)
        if key is None:
            self.stats.malformed_keys += 1
            raise MalformedKeyError(self.sheet_name, row_number, raw_key)
        return key

    def create_record(self, cells: List[Any], headers: List[Any]) -> Record:
        record: Record = {}
        if self.config.positional_aliases:
            # Legacy consumers read attendance rows by column position
            record.update(enumerate(cells))
        record.update(zip(headers, cells))
        return record

    def _store(self, result: StudentMap, key: Any, record: Record) -> None:
        self.stats.rows_loaded += 1
        if self.config.allow_multiple:
            result.setdefault(key, []).append(record)
            return

        if key in result:
            self.stats.duplicates += 1
            if self.config.latest_by and self._is_older(record, result[key]):
                logger.warning(
                    f"Duplicate key '{key}' found in sheet '{self.sheet_name}'. "
                    f"Keeping the row with the latest {self.config.latest_by}."
                )
                return
            logger.warning(f"Duplicate key '{key}' found in sheet '{self.sheet_name}'. Using latest value.")
        result[key] = record

    def _is_older(self, candidate: Record, current: Record) -> bool:
        # Unparseable dates lose to real ones; ties go to the later row
        candidate_date = parse_sheet_date(candidate.get(self.config.latest_by))
        current_date = parse_sheet_date(current.get(self.config.latest_by))
        if current_date is None:
            return False
        return candidate_date is None or candidate_date < current_date

    @staticmethod
    def _fit_row(row: List[Any], width: int) -> List[Any]:
        cells = list(row[:width])
        if len(cells) < width:
            cells.extend([''] * (width - len(cells)))
        return cells


def build_student_map(grid: Grid, config: LoaderConfig, reader: Optional[SheetReader] = None) -> StudentMap:
    """Build a Student Map from an in-memory grid without reading a sheet."""
    return BaseDataLoader(reader, config).process_grid(grid)
