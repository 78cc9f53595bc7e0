"""
DataFrame helpers for reporting on loaded Student Maps.
"""
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

STUDENT_KEY_COLUMN = 'student_key'


def record_to_row(record: Dict[Any, Any], headers: Sequence[Any]) -> List[Any]:
    """Rebuild a sheet row from a record using the original header order."""
    return [record.get(header, '') for header in headers]


def iter_records(student_map: Dict[Any, Any]):
    """Yield (key, record) pairs from single- or multi-valued maps."""
    for key, value in student_map.items():
        if isinstance(value, list):
            for record in value:
                yield key, record
        else:
            yield key, value


def student_map_to_dataframe(
    student_map: Dict[Any, Any],
    headers: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Flatten a Student Map into one DataFrame row per record.

    Positional (integer) alias entries are dropped; only named columns are
    kept. The map key is added as the first column.

    Args:
        student_map: Map returned by a loader
        headers: Column order; defaults to the first record's named columns
    """
    rows = []
    for key, record in iter_records(student_map):
        row = {STUDENT_KEY_COLUMN: key}
        row.update({name: value for name, value in record.items() if isinstance(name, str)})
        rows.append(row)

    if not rows:
        columns = [STUDENT_KEY_COLUMN] + list(headers or [])
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(rows)
    if headers is not None:
        columns = [STUDENT_KEY_COLUMN] + [h for h in headers if h != STUDENT_KEY_COLUMN]
        df = df.reindex(columns=columns)
    return df
