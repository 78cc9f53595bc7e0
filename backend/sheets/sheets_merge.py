"""
Utilities for joining Student Maps from different sheets by student ID.
"""
from typing import Any, Dict, List, Optional, Tuple

from core.constants import (
    COL_FIRST,
    COL_GRADE,
    COL_LAST,
    COL_STUDENT_FIRST_NAME,
    COL_STUDENT_ID,
    COL_STUDENT_LAST_NAME,
    COL_STUDENT_NAME_FULL,
)
from core.logger import logger
from sheets.sheets_keys import extract_student_id, normalize_key

FIRST_NAME_COLUMNS = [COL_STUDENT_FIRST_NAME, 'First Name', COL_FIRST, 'First']
LAST_NAME_COLUMNS = [COL_STUDENT_LAST_NAME, 'Last Name', COL_LAST, 'Last']
GRADE_COLUMNS = ['Grade', COL_GRADE, 'Grd Lvl', 'Grade Level']


def student_key(value: Any) -> Any:
    """
    Canonical form of a student ID for matching across sheets.

    Sheets disagree on ID types (123456, "123456", "Name (123456)"), so
    anything that looks like an ID becomes an int; other values are only
    stripped.
    """
    student_id = extract_student_id(value)
    if student_id is not None:
        return student_id
    return normalize_key(value)


def as_record_list(value: Any) -> List[Dict[Any, Any]]:
    """Map values are a record or a list of records; always return a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def build_key_ring(student_map: Dict[Any, Any]) -> Dict[Any, List[Dict[Any, Any]]]:
    """
    Index a Student Map by canonical student key.

    Two raw keys that canonicalize to the same ID (e.g. "123456" and 123456)
    share one entry, in map order.
    """
    key_ring: Dict[Any, List[Dict[Any, Any]]] = {}
    for key, value in student_map.items():
        key_ring.setdefault(student_key(key), []).extend(as_record_list(value))
    return key_ring


def _first_value(records: List[Dict[Any, Any]], columns: List[str]) -> str:
    for record in records:
        for column in columns:
            value = record.get(column)
            if value not in (None, ''):
                return str(value).strip()
    return ''


def _split_full_name(records: List[Dict[Any, Any]]) -> Tuple[str, str]:
    """Split "Last, First" into (first, last)."""
    full_name = _first_value(records, [COL_STUDENT_NAME_FULL])
    parts = full_name.split(',')
    if len(parts) >= 2:
        return parts[1].strip(), parts[0].strip()
    return '', ''


def resolve_student_name(
    record: Dict[Any, Any],
    fallbacks: List[List[Dict[Any, Any]]],
) -> Tuple[str, str, str]:
    """
    Return (first, last, grade) for a student.

    The base record is used first; each fallback source is consulted in order
    until a first name is found. Grade is filled from the same source when
    still missing.
    """
    first = _first_value([record], [COL_FIRST])
    last = _first_value([record], [COL_LAST])
    grade = _first_value([record], [COL_GRADE])

    for records in fallbacks:
        if first:
            break
        if not records:
            continue
        first = _first_value(records, FIRST_NAME_COLUMNS)
        last = last or _first_value(records, LAST_NAME_COLUMNS)
        if not first or not last:
            full_first, full_last = _split_full_name(records)
            first = first or full_first
            last = last or full_last
        grade = grade or _first_value(records, GRADE_COLUMNS)

    return first, last, grade


def merge_student_maps(
    base_map: Dict[Any, Any],
    sources: Dict[str, Dict[Any, Any]],
    name_sources: Optional[List[str]] = None,
) -> Dict[Any, Dict[str, Any]]:
    """
    Join every student in `base_map` with their records from other sheets.

    Args:
        base_map: Authoritative student list (normally the TENTATIVE sheet)
        sources: Other loaded maps by source name
        name_sources: Source names consulted, in order, when the base record
            has no first name. Defaults to every source in `sources` order.

    Returns:
        Dict keyed like `base_map`. Each value holds the resolved
        STUDENT ID/FIRST/LAST/GRADE, the base `record`, and `sources`
        mapping each source name to the matched record list (possibly empty).
    """
    key_rings = {name: build_key_ring(student_map) for name, student_map in sources.items()}
    if name_sources is None:
        name_sources = list(sources)

    merged: Dict[Any, Dict[str, Any]] = {}
    for key, value in base_map.items():
        records = as_record_list(value)
        record = records[0] if records else {}
        canonical = student_key(key)
        matches = {name: list(ring.get(canonical, [])) for name, ring in key_rings.items()}

        first, last, grade = resolve_student_name(
            record, [matches.get(name, []) for name in name_sources]
        )
        merged[key] = {
            COL_STUDENT_ID: key,
            COL_FIRST: first,
            COL_LAST: last,
            COL_GRADE: grade,
            'record': record,
            'sources': matches,
        }

    logger.info(f"Merged {len(merged)} students with {len(sources)} data sources")
    return merged
