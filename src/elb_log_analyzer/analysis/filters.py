"""
Record filters for interactive narrowing of a parsed result set.

Every filter returns a new list and keeps the input order. An empty
filter value means "no filter" and keeps every record.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional, Sequence, Union

from dateutil import parser as date_parser

from ..parsing.base import LogRecord
from ..parsing.exceptions import InvalidFieldError

logger = logging.getLogger(__name__)

# Leading integer part, as accepted by a lenient integer parse
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

TimestampBound = Union[datetime, str, None]


def _ensure_field(records: Sequence[LogRecord], field: str) -> None:
    """Raise InvalidFieldError if the records have no such field."""
    if not records:
        return
    record_type = type(records[0])
    if field not in record_type.field_names():
        raise InvalidFieldError(
            field,
            schema=record_type.SCHEMA,
            reason=f"{record_type.__name__} has no such field",
        )


def parse_leading_int(value: Optional[str]) -> Optional[int]:
    """
    Parse the leading integer of a string.

    "1024" -> 1024, "12.5" -> 12, "-" -> None, "" -> None
    """
    if not value:
        return None
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def parse_timestamp(value: TimestampBound) -> Optional[datetime]:
    """
    Parse a timestamp into a timezone-aware UTC datetime.

    Naive values are assumed to be UTC.

    Args:
        value: datetime, ISO 8601 string, or None

    Returns:
        UTC datetime, or None for None/empty input

    Raises:
        ValueError: If a string cannot be parsed
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        dt = date_parser.isoparse(value)

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def filter_equals(
    records: Sequence[LogRecord], field: str, value: str
) -> list[LogRecord]:
    """
    Keep records whose field equals the value exactly.

    Raises:
        InvalidFieldError: If the records have no such field
    """
    _ensure_field(records, field)
    if value == "":
        return list(records)
    return [record for record in records if getattr(record, field) == value]


def filter_contains(
    records: Sequence[LogRecord], field: str, text: str
) -> list[LogRecord]:
    """
    Keep records whose field contains the text (case-insensitive).

    Raises:
        InvalidFieldError: If the records have no such field
    """
    _ensure_field(records, field)
    if text == "":
        return list(records)
    needle = text.lower()
    return [record for record in records if needle in getattr(record, field).lower()]


def filter_number_range(
    records: Sequence[LogRecord],
    field: str,
    minimum: Union[int, str, None] = None,
    maximum: Union[int, str, None] = None,
) -> list[LogRecord]:
    """
    Keep records whose numeric field lies within inclusive bounds.

    Field values are read as integers (leading integer part). When any
    bound is set, records whose value is not numeric are dropped.

    Args:
        records: Records to filter
        field: Field name (e.g., "response_size")
        minimum: Lower bound, or None/"" for no lower bound
        maximum: Upper bound, or None/"" for no upper bound

    Raises:
        InvalidFieldError: If the records have no such field
    """
    _ensure_field(records, field)

    low = parse_leading_int(str(minimum)) if minimum not in (None, "") else None
    high = parse_leading_int(str(maximum)) if maximum not in (None, "") else None
    if low is None and high is None:
        return list(records)

    kept = []
    for record in records:
        number = parse_leading_int(getattr(record, field))
        if number is None:
            continue
        if low is not None and number < low:
            continue
        if high is not None and number > high:
            continue
        kept.append(record)
    return kept


def filter_timestamp_range(
    records: Sequence[LogRecord],
    start: TimestampBound = None,
    end: TimestampBound = None,
    field: str = "timestamp",
) -> list[LogRecord]:
    """
    Keep records whose timestamp lies within inclusive bounds.

    When any bound is set, records whose timestamp cannot be parsed
    are dropped.

    Args:
        records: Records to filter
        start: Lower bound (datetime or ISO 8601 string), optional
        end: Upper bound (datetime or ISO 8601 string), optional
        field: Timestamp field name (default: "timestamp")

    Raises:
        InvalidFieldError: If the records have no such field
        ValueError: If a bound cannot be parsed, or start > end
    """
    _ensure_field(records, field)

    start_dt = parse_timestamp(start)
    end_dt = parse_timestamp(end)
    if start_dt is None and end_dt is None:
        return list(records)
    if start_dt is not None and end_dt is not None and start_dt > end_dt:
        raise ValueError(f"Invalid time range: start ({start_dt}) > end ({end_dt})")

    kept = []
    for record in records:
        try:
            record_dt = parse_timestamp(getattr(record, field))
        except ValueError:
            logger.debug(f"Unparseable timestamp: {getattr(record, field)!r}")
            continue
        if record_dt is None:
            continue
        if start_dt is not None and record_dt < start_dt:
            continue
        if end_dt is not None and record_dt > end_dt:
            continue
        kept.append(record)
    return kept


def global_search(records: Sequence[LogRecord], text: str) -> list[LogRecord]:
    """
    Keep records where any displayed field contains the text.

    The match is case-insensitive and ignores the raw log line.
    """
    if not text:
        return list(records)
    needle = text.lower()
    kept = []
    for record in records:
        for name in type(record).display_field_names():
            if needle in getattr(record, name).lower():
                kept.append(record)
                break
    return kept


def apply_filters(
    records: Sequence[LogRecord],
    equals: Optional[dict[str, str]] = None,
    contains: Optional[dict[str, str]] = None,
    search: Optional[str] = None,
) -> list[LogRecord]:
    """
    Apply exact-match, substring, and global search filters in turn.

    Args:
        records: Records to filter
        equals: Field name to exact value
        contains: Field name to substring
        search: Global search text

    Returns:
        Records matching every filter, in input order
    """
    result = list(records)
    for field, value in (equals or {}).items():
        result = filter_equals(result, field, value)
    for field, text in (contains or {}).items():
        result = filter_contains(result, field, text)
    if search:
        result = global_search(result, search)

    logger.debug(f"Filters kept {len(result)} of {len(records)} records")
    return result
