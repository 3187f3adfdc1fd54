"""
Tabular views and multi-level grouping over parsed records.

Records are loaded into a pandas DataFrame (one row per record, one
string column per field) so callers can slice them further with the
usual pandas tools.
"""

import logging
from typing import Optional, Sequence, Union

import pandas as pd

from ..config.constants import GROUPABLE_FIELDS
from ..parsing.base import LogRecord, LogSchema, record_type_for
from ..parsing.exceptions import InvalidFieldError

logger = logging.getLogger(__name__)

COUNT_COLUMN = "count"


def records_to_dataframe(
    records: Sequence[LogRecord],
    schema: Optional[Union[LogSchema, str]] = None,
) -> pd.DataFrame:
    """
    Convert records to a DataFrame.

    Args:
        records: Parsed records (all of one schema)
        schema: Schema of the records; used to set the columns of an
            empty frame

    Returns:
        DataFrame with one row per record, columns in field order
    """
    if schema is not None:
        columns = record_type_for(schema).field_names()
    elif records:
        columns = type(records[0]).field_names()
    else:
        columns = []

    return pd.DataFrame(
        [record.to_dict() for record in records], columns=columns, dtype=object
    )


def groupable_fields(schema: Union[LogSchema, str]) -> tuple[str, ...]:
    """Return the fields a schema's records can be grouped by."""
    return GROUPABLE_FIELDS[LogSchema.parse(schema).value]


def group_records(
    records: Sequence[LogRecord],
    by: Sequence[str],
    schema: Union[LogSchema, str],
) -> pd.DataFrame:
    """
    Group records by one or more fields and count each group.

    Grouping is nested in the order given: the first field is the
    outermost level.

    Args:
        records: Parsed records
        by: Field names to group by, outermost first
        schema: Schema of the records

    Returns:
        DataFrame with the grouping columns plus a ``count`` column,
        sorted by the grouping keys

    Raises:
        InvalidFieldError: If by is empty or names a non-groupable field
    """
    schema = LogSchema.parse(schema)
    allowed = groupable_fields(schema)

    if not by:
        raise InvalidFieldError(
            "", schema=schema.value, reason="at least one grouping field is required"
        )
    for field in by:
        if field not in allowed:
            raise InvalidFieldError(
                field,
                schema=schema.value,
                reason=f"groupable fields are: {', '.join(allowed)}",
            )

    by = list(dict.fromkeys(by))
    if not records:
        return pd.DataFrame(columns=[*by, COUNT_COLUMN])

    df = records_to_dataframe(records, schema)
    grouped = (
        df.groupby(by, sort=True, dropna=False)
        .size()
        .reset_index(name=COUNT_COLUMN)
    )

    logger.debug(
        f"Grouped {len(records)} records by {', '.join(by)} into {len(grouped)} groups"
    )
    return grouped
