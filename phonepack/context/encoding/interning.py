"""
String interning for prefix table values.

Labels repeat heavily (one carrier or city name is shared by thousands of
prefixes), so each distinct label is stored once and referenced by a
uint16 index. Labels are sorted before indexing: similar strings end up
adjacent in the blob, which helps gzip, and the blob is reproducible.
"""

from typing import Iterable, List

from phonepack.errors import CapacityError, InputFormatError
from phonepack.models import MAX_INTERNED_VALUES, ValueTable

# separator between values in the serialized blob
VALUE_SEPARATOR = "\n"


def intern_values(values: Iterable[str]) -> ValueTable:
    """
    Deduplicate and index a table's values

    Args:
        values: Every value of a table, repeats allowed

    Returns:
        ValueTable with lexicographically sorted distinct values

    Raises:
        CapacityError: more distinct values than a uint16 index can address
        InputFormatError: a value contains the blob separator

    Example:
        >>> intern_values(['A', 'B', 'A']).values
        ('A', 'B')
    """
    distinct = set(values)

    if len(distinct) > MAX_INTERNED_VALUES:
        raise CapacityError(
            f"too many values to represent in uint16: {len(distinct)} "
            f"distinct values (max {MAX_INTERNED_VALUES})"
        )

    for value in distinct:
        if VALUE_SEPARATOR in value:
            raise InputFormatError("value contains a newline", line=value)

    ordered = tuple(sorted(distinct))
    return ValueTable(
        values=ordered,
        indices={value: i for i, value in enumerate(ordered)},
    )


def join_values(table: ValueTable) -> bytes:
    """UTF-8 blob of all values joined by newlines, no trailing separator."""
    return VALUE_SEPARATOR.join(table.values).encode('utf-8')


def split_values(blob: bytes) -> List[str]:
    """Inverse of join_values. An empty blob yields a single empty value."""
    return blob.decode('utf-8').split(VALUE_SEPARATOR)
