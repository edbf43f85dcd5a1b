"""
Table serializer for embedded prefix maps

Binary layout (all integers little-endian):
    [value_blob_len: uint32]
    [value_blob: sorted distinct values joined by '\\n']
    [entry_count: uint32]
    entries, one per key in ascending order:
        single layout: [key delta: uvarint][value index: uint16]
        multi layout:  [key delta: uvarint][value count: uint8][value index: uint16] * count

The value blob comes first so a reader can split every string out in one
pass and then walk fixed-size index records.
"""

import struct
from dataclasses import dataclass
from typing import Dict

from phonepack.errors import ArtifactFormatError, CapacityError
from phonepack.models import MAX_VALUES_PER_KEY, Layout, PrefixTable, TableValue
from phonepack.context.encoding.interning import intern_values, join_values, split_values
from phonepack.context.encoding.varint import (
    decode_varint, encode_deltas, estimate_varint_size
)

_UINT32 = struct.Struct('<I')
_UINT16 = struct.Struct('<H')
_UINT8 = struct.Struct('<B')


def serialize_table(table: PrefixTable) -> bytes:
    """
    Serialize a prefix table into one self-contained buffer

    Args:
        table: Table to encode; its layout picks the entry format

    Returns:
        Encoded buffer

    Raises:
        CapacityError: too many distinct values, or too many values on one key
    """
    interned = intern_values(table.iter_values())
    keys = table.sorted_keys()

    data = bytearray()

    blob = join_values(interned)
    data.extend(_UINT32.pack(len(blob)))
    data.extend(blob)

    data.extend(_UINT32.pack(len(keys)))

    for key, delta in zip(keys, encode_deltas(keys)):
        data.extend(delta)
        value = table[key]

        if table.layout is Layout.SINGLE:
            data.extend(_UINT16.pack(interned.index_of(value)))
            continue

        if len(value) > MAX_VALUES_PER_KEY:
            raise CapacityError(
                f"prefix {key} has {len(value)} values "
                f"(max {MAX_VALUES_PER_KEY})"
            )
        data.extend(_UINT8.pack(len(value)))
        for item in value:
            data.extend(_UINT16.pack(interned.index_of(item)))

    return bytes(data)


def read_table(data: bytes, layout: Layout = Layout.SINGLE) -> Dict[int, TableValue]:
    """
    Parse a serialized buffer back into a prefix mapping

    Args:
        data: Buffer produced by serialize_table
        layout: Entry format the buffer was written with

    Returns:
        {prefix: value} for single layout, {prefix: (values...)} for multi

    Raises:
        ArtifactFormatError: buffer is truncated or references unknown values
    """
    try:
        (blob_len,) = _UINT32.unpack_from(data, 0)
        offset = _UINT32.size
        blob = bytes(data[offset:offset + blob_len])
        if len(blob) != blob_len:
            raise ArtifactFormatError(
                f"value blob truncated: expected {blob_len} bytes, got {len(blob)}"
            )
        offset += blob_len
        values = split_values(blob)

        (count,) = _UINT32.unpack_from(data, offset)
        offset += _UINT32.size

        mapping = {}
        last = 0
        for _ in range(count):
            delta, bytes_read = decode_varint(data, offset)
            offset += bytes_read
            last += delta

            if layout is Layout.SINGLE:
                (index,) = _UINT16.unpack_from(data, offset)
                offset += _UINT16.size
                mapping[last] = values[index]
                continue

            (n_values,) = _UINT8.unpack_from(data, offset)
            offset += _UINT8.size
            indices = struct.unpack_from(f'<{n_values}H', data, offset)
            offset += n_values * _UINT16.size
            mapping[last] = tuple(values[i] for i in indices)
    except (struct.error, ValueError, IndexError, UnicodeDecodeError) as err:
        raise ArtifactFormatError(f"malformed table buffer: {err}") from err

    if offset != len(data):
        raise ArtifactFormatError(
            f"{len(data) - offset} trailing bytes after {count} entries"
        )

    return mapping


@dataclass(frozen=True)
class TableStats:
    """Size breakdown of one serialized table."""
    entry_count: int
    value_count: int
    blob_bytes: int
    key_bytes: int
    total_bytes: int


def table_stats(table: PrefixTable) -> TableStats:
    """Sizes of the sections serialize_table would write for `table`."""
    interned = intern_values(table.iter_values())
    keys = table.sorted_keys()

    key_bytes = 0
    last = 0
    for key in keys:
        key_bytes += estimate_varint_size(key - last)
        last = key

    index_bytes = 0
    for value in table.entries.values():
        if table.layout is Layout.SINGLE:
            index_bytes += _UINT16.size
        else:
            index_bytes += _UINT8.size + len(value) * _UINT16.size

    blob_bytes = len(join_values(interned))
    return TableStats(
        entry_count=len(keys),
        value_count=len(interned),
        blob_bytes=blob_bytes,
        key_bytes=key_bytes,
        total_bytes=2 * _UINT32.size + blob_bytes + key_bytes + index_bytes,
    )
