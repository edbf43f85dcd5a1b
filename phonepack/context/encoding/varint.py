"""
Variable-length integer encoding (varint) for sorted prefix keys

Protocol Buffer style unsigned varint, 7 value bits per byte, low group
first, high bit set on every byte except the last:
- Values 0-127: 1 byte
- Values 128-16,383: 2 bytes
- Values 16,384-2,097,151: 3 bytes

Prefix keys are stored as the difference from the previous key. After
sorting, neighbouring prefixes are usually close, so most deltas fit in a
single byte.
"""

from typing import Iterable, Iterator, List, Tuple


def encode_varint(value: int) -> bytes:
    """
    Encode integer as variable-length bytes using Protocol Buffer encoding

    Args:
        value: Non-negative integer to encode

    Returns:
        Bytes representing the varint

    Examples:
        >>> encode_varint(0)
        b'\\x00'
        >>> encode_varint(127)
        b'\\x7f'
        >>> encode_varint(128)
        b'\\x80\\x01'
        >>> encode_varint(300)
        b'\\xac\\x02'
    """
    if value < 0:
        raise ValueError(f"Cannot encode negative value: {value}")

    result = bytearray()

    while value > 0x7F:
        result.append((value & 0x7F) | 0x80)
        value >>= 7

    result.append(value & 0x7F)

    return bytes(result)


def decode_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Decode varint from bytes starting at offset

    Args:
        data: Bytes containing varint
        offset: Starting position in bytes

    Returns:
        Tuple of (decoded_value, bytes_consumed)

    Examples:
        >>> decode_varint(b'\\x80\\x01')
        (128, 2)
        >>> decode_varint(b'\\x00\\xac\\x02', 1)
        (300, 2)
    """
    result = 0
    shift = 0
    bytes_read = 0

    while True:
        if offset + bytes_read >= len(data):
            raise ValueError(f"Incomplete varint at offset {offset}")

        byte = data[offset + bytes_read]
        bytes_read += 1

        result |= (byte & 0x7F) << shift
        shift += 7

        if (byte & 0x80) == 0:
            break

        if shift > 64:
            raise ValueError(f"Varint too large at offset {offset}")

    return result, bytes_read


def encode_deltas(sorted_keys: Iterable[int]) -> Iterator[bytes]:
    """
    Yield the varint of each key's distance from the previous key

    The first key is measured from 0. Keys must already be ascending and
    unique; nothing is sorted or deduplicated here.

    Example:
        >>> list(encode_deltas([1, 7, 20]))
        [b'\\x01', b'\\x06', b'\\r']
    """
    last = 0
    for key in sorted_keys:
        yield encode_varint(key - last)
        last = key


def decode_deltas(data: bytes, count: int, offset: int = 0) -> Tuple[List[int], int]:
    """
    Decode `count` delta varints back into absolute keys

    Args:
        data: Bytes holding back-to-back delta varints
        count: Number of keys to decode
        offset: Starting position in bytes

    Returns:
        Tuple of (keys, bytes_consumed)
    """
    keys = []
    position = offset
    last = 0

    for _ in range(count):
        delta, bytes_read = decode_varint(data, position)
        position += bytes_read
        last += delta
        keys.append(last)

    return keys, position - offset


def estimate_varint_size(value: int) -> int:
    """
    Bytes needed for the varint encoding of a non-negative integer

    Examples:
        >>> estimate_varint_size(127)
        1
        >>> estimate_varint_size(16384)
        3
    """
    if value == 0:
        return 1
    return (value.bit_length() + 6) // 7
