"""
Encoding context for embedded prefix tables.
"""

from phonepack.context.encoding.varint import (
    encode_varint, decode_varint, encode_deltas, decode_deltas
)
from phonepack.context.encoding.interning import intern_values
from phonepack.context.encoding.table import serialize_table, read_table, table_stats
from phonepack.context.encoding.embedding import (
    SourceDialect, embed_bytes, unembed_bytes,
    generate_bin_file, generate_map_file, extract_literals,
)

__all__ = [
    'encode_varint',
    'decode_varint',
    'encode_deltas',
    'decode_deltas',
    'intern_values',
    'serialize_table',
    'read_table',
    'table_stats',
    'SourceDialect',
    'embed_bytes',
    'unembed_bytes',
    'generate_bin_file',
    'generate_map_file',
    'extract_literals',
]
