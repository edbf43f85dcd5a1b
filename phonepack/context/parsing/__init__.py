"""
Parsing context for raw prefix files.
"""

from phonepack.context.parsing.prefix_file import (
    iter_records, parse_prefix_lines, parse_prefix_bytes,
    read_mappings_for_dir, read_language_group,
)

__all__ = [
    'iter_records',
    'parse_prefix_lines',
    'parse_prefix_bytes',
    'read_mappings_for_dir',
    'read_language_group',
]
