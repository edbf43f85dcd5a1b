"""
Context layer - encoding, parsing and metadata reduction.
"""

from phonepack.context.encoding import (
    intern_values, serialize_table, read_table,
    generate_bin_file, generate_map_file,
)
from phonepack.context.parsing import parse_prefix_lines, read_language_group
from phonepack.context.metadata import (
    load_metadata_collection, country_code_to_region_map,
    main_region_pairs, region_table,
)

__all__ = [
    'intern_values',
    'serialize_table',
    'read_table',
    'generate_bin_file',
    'generate_map_file',
    'parse_prefix_lines',
    'read_language_group',
    'load_metadata_collection',
    'country_code_to_region_map',
    'main_region_pairs',
    'region_table',
]
