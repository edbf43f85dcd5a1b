"""
phonepack - Compact Embedded Prefix Tables for Phone Number Metadata

Builds the region, timezone, carrier and geocoding lookup tables that a
phone number library embeds in its own source, with no runtime database.

Architecture:
- Models: Pure data structures (Record, PrefixTable, ValueTable)
- Protocols: Interface contracts (SourceProvider)
- Context: Domain implementations (Interning, Delta keys, Tables, Embedding, Parsing)
- Services: Build orchestration (PrefixDataBuilder, DirectorySource)
- CLI: User interface (build, embed, inspect commands)
"""

__version__ = "1.0.0"
__license__ = "MIT"

from phonepack import models, protocols
from phonepack.errors import (
    BuildError, InputFormatError, DuplicateKeyError, CapacityError,
    TargetMissingError, ArtifactFormatError,
)
from phonepack.context import (
    intern_values, serialize_table, read_table,
    generate_bin_file, generate_map_file,
    parse_prefix_lines, read_language_group,
)
from phonepack.services import PrefixDataBuilder, DirectorySource, Builder

__all__ = [
    'models',
    'protocols',
    'BuildError',
    'InputFormatError',
    'DuplicateKeyError',
    'CapacityError',
    'TargetMissingError',
    'ArtifactFormatError',
    'intern_values',
    'serialize_table',
    'read_table',
    'generate_bin_file',
    'generate_map_file',
    'parse_prefix_lines',
    'read_language_group',
    'PrefixDataBuilder',
    'DirectorySource',
    'Builder',
]
