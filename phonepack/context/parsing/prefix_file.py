"""
Parsing of pipe-delimited prefix files.

Each non-blank, non-comment line is `<prefix>|<value>`; multi-value files
separate values with '&' (`<prefix>|<value1>&<value2>`). Any malformed
line aborts the build: a partially correct table is worse than none.
"""

import logging
import re
from pathlib import Path
from typing import Iterator, Optional

from phonepack.errors import BuildError, InputFormatError
from phonepack.models import LanguageGroup, Layout, PrefixTable, Record

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"
MULTI_VALUE_SEPARATOR = "&"
COMMENT_PREFIX = "#"

_PREFIX_PATTERN = re.compile(r'^[+-]?[0-9]+$')


def iter_records(text: str, source: Optional[str] = None,
                 layout: Layout = Layout.SINGLE) -> Iterator[Record]:
    """
    Yield one Record per data line of a prefix file

    Args:
        text: Decoded file contents
        source: File name used in error messages and warnings
        layout: MULTI splits values on '&'

    Raises:
        InputFormatError: wrong field count, non-numeric or negative prefix
    """
    for line_number, line in enumerate(text.split("\n"), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue

        fields = line.split(FIELD_SEPARATOR)
        if len(fields) != 2:
            raise InputFormatError(
                f"expected 2 '{FIELD_SEPARATOR}'-separated fields, got {len(fields)}",
                source, line_number, line,
            )

        prefix = fields[0].strip()
        if not _PREFIX_PATTERN.match(prefix):
            raise InputFormatError("non-numeric prefix", source, line_number, line)
        key = int(prefix)
        if key < 0:
            raise InputFormatError("negative prefix", source, line_number, line)

        value = fields[1].strip()
        if not value:
            logger.warning("Empty value for prefix %d at %s:%d", key, source, line_number)

        if layout is Layout.MULTI and value:
            value = tuple(item.strip() for item in value.split(MULTI_VALUE_SEPARATOR))
            if not all(value):
                logger.warning("Empty value for prefix %d at %s:%d", key, source, line_number)
        elif layout is Layout.MULTI:
            value = (value,)

        yield Record(key, value, source=source, line_number=line_number, line=line)


def parse_prefix_lines(text: str, source: Optional[str] = None,
                       layout: Layout = Layout.SINGLE,
                       table: Optional[PrefixTable] = None) -> PrefixTable:
    """
    Parse a prefix file into a table

    Args:
        text: Decoded file contents
        source: File name used in error messages
        layout: Entry layout of the resulting table
        table: Existing table to extend; keys already in it are duplicates

    Raises:
        InputFormatError: malformed line
        DuplicateKeyError: prefix already present in the table

    Example:
        >>> parse_prefix_lines("1|A\\n7|B\\n20|A").entries
        {1: 'A', 7: 'B', 20: 'A'}
    """
    if table is None:
        table = PrefixTable(layout=layout, name=source)

    for record in iter_records(text, source, table.layout):
        table.add(record)

    return table


def parse_prefix_bytes(data: bytes, source: Optional[str] = None,
                       layout: Layout = Layout.SINGLE,
                       table: Optional[PrefixTable] = None) -> PrefixTable:
    """parse_prefix_lines for raw UTF-8 bytes."""
    try:
        text = data.decode('utf-8')
    except UnicodeDecodeError as err:
        raise InputFormatError(f"not valid UTF-8 ({err.reason})", source) from err
    return parse_prefix_lines(text, source, layout, table)


def read_mappings_for_dir(directory: Path, layout: Layout = Layout.SINGLE) -> PrefixTable:
    """
    Build one table from every *.txt file in a language directory

    A prefix repeated in two files of the same directory is a duplicate.
    """
    logger.info("Building map for: %s", directory)
    table = PrefixTable(layout=layout, name=directory.name)

    for path in sorted(directory.glob('*.txt')):
        try:
            data = path.read_bytes()
        except OSError as err:
            raise BuildError(f"error reading {path}: {err}") from err
        parse_prefix_bytes(data, str(path), layout, table)

    logger.info("Read %d mappings in %s", len(table), directory)
    return table


def read_language_group(root: Path, layout: Layout = Layout.SINGLE) -> LanguageGroup:
    """
    Build one table per language subdirectory of an exported tree

    Args:
        root: Directory with one subdirectory per language/region code

    Returns:
        {language code: table}
    """
    root = Path(root)
    if not root.is_dir():
        raise BuildError(f"source tree not found: {root}")

    group: LanguageGroup = {}
    for entry in sorted(root.iterdir()):
        if not entry.is_dir():
            logger.warning("Ignoring non-directory entry: %s", entry)
            continue
        group[entry.name] = read_mappings_for_dir(entry, layout)

    return group
