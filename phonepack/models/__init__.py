"""
Data models for prefix tables.

This module contains plain data structures; encoding lives in
phonepack.context and orchestration in phonepack.services.
"""

from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from phonepack.errors import DuplicateKeyError

__all__ = [
    'Layout',
    'Record',
    'PrefixTable',
    'ValueTable',
    'LanguageGroup',
    'TerritoryMetadata',
    'MetadataCollection',
    'TableValue',
    'MAX_INTERNED_VALUES',
    'MAX_VALUES_PER_KEY',
]

# uint16 value indices
MAX_INTERNED_VALUES = 0xFFFF
# uint8 per-key value count in the multi-value layout
MAX_VALUES_PER_KEY = 0xFF


class Layout(Enum):
    """Entry layout of a serialized table."""
    SINGLE = "single"  # uvarint delta, uint16 index
    MULTI = "multi"    # uvarint delta, uint8 count, count * uint16 index


TableValue = Union[str, Tuple[str, ...]]


@dataclass(frozen=True)
class Record:
    """One parsed input line: a numeric prefix and its label(s)."""
    key: int
    value: TableValue
    source: Optional[str] = None
    line_number: Optional[int] = None
    line: Optional[str] = None


@dataclass
class PrefixTable:
    """
    Mapping of unique prefixes to a label (single layout) or to an ordered
    tuple of labels (multi layout).
    """
    layout: Layout = Layout.SINGLE
    name: Optional[str] = None
    entries: Dict[int, TableValue] = dataclass_field(default_factory=dict)

    def add(self, record: Record):
        """Insert a record, rejecting a prefix already present."""
        if record.key in self.entries:
            raise DuplicateKeyError(record.key, record.source,
                                    record.line_number, record.line)
        value = record.value
        if self.layout is Layout.MULTI and isinstance(value, str):
            value = (value,)
        elif self.layout is Layout.SINGLE and not isinstance(value, str):
            raise TypeError(f"single-value table {self.name!r} got {value!r}")
        self.entries[record.key] = value

    @classmethod
    def from_mapping(cls, mapping: Dict[int, TableValue],
                     layout: Layout = Layout.SINGLE,
                     name: Optional[str] = None) -> 'PrefixTable':
        table = cls(layout=layout, name=name)
        for key, value in mapping.items():
            if layout is Layout.MULTI and not isinstance(value, str):
                value = tuple(value)
            table.add(Record(key, value, source=name))
        return table

    def sorted_keys(self) -> List[int]:
        return sorted(self.entries)

    def iter_values(self) -> Iterator[str]:
        """Every label in the table, repeats included."""
        for value in self.entries.values():
            if isinstance(value, str):
                yield value
            else:
                yield from value

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: int) -> bool:
        return key in self.entries

    def __getitem__(self, key: int) -> TableValue:
        return self.entries[key]


@dataclass(frozen=True)
class ValueTable:
    """Sorted, deduplicated labels of one table and their uint16 indices."""
    values: Tuple[str, ...]
    indices: Dict[str, int] = dataclass_field(compare=False, repr=False)

    def index_of(self, value: str) -> int:
        return self.indices[value]

    def __len__(self) -> int:
        return len(self.values)


# language/region code (directory name) -> that language's table
LanguageGroup = Dict[str, PrefixTable]


@dataclass(frozen=True)
class TerritoryMetadata:
    """
    The slice of one territory's phone metadata needed to build the
    country-code to region map.
    """
    region_code: str
    country_code: int
    main_country_for_code: bool = False


MetadataCollection = Sequence[TerritoryMetadata]
