"""
Unit tests for value interning
"""

import pytest

from phonepack.context.encoding.interning import intern_values, join_values, split_values
from phonepack.errors import CapacityError, InputFormatError
from phonepack.models import MAX_INTERNED_VALUES


class TestInterner:
    """Deduplication, ordering and capacity"""

    def test_values_are_sorted_and_deduplicated(self):
        table = intern_values(["Vodafone", "Three", "Vodafone", "AT&T", "Three"])

        assert table.values == ("AT&T", "Three", "Vodafone")
        assert table.index_of("AT&T") == 0
        assert table.index_of("Three") == 1
        assert table.index_of("Vodafone") == 2

    def test_interning_is_deterministic(self):
        values = ["b", "a", "c", "a", "b"]
        first = intern_values(values)
        second = intern_values(list(reversed(values)))

        assert first.values == second.values
        assert all(first.index_of(v) == second.index_of(v) for v in values)

    def test_unicode_sorting_is_by_code_point(self):
        table = intern_values(["München", "Berlin", "Zürich", "Aachen"])
        assert table.values == ("Aachen", "Berlin", "München", "Zürich")

    def test_exactly_max_distinct_values_is_accepted(self):
        table = intern_values(f"v{i}" for i in range(MAX_INTERNED_VALUES))
        assert len(table) == 65535

    def test_one_more_than_max_distinct_values_fails(self):
        with pytest.raises(CapacityError, match="uint16"):
            intern_values(f"v{i}" for i in range(MAX_INTERNED_VALUES + 1))

    def test_newline_in_value_is_rejected(self):
        with pytest.raises(InputFormatError):
            intern_values(["ok", "bad\nvalue"])


class TestValueBlob:
    """Newline-joined value blob"""

    def test_join_has_no_trailing_separator(self):
        assert join_values(intern_values(["B", "A", "A"])) == b"A\nB"

    def test_join_encodes_utf8(self):
        blob = join_values(intern_values(["München"]))
        assert blob == "München".encode("utf-8")
        assert len(blob) == 8

    def test_split_reverses_join(self):
        table = intern_values(["New York, NY", "California", "New Jersey"])
        assert split_values(join_values(table)) == list(table.values)
