"""
Unit tests for the table serializer and reference reader
"""

import random
import struct

import pytest

from phonepack.context.encoding.table import read_table, serialize_table, table_stats
from phonepack.errors import ArtifactFormatError, CapacityError
from phonepack.models import MAX_INTERNED_VALUES, Layout, PrefixTable


def _random_table(seed: int, layout: Layout, size: int = 500) -> PrefixTable:
    rng = random.Random(seed)
    labels = [f"label-{i}" for i in range(40)]
    keys = rng.sample(range(1, 10 ** 9), size)
    if layout is Layout.SINGLE:
        mapping = {k: rng.choice(labels) for k in keys}
    else:
        mapping = {k: tuple(rng.choice(labels) for _ in range(rng.randint(1, 4))) for k in keys}
    return PrefixTable.from_mapping(mapping, layout)


class TestSingleValueLayout:
    """uvarint delta + uint16 index entries"""

    def test_exact_bytes_for_small_table(self):
        table = PrefixTable.from_mapping({1: "A", 7: "B", 20: "A"})

        expected = (
            b'\x03\x00\x00\x00'    # blob length
            b'A\nB'                # blob
            b'\x03\x00\x00\x00'    # entry count
            b'\x01' b'\x00\x00'    # +1  -> A
            b'\x06' b'\x01\x00'    # +6  -> B
            b'\x0d' b'\x00\x00'    # +13 -> A
        )
        assert serialize_table(table) == expected

    def test_empty_table(self):
        data = serialize_table(PrefixTable())
        assert data == b'\x00\x00\x00\x00' b'\x00\x00\x00\x00'
        assert read_table(data) == {}

    def test_insertion_order_does_not_change_output(self):
        a = PrefixTable.from_mapping({44: "UK", 1: "NA", 49: "DE"})
        b = PrefixTable.from_mapping({49: "DE", 44: "UK", 1: "NA"})
        assert serialize_table(a) == serialize_table(b)

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_round_trip(self, seed):
        table = _random_table(seed, Layout.SINGLE)
        assert read_table(serialize_table(table)) == table.entries

    def test_empty_value_round_trips(self):
        table = PrefixTable.from_mapping({1: "", 2: "Verizon"})
        assert read_table(serialize_table(table)) == {1: "", 2: "Verizon"}

    def test_max_distinct_values_serializes(self):
        table = PrefixTable.from_mapping({i: f"v{i:05d}" for i in range(MAX_INTERNED_VALUES)})
        data = serialize_table(table)
        decoded = read_table(data)
        assert len(decoded) == MAX_INTERNED_VALUES
        assert decoded[MAX_INTERNED_VALUES - 1] == f"v{MAX_INTERNED_VALUES - 1:05d}"

    def test_too_many_distinct_values_fails(self):
        table = PrefixTable.from_mapping({i: f"v{i}" for i in range(MAX_INTERNED_VALUES + 1)})
        with pytest.raises(CapacityError):
            serialize_table(table)


class TestMultiValueLayout:
    """uvarint delta + uint8 count + uint16 indices entries"""

    def test_exact_bytes_preserve_value_order(self):
        table = PrefixTable.from_mapping(
            {1: ("B", "A"), 44: ("C",)}, Layout.MULTI
        )

        expected = (
            b'\x05\x00\x00\x00' b'A\nB\nC'
            b'\x02\x00\x00\x00'
            b'\x01' b'\x02' b'\x01\x00' b'\x00\x00'
            b'\x2b' b'\x01' b'\x02\x00'
        )
        assert serialize_table(table) == expected

    @pytest.mark.parametrize("seed", [4, 5])
    def test_round_trip(self, seed):
        table = _random_table(seed, Layout.MULTI)
        assert read_table(serialize_table(table), Layout.MULTI) == table.entries

    def test_repeated_value_within_key_is_kept(self):
        table = PrefixTable.from_mapping({1: ("A", "A")}, Layout.MULTI)
        assert read_table(serialize_table(table), Layout.MULTI) == {1: ("A", "A")}

    def test_more_than_255_values_on_one_key_fails(self):
        table = PrefixTable.from_mapping({1: tuple(f"z{i}" for i in range(256))}, Layout.MULTI)
        with pytest.raises(CapacityError, match="prefix 1"):
            serialize_table(table)


class TestReader:
    """Reference reader failure modes"""

    def test_truncated_blob(self):
        data = serialize_table(PrefixTable.from_mapping({1: "Alpha"}))
        with pytest.raises(ArtifactFormatError):
            read_table(data[:6])

    def test_truncated_entries(self):
        data = serialize_table(PrefixTable.from_mapping({1: "A", 2: "B"}))
        with pytest.raises(ArtifactFormatError):
            read_table(data[:-1])

    def test_trailing_bytes(self):
        data = serialize_table(PrefixTable.from_mapping({1: "A"}))
        with pytest.raises(ArtifactFormatError, match="trailing"):
            read_table(data + b'\x00')

    def test_index_out_of_range(self):
        data = (struct.pack('<I', 1) + b'A' + struct.pack('<I', 1)
                + b'\x01' + struct.pack('<H', 7))
        with pytest.raises(ArtifactFormatError):
            read_table(data)


class TestTableStats:

    def test_stats_match_serialized_size(self):
        table = _random_table(9, Layout.MULTI, size=100)
        stats = table_stats(table)

        assert stats.total_bytes == len(serialize_table(table))
        assert stats.entry_count == 100
        assert stats.value_count <= 40
