"""
Country calling code to region reduction of phone number metadata.

The XML metadata itself is converted by an external tool; this module only
needs each territory's region code, country calling code and whether it is
the main country for that code.
"""

import json
from collections import defaultdict
from typing import Dict, Iterator, List, Tuple, Union

from phonepack.errors import InputFormatError
from phonepack.models import (
    Layout, MetadataCollection, PrefixTable, Record, TerritoryMetadata
)
from phonepack.protocols import RegionExtractor


def load_metadata_collection(data: Union[bytes, str], source: str = "metadata") -> List[TerritoryMetadata]:
    """
    Load territories from a JSON export of the metadata collection

    Expected shape:
        [{"id": "US", "countryCode": 1, "mainCountryForCode": true}, ...]
    """
    try:
        raw = json.loads(data)
    except ValueError as err:
        raise InputFormatError(f"invalid JSON ({err})", source) from err

    if isinstance(raw, dict):
        raw = raw.get('territories', [])
    if not isinstance(raw, list):
        raise InputFormatError("expected a list of territories", source)

    territories = []
    for position, item in enumerate(raw, start=1):
        try:
            country_code = int(item['countryCode'])
            region_code = str(item['id'])
            main_country = item.get('mainCountryForCode', False)
        except (KeyError, TypeError, ValueError, AttributeError) as err:
            raise InputFormatError(f"bad territory #{position} ({err!r})", source) from err
        if not isinstance(main_country, bool):
            raise InputFormatError(
                f"mainCountryForCode must be true or false in territory #{position}", source
            )
        if country_code < 0:
            raise InputFormatError(f"negative country code in territory #{position}", source)

        territories.append(TerritoryMetadata(region_code, country_code, main_country))

    return territories


def country_code_to_region_map(collection: MetadataCollection) -> Dict[int, List[str]]:
    """
    Map each country calling code to its region codes

    The main country for a shared code is listed first; the others keep
    their collection order.

    Example:
        1 -> ['US', 'AG', 'AI', ...]
    """
    mapping: Dict[int, List[str]] = defaultdict(list)
    for territory in collection:
        regions = mapping[territory.country_code]
        if territory.main_country_for_code:
            regions.insert(0, territory.region_code)
        else:
            regions.append(territory.region_code)
    return dict(mapping)


def main_region_pairs(collection: MetadataCollection) -> Iterator[Tuple[int, str]]:
    """Yield (country code, main region code) for every country code."""
    for country_code, regions in country_code_to_region_map(collection).items():
        yield country_code, regions[0]


def region_table(collection: MetadataCollection,
                 extractor: RegionExtractor = main_region_pairs,
                 layout: Layout = Layout.SINGLE,
                 name: str = "region") -> PrefixTable:
    """
    Reduce a metadata collection to a prefix table

    Args:
        collection: Parsed territories
        extractor: Caller-supplied reduction to (prefix, region) pairs or
            to a {prefix: [regions]} mapping
        layout: SINGLE keeps one region per prefix, MULTI keeps them all

    Raises:
        DuplicateKeyError: the extractor produced a prefix twice
        InputFormatError: several regions for one prefix in a SINGLE table
    """
    extracted = extractor(collection)
    pairs = extracted.items() if isinstance(extracted, dict) else extracted

    table = PrefixTable(layout=layout, name=name)
    for key, value in pairs:
        if not isinstance(value, str):
            value = tuple(value)
            if layout is Layout.SINGLE:
                if len(value) != 1:
                    raise InputFormatError(
                        f"prefix {key} maps to {len(value)} regions in a "
                        f"single-value table", name,
                    )
                value = value[0]
        table.add(Record(key, value, source=name))

    return table
