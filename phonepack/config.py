"""
Build configuration.

The four table builds and the two metadata blobs are fixed descriptors;
only where output goes and which dialect it is rendered in can change.
"""

import json
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union

from phonepack.context.encoding.embedding import DEFAULT_PACKAGE, SourceDialect
from phonepack.errors import BuildError
from phonepack.models import Layout


class Grouping(Enum):
    """How raw records are grouped into tables."""
    FLAT = "flat"              # one table for the whole domain
    PER_LANGUAGE = "language"  # one table per language subdirectory


class SourceKind(Enum):
    """Where a table build reads its records from."""
    METADATA = "metadata"  # reduced from the territory metadata collection
    FILE = "file"          # a single pipe-delimited file
    TREE = "tree"          # a directory tree of pipe-delimited files


@dataclass(frozen=True)
class PrefixBuild:
    """One prefix table artifact."""
    name: str
    source: Optional[str]
    target: str
    variable: str
    layout: Layout = Layout.SINGLE
    grouping: Grouping = Grouping.FLAT
    kind: SourceKind = SourceKind.FILE


@dataclass(frozen=True)
class BlobBuild:
    """An already-serialized blob embedded unchanged."""
    name: str
    target: str
    variable: str


REGION_BUILD = PrefixBuild(
    name="region",
    source=None,
    target="countrycode_to_region_bin.go",
    variable="regionMapData",
    kind=SourceKind.METADATA,
)

TIMEZONE_BUILD = PrefixBuild(
    name="timezone",
    source="timezones/map_data.txt",
    target="prefix_to_timezone_bin.go",
    variable="timezoneMapData",
    layout=Layout.MULTI,
)

CARRIER_BUILD = PrefixBuild(
    name="carrier",
    source="carrier",
    target="prefix_to_carriers_bin.go",
    variable="carrierMapData",
    grouping=Grouping.PER_LANGUAGE,
    kind=SourceKind.TREE,
)

GEOCODING_BUILD = PrefixBuild(
    name="geocoding",
    source="geocoding",
    target="prefix_to_geocodings_bin.go",
    variable="geocodingMapData",
    grouping=Grouping.PER_LANGUAGE,
    kind=SourceKind.TREE,
)

# Run order matters only for log readability
DEFAULT_BUILDS: Tuple[PrefixBuild, ...] = (
    REGION_BUILD,
    TIMEZONE_BUILD,
    CARRIER_BUILD,
    GEOCODING_BUILD,
)

METADATA_BLOBS: Tuple[BlobBuild, ...] = (
    BlobBuild(name="metadata", target="metadata_bin.go", variable="metadataData"),
    BlobBuild(name="shortnumber", target="shortnumber_metadata_bin.go",
              variable="shortNumberMetadataData"),
)


@dataclass(frozen=True)
class BuildSettings:
    """Where artifacts are written and how they are rendered."""
    output_dir: Path = Path(".")
    package: str = DEFAULT_PACKAGE
    dialect: SourceDialect = SourceDialect.GO

    def target_path(self, build: Union[PrefixBuild, BlobBuild]) -> Path:
        return Path(self.output_dir) / build.target


def find_build(name: str) -> PrefixBuild:
    for build in DEFAULT_BUILDS:
        if build.name == name:
            return build
    raise KeyError(name)


def load_settings(path: Union[str, Path], base: Optional[BuildSettings] = None) -> BuildSettings:
    """
    Read settings from a JSON file

    Example file:
        {"output_dir": "../phonenumbers", "package": "phonenumbers", "dialect": "go"}
    """
    settings = base or BuildSettings()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except (OSError, ValueError) as err:
        raise BuildError(f"cannot load settings from {path}: {err}") from err

    if not isinstance(raw, dict):
        raise BuildError(f"settings file {path} must hold a JSON object")

    unknown = set(raw) - {'output_dir', 'package', 'dialect'}
    if unknown:
        raise BuildError(f"unknown settings in {path}: {', '.join(sorted(unknown))}")

    changes = {}
    if 'output_dir' in raw:
        changes['output_dir'] = Path(raw['output_dir'])
    if 'package' in raw:
        changes['package'] = str(raw['package'])
    if 'dialect' in raw:
        try:
            changes['dialect'] = SourceDialect(raw['dialect'])
        except ValueError as err:
            raise BuildError(f"unknown dialect {raw['dialect']!r} in {path}") from err

    return replace(settings, **changes)
