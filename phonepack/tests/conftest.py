"""
Pytest configuration and shared fixtures for phonepack tests
"""

import json
from pathlib import Path
from typing import List

import pytest

from phonepack.config import DEFAULT_BUILDS, METADATA_BLOBS
from phonepack.models import TerritoryMetadata

TIMEZONE_DATA = (
    "# Prefix to timezone mappings\n"
    "\n"
    "1|America/New_York&America/Chicago&America/Denver&America/Los_Angeles\n"
    "1201|America/New_York\n"
    "1212|America/New_York\n"
    "1310|America/Los_Angeles\n"
    "44|Europe/London\n"
    "49|Europe/Berlin\n"
)

CARRIER_EN_1 = (
    "# Carrier data for +1\n"
    "1201200|Verizon\n"
    "1201202|AT&T\n"
    "1201203|Verizon\n"
)

CARRIER_EN_44 = (
    "447400|Three\n"
    "447401|Vodafone\n"
    "447402|Three\n"
)

CARRIER_DE_49 = (
    "49151|Telekom\n"
    "49152|Vodafone\n"
)

GEOCODING_EN_1 = (
    "1201|New Jersey\n"
    "1212|New York, NY\n"
    "1310|California\n"
)

GEOCODING_DE_49 = (
    "4930|Berlin\n"
    "4940|Hamburg\n"
    "4989|München\n"
)

TERRITORIES = [
    {"id": "US", "countryCode": 1, "mainCountryForCode": True},
    {"id": "CA", "countryCode": 1},
    {"id": "GB", "countryCode": 44, "mainCountryForCode": True},
    {"id": "GG", "countryCode": 44},
    {"id": "DE", "countryCode": 49},
    {"id": "001", "countryCode": 800},
]


@pytest.fixture
def resources_dir(tmp_path) -> Path:
    """A small resources tree laid out like the upstream repository"""
    root = tmp_path / "resources"

    timezones = root / "timezones"
    timezones.mkdir(parents=True)
    (timezones / "map_data.txt").write_text(TIMEZONE_DATA, encoding="utf-8")

    carrier = root / "carrier"
    (carrier / "en").mkdir(parents=True)
    (carrier / "de").mkdir()
    (carrier / "en" / "1.txt").write_text(CARRIER_EN_1, encoding="utf-8")
    (carrier / "en" / "44.txt").write_text(CARRIER_EN_44, encoding="utf-8")
    (carrier / "de" / "49.txt").write_text(CARRIER_DE_49, encoding="utf-8")
    (carrier / "README").write_text("not a language directory", encoding="utf-8")

    geocoding = root / "geocoding"
    (geocoding / "en").mkdir(parents=True)
    (geocoding / "de").mkdir()
    (geocoding / "en" / "1.txt").write_text(GEOCODING_EN_1, encoding="utf-8")
    (geocoding / "de" / "49.txt").write_text(GEOCODING_DE_49, encoding="utf-8")

    return root


@pytest.fixture
def output_dir(tmp_path) -> Path:
    """Output directory with every generated target already present"""
    out = tmp_path / "phonenumbers"
    out.mkdir()
    for build in DEFAULT_BUILDS + METADATA_BLOBS:
        (out / build.target).write_text("package phonenumbers\n", encoding="utf-8")
    return out


@pytest.fixture
def territories_file(tmp_path) -> Path:
    path = tmp_path / "territories.json"
    path.write_text(json.dumps(TERRITORIES), encoding="utf-8")
    return path


@pytest.fixture
def territories() -> List[TerritoryMetadata]:
    return [
        TerritoryMetadata(t["id"], t["countryCode"], t.get("mainCountryForCode", False))
        for t in TERRITORIES
    ]
