"""
Region catalog loaded from a CSV gazetteer.

The gazetteer has a header row followed by one row per city:

    city_code,province_code,country_code,city_name,province_name,country_name
    LA,CA,US,Los Angeles,California,United States

Each row is indexed under three keys (``LA-CA-US``, ``CA-US`` and ``US``).
Province and country keys are shared by many rows; the last row loaded wins.
The catalog is read-only once built.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from distribution_rights.errors import CatalogLoadError
from distribution_rights.regions.models import RegionLevel, join_region

LOG = logging.getLogger("regions.catalog")

ROW_WIDTH = 6


@dataclass(frozen=True)
class Location:
    """Codes and display names for one city and its enclosing regions."""

    city_code: str
    province_code: str
    country_code: str
    city_name: str
    province_name: str
    country_name: str

    @property
    def city_key(self) -> str:
        return join_region(self.city_code, self.province_code, self.country_code)

    @property
    def province_key(self) -> str:
        return join_region(self.province_code, self.country_code)

    @property
    def country_key(self) -> str:
        return self.country_code

    def keys(self) -> Tuple[str, str, str]:
        return (self.city_key, self.province_key, self.country_key)

    def names_for(self, level: RegionLevel) -> Tuple[str, ...]:
        """Display names from ``level`` up to the country."""
        if level == RegionLevel.CITY:
            return (self.city_name, self.province_name, self.country_name)
        if level == RegionLevel.PROVINCE:
            return (self.province_name, self.country_name)
        return (self.country_name,)

    @classmethod
    def from_row(cls, row: list[str]) -> "Location":
        return cls(*row[:ROW_WIDTH])


class RegionCatalog:
    """Read-only index of known region codes."""

    def __init__(self, entries: Optional[Mapping[str, Location]] = None) -> None:
        self._entries: Mapping[str, Location] = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_locations(cls, locations) -> "RegionCatalog":
        entries: Dict[str, Location] = {}
        for location in locations:
            for key in location.keys():
                entries[key] = location
        return cls(entries)

    def __contains__(self, code: object) -> bool:
        return code in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, code: str) -> Optional[Location]:
        return self._entries.get(code)

    def describe(self, code: str) -> Optional[Tuple[str, ...]]:
        """Display names for a known code, most specific first."""
        location = self._entries.get(code)
        if location is None:
            return None
        return location.names_for(self.level_of(code))

    def level_of(self, code: str) -> Optional[RegionLevel]:
        """Level of a known code, judged by which key of its Location it is."""
        location = self._entries.get(code)
        if location is None:
            return None
        if code == location.city_key:
            return RegionLevel.CITY
        if code == location.province_key:
            return RegionLevel.PROVINCE
        return RegionLevel.COUNTRY


def iter_locations(path: Path) -> Iterator[Location]:
    """
    Yield a Location per well-formed data row of a gazetteer file.

    Rows with fewer than six columns are skipped.

    Raises:
        CatalogLoadError: If the file cannot be read or has no header row
    """
    try:
        handle = Path(path).open("r", encoding="utf-8", newline="")
    except OSError as exc:
        raise CatalogLoadError(f"Cannot open region catalog {path}: {exc}") from exc

    with handle:
        reader = csv.reader(handle)
        try:
            header = next(reader, None)
        except (csv.Error, UnicodeDecodeError) as exc:
            raise CatalogLoadError(f"Malformed header in region catalog {path}: {exc}") from exc
        if header is None:
            raise CatalogLoadError(f"Region catalog {path} has no header row")

        skipped = 0
        try:
            for row in reader:
                if len(row) < ROW_WIDTH:
                    skipped += 1
                    LOG.debug("Skipping short row %d in %s: %r", reader.line_num, path, row)
                    continue
                yield Location.from_row(row)
        except (csv.Error, OSError, UnicodeDecodeError) as exc:
            raise CatalogLoadError(f"Cannot read region catalog {path}: {exc}") from exc

        if skipped:
            LOG.debug("Skipped %d short rows in %s", skipped, path)


def load_catalog(path: Path) -> RegionCatalog:
    """Build a RegionCatalog from a gazetteer file."""
    catalog = RegionCatalog.from_locations(iter_locations(path))
    LOG.debug("Loaded %d region codes from %s", len(catalog), path)
    return catalog
