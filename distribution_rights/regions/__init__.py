"""
Region codes and the region catalog.

Region codes identify places at three granularities:
- Country: US
- Province: CA-US
- City: LA-CA-US

``is_subregion`` answers whether one code lies inside another's territory;
the catalog decides which codes exist.
"""

from distribution_rights.regions.catalog import Location, RegionCatalog, load_catalog
from distribution_rights.regions.models import (
    RegionLevel,
    is_subregion,
    join_region,
    split_region,
)

__all__ = [
    "Location",
    "RegionCatalog",
    "RegionLevel",
    "is_subregion",
    "join_region",
    "load_catalog",
    "split_region",
]
