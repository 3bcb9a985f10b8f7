"""
Hierarchical region code model.

Region codes are hyphen-joined segments ordered from the most specific
level to the country:

    US            # country
    CA-US         # province within a country
    LA-CA-US      # city within a province

Segments carry no meaning on their own: ``CA`` is only a province when it is
followed by its country. Codes are validated as a whole against the region
catalog, never segment by segment.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple

SEPARATOR = "-"


class RegionLevel(str, Enum):
    """Granularity level of a region code."""

    COUNTRY = "country"
    PROVINCE = "province"
    CITY = "city"


def split_region(code: str) -> Tuple[str, ...]:
    """Split a region code into its segments."""
    return tuple(code.split(SEPARATOR))


def join_region(*segments: str) -> str:
    """Join segments into a region code."""
    return SEPARATOR.join(segments)


def is_subregion(candidate: Sequence[str], pattern: Sequence[str]) -> bool:
    """
    Check whether the candidate region lies inside the pattern's territory.

    The test is one-directional: a city is inside its province and its
    country, but a country is never inside one of its cities.

    Examples:
        is_subregion(["NYC", "NY", "US"], ["US"])         # True
        is_subregion(["NY", "US"], ["NY", "US"])          # True
        is_subregion(["NY", "US"], ["NYC", "NY", "US"])   # False
    """
    if len(pattern) == 1:
        return candidate[-1] == pattern[0]

    if len(pattern) == 2:
        return (
            len(candidate) >= 2
            and candidate[-2] == pattern[0]
            and candidate[-1] == pattern[1]
        )

    if len(pattern) == 3:
        return (
            len(candidate) == 3
            and candidate[0] == pattern[0]
            and candidate[1] == pattern[1]
            and candidate[2] == pattern[2]
        )

    return False

