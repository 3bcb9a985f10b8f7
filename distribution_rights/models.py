from __future__ import annotations

from enum import Enum
from typing import Any, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from distribution_rights.regions.models import RegionLevel


class RuleType(str, Enum):
    INCLUDE = "include"
    EXCLUDE = "exclude"


class DistributorRecord(BaseModel):
    """Persisted form of one distributor.

    Also reads state written by the earlier tool, which used capitalized keys
    and stored rule sets as ``{"US": true}`` maps.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", validation_alias=AliasChoices("name", "Name"))
    parentName: str = Field(default="", validation_alias=AliasChoices("parentName", "ParentName"))
    includes: List[str] = Field(default_factory=list, validation_alias=AliasChoices("includes", "Includes"))
    excludes: List[str] = Field(default_factory=list, validation_alias=AliasChoices("excludes", "Excludes"))

    @field_validator("parentName", mode="before")
    @classmethod
    def _none_parent(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("includes", "excludes", mode="before")
    @classmethod
    def _rule_set(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, dict):
            return sorted(code for code, enabled in value.items() if enabled)
        return value


class RegionDescription(BaseModel):
    code: str
    level: RegionLevel
    names: List[str]


class PermissionCheck(BaseModel):
    distributor: str
    region: RegionDescription
    allowed: bool


class RuleChange(BaseModel):
    distributor: str
    region: str
    ruleType: RuleType


class DistributorListing(BaseModel):
    distributors: List[DistributorRecord]
