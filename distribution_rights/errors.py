"""
Error types raised by the distribution-rights core and its collaborators.

Every error carries a stable ``code`` string so callers (CLI, MCP server)
can report the kind of failure without matching on class names.
"""

from __future__ import annotations


class DistributionError(Exception):
    """Base exception for distribution-rights failures."""

    code = "distribution_error"


class DuplicateDistributorError(DistributionError):
    """A distributor with the requested name is already registered."""

    code = "duplicate_distributor"

    def __init__(self, name: str) -> None:
        super().__init__(f"distributor {name} already exists")
        self.name = name


class UnknownDistributorError(DistributionError):
    """No distributor with the requested name is registered."""

    code = "unknown_distributor"

    def __init__(self, name: str) -> None:
        super().__init__(f"distributor {name} does not exist")
        self.name = name


class UnknownParentError(DistributionError):
    """The parent named at registration time is not registered."""

    code = "unknown_parent"

    def __init__(self, parent_name: str) -> None:
        super().__init__(f"parent distributor {parent_name} does not exist")
        self.parent_name = parent_name


class UnknownRegionError(DistributionError):
    """The region code is not a key of the region catalog."""

    code = "unknown_region"

    def __init__(self, region: str) -> None:
        super().__init__(f"invalid region code: {region}")
        self.region = region


class ParentDenialError(DistributionError):
    """A rule would grant a child territory its parent does not authorize."""

    code = "parent_denial"

    def __init__(self, name: str, parent_name: str, region: str) -> None:
        super().__init__(
            f"parent distributor {parent_name} does not have permission for: {region} "
            f"(requested by {name})"
        )
        self.name = name
        self.parent_name = parent_name
        self.region = region


class CatalogLoadError(DistributionError):
    """The region gazetteer could not be read."""

    code = "catalog_load_error"


class StateStoreError(DistributionError):
    """Distributor state could not be read or written."""

    code = "state_store_error"


class StateSaveError(StateStoreError):
    """
    Distributor state could not be written.

    The change was already applied in memory when the write failed; ``result``
    holds what the command produced so callers can still report it.
    """

    code = "state_save_error"

    def __init__(self, message: str, result: object = None) -> None:
        super().__init__(message)
        self.result = result
