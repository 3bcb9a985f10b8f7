"""
Permission engine over distributor nodes.

A distributor is authorized for a region when it includes the region, does
not exclude it, and every ancestor is authorized for it as well. Nothing is
cached: a change to an ancestor's rules shows up in the next evaluation of
every descendant.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Sequence

from distribution_rights.errors import ParentDenialError
from distribution_rights.regions.models import is_subregion, split_region

if TYPE_CHECKING:
    from distribution_rights.graph.distributors import Distributor

LOG = logging.getLogger("graph.permissions")


class ExcludePolicy(str, Enum):
    """Whether adding an exclude rule must pass the parent check."""

    UNRESTRICTED = "unrestricted"
    PARENT_CHECKED = "parent-checked"


def _matches_any(segments: Sequence[str], rules: Iterable[str]) -> bool:
    return any(is_subregion(segments, split_region(rule)) for rule in rules)


def has_permission(node: "Distributor", region: str) -> bool:
    """
    Decide whether ``node`` may operate in ``region``.

    Walks the parent chain. At each level an exclude match denies at once,
    and a missing include match denies as well; a root that includes the
    region authorizes it.
    """
    segments = split_region(region)
    current: "Distributor | None" = node
    while current is not None:
        if _matches_any(segments, current.excludes):
            return False
        if not _matches_any(segments, current.includes):
            return False
        current = current.parent
    return True


def add_permission(
    node: "Distributor",
    region: str,
    is_include: bool,
    exclude_policy: ExcludePolicy = ExcludePolicy.UNRESTRICTED,
) -> None:
    """
    Add an include or exclude rule to ``node``.

    Includes on a child require the parent to authorize the region already.
    Excludes only narrow a distributor's territory, so they skip that check
    unless ``exclude_policy`` is ``PARENT_CHECKED``.

    Raises:
        ParentDenialError: If the parent check fails; the rule sets are left
            unchanged
    """
    checked = is_include or exclude_policy == ExcludePolicy.PARENT_CHECKED
    parent = node.parent
    if checked and parent is not None and not has_permission(parent, region):
        raise ParentDenialError(node.name, parent.name, region)

    if is_include:
        target, opposite = node.includes, node.excludes
    else:
        target, opposite = node.excludes, node.includes

    target.add(region)
    LOG.debug("Added %s rule %s to %s", "include" if is_include else "exclude", region, node.name)

    if region in opposite:
        LOG.warning(
            "Distributor %s both includes and excludes %s; the exclude takes effect",
            node.name,
            region,
        )
