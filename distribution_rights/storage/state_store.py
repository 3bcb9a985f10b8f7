"""
JSON persistence for the distributor graph.

The file holds one object mapping distributor name to its record:

    {
        "ACME": {"name": "ACME", "parentName": "", "includes": ["US"], "excludes": []},
        "ACME-WEST": {"name": "ACME-WEST", "parentName": "ACME", ...}
    }

A missing or empty file means no distributors have been registered yet.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Mapping

from pydantic import ValidationError

from distribution_rights.errors import StateSaveError, StateStoreError
from distribution_rights.graph.distributors import DistributorGraph
from distribution_rights.models import DistributorRecord

LOG = logging.getLogger("storage.state_store")


class StateStore:
    """Whole-file JSON store for distributor records."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Dict[str, DistributorRecord]:
        """Load all records, keyed by distributor name."""
        if not self._path.exists():
            return {}

        try:
            text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StateStoreError(f"Cannot read distributor state {self._path}: {exc}") from exc

        if not text.strip():
            return {}

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StateStoreError(f"Malformed distributor state {self._path}: {exc}") from exc

        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise StateStoreError(
                f"Malformed distributor state {self._path}: expected an object, got {type(raw).__name__}"
            )

        records: Dict[str, DistributorRecord] = {}
        for name, payload in raw.items():
            try:
                record = DistributorRecord.model_validate(payload)
            except ValidationError as exc:
                raise StateStoreError(f"Invalid record for distributor {name} in {self._path}: {exc}") from exc
            # The mapping key is authoritative for the name.
            records[name] = record.model_copy(update={"name": name})

        LOG.debug("Loaded %d distributors from %s", len(records), self._path)
        return records

    def save(self, records: Mapping[str, DistributorRecord]) -> None:
        """Replace the file with the given records."""
        payload = {name: records[name].model_dump(mode="json") for name in sorted(records)}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=4) + "\n", encoding="utf-8")
        except OSError as exc:
            raise StateSaveError(f"Cannot write distributor state {self._path}: {exc}") from exc

        LOG.info("Saved %d distributors to %s", len(payload), self._path)

    def load_graph(self) -> DistributorGraph:
        """Load records and rebuild the distributor graph."""
        records = self.load()
        try:
            return DistributorGraph.from_records(records)
        except ValueError as exc:
            raise StateStoreError(f"Inconsistent distributor state {self._path}: {exc}") from exc

    def save_graph(self, graph: DistributorGraph) -> None:
        self.save(graph.to_records())
