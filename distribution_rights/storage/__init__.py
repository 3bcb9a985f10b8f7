"""
Persistent storage layer for distribution-rights.

Provides:
- StateStore: whole-file JSON persistence for the distributor graph
"""

from distribution_rights.storage.state_store import StateStore

__all__ = [
    "StateStore",
]
