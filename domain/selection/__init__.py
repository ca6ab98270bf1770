"""
Selection: immutable snapshots, the mutating store and roll-up counts.

Only SelectionStore mutates a selection; everything else reads snapshots.
"""

from domain.selection.policy import SelectionPolicy
from domain.selection.rollup import RollupCounter, RollupMode
from domain.selection.state import PAYLOAD_KEYS, SelectionState, payload_key
from domain.selection.store import SelectionListener, SelectionStore

__all__ = [
    "SelectionState",
    "SelectionStore",
    "SelectionListener",
    "SelectionPolicy",
    "RollupCounter",
    "RollupMode",
    "PAYLOAD_KEYS",
    "payload_key",
]
