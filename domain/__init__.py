"""
Domain layer: the selection engine, with no I/O.

Contains:
- taxonomy: catalog value types, parsing and the ownership index
- selection: selection snapshots, the selection store and roll-up counts
- expansion: accordion expand/collapse state
"""

from domain.expansion import ExpansionState, ExpansionStore
from domain.selection import RollupCounter, RollupMode, SelectionPolicy, SelectionState, SelectionStore
from domain.taxonomy import Catalog, Level, NodeMode, TaxonomyNode, parse_catalog

__all__ = [
    "Catalog",
    "TaxonomyNode",
    "Level",
    "NodeMode",
    "parse_catalog",
    "SelectionState",
    "SelectionStore",
    "SelectionPolicy",
    "RollupCounter",
    "RollupMode",
    "ExpansionState",
    "ExpansionStore",
]
