"""
Taxonomy catalog: levels, nodes, parsing and ownership.

All functions in this module are pure (no file I/O).
"""

from domain.taxonomy.catalog import Catalog, NodeMode, TaxonomyNode
from domain.taxonomy.levels import EXPANDABLE_LEVELS, OWNED_LEVELS, Level
from domain.taxonomy.loader import parse_catalog
from domain.taxonomy.ownership import OwnershipIndex

__all__ = [
    "Catalog",
    "TaxonomyNode",
    "NodeMode",
    "Level",
    "OWNED_LEVELS",
    "EXPANDABLE_LEVELS",
    "OwnershipIndex",
    "parse_catalog",
]
