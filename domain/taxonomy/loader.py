"""Parse an identities-with-categories payload into a Catalog."""

import logging
from typing import Any

from domain.taxonomy.catalog import Catalog, NodeMode, TaxonomyNode
from domain.taxonomy.levels import Level

logger = logging.getLogger(__name__)

# Payload key holding each level's children (REST shape of /public/identities)
CHILD_KEYS: dict[Level, str] = {
    Level.IDENTITY: "categories",
    Level.CATEGORY: "subcategories",
    Level.SUBCATEGORY: "subsubs",
}
GENERIC_CHILD_KEY = "children"


def parse_catalog(data: Any, *, mode: NodeMode = NodeMode.SHARED) -> Catalog:
    """
    Parse pre-loaded catalog data into a Catalog.

    This is a pure function - it does NOT perform file I/O or network calls.
    Accepts either a mapping with an ``identities`` list or the list itself.
    Nodes with a missing id are kept as display-only entries.

    Args:
        data: Decoded JSON/YAML payload
        mode: Expected node mode; EXCLUSIVE rejects ids that occur more than once

    Returns:
        Catalog

    Raises:
        ValueError: If the payload has the wrong shape or violates `mode`
    """
    if isinstance(data, dict):
        raw_identities = data.get("identities", []) or []
    else:
        raw_identities = data

    if not isinstance(raw_identities, list):
        raise ValueError(f"identities must be a list, got {type(raw_identities).__name__}")

    identities = tuple(_parse_node(raw, Level.IDENTITY, path=f"identities[{i}]") for i, raw in enumerate(raw_identities))
    catalog = Catalog(identities=identities)

    if mode is NodeMode.EXCLUSIVE:
        dups = catalog.duplicate_ids()
        if dups:
            detail = "; ".join(f"{level.value}: {ids}" for level, ids in dups.items())
            raise ValueError(f"Catalog declared exclusive but has ids under more than one parent ({detail})")

    logger.debug(
        "Parsed catalog: %d identities, %d categories, %d subcategories, %d sub-subcategories (mode=%s)",
        len(catalog.ids(Level.IDENTITY)),
        len(catalog.ids(Level.CATEGORY)),
        len(catalog.ids(Level.SUBCATEGORY)),
        len(catalog.ids(Level.SUBSUB)),
        mode.value,
    )
    return catalog


def _parse_node(raw: Any, level: Level, *, path: str) -> TaxonomyNode:
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping, got {type(raw).__name__}")

    raw_id = raw.get("id")
    node_id = str(raw_id).strip() if raw_id is not None and str(raw_id).strip() else None
    name = str(raw.get("name") or "").strip()
    if node_id is None:
        logger.warning("%s: %s %r has no id; it will be shown but cannot be selected", path, level.value, name)

    children: tuple[TaxonomyNode, ...] = ()
    if level.child is not None:
        key = CHILD_KEYS[level]
        raw_children = raw.get(key)
        if raw_children is None:
            raw_children = raw.get(GENERIC_CHILD_KEY)
        raw_children = raw_children or []
        if not isinstance(raw_children, list):
            raise ValueError(f"{path}.{key} must be a list")
        children = tuple(
            _parse_node(child, level.child, path=f"{path}.{key}[{i}]") for i, child in enumerate(raw_children)
        )

    return TaxonomyNode(id=node_id, name=name, children=children)
