"""Catalog value types: taxonomy nodes and the immutable four-level hierarchy."""

import logging
from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property

from pydantic import BaseModel, ConfigDict, Field

from domain.taxonomy.levels import Level
from domain.taxonomy.ownership import OwnershipIndex

logger = logging.getLogger(__name__)

_EMPTY: frozenset[str] = frozenset()


class NodeMode(str, Enum):
    """How node ids relate to identity roots."""

    SHARED = "shared"  # same id may sit under several identities (DAG)
    EXCLUSIVE = "exclusive"  # one path per node (tree)


class TaxonomyNode(BaseModel):
    """One node of the hierarchy. A node without id is display-only."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str = ""
    children: tuple["TaxonomyNode", ...] = Field(default_factory=tuple)

    @property
    def selectable(self) -> bool:
        return self.id is not None


@dataclass
class _CatalogIndex:
    nodes: dict[Level, dict[str, TaxonomyNode]]
    parents: dict[Level, dict[str, str | None]]
    children: dict[Level, dict[str, frozenset[str]]]
    occurrences: dict[Level, Counter]
    descendants: dict[tuple[Level, str], dict[Level, frozenset[str]]] = field(default_factory=dict)


class Catalog(BaseModel):
    """
    Immutable Identity -> Category -> Subcategory -> Sub-subcategory hierarchy.

    Derived lookups (nodes by id, parents, children, ownership) are computed on
    first use and memoized on the instance; a new Catalog object gets fresh ones.
    """

    model_config = ConfigDict(frozen=True)

    identities: tuple[TaxonomyNode, ...] = Field(default_factory=tuple)

    def iter_nodes(self) -> Iterator[tuple[Level, TaxonomyNode, TaxonomyNode | None]]:
        """Depth-first walk yielding (level, node, parent node)."""

        def walk(level: Level, node: TaxonomyNode, parent: TaxonomyNode | None):
            yield level, node, parent
            if level.child is not None:
                for child in node.children:
                    yield from walk(level.child, child, node)

        for identity in self.identities:
            yield from walk(Level.IDENTITY, identity, None)

    @cached_property
    def _index(self) -> _CatalogIndex:
        nodes: dict[Level, dict[str, TaxonomyNode]] = {level: {} for level in Level}
        parents: dict[Level, dict[str, str | None]] = {level: {} for level in Level}
        children: dict[Level, dict[str, set[str]]] = {level: {} for level in Level}
        occurrences: dict[Level, Counter] = {level: Counter() for level in Level}

        for level, node, parent in self.iter_nodes():
            if node.id is None:
                continue
            occurrences[level][node.id] += 1
            nodes[level].setdefault(node.id, node)
            children[level].setdefault(node.id, set()).update(c.id for c in node.children if c.id is not None)

            if level in (Level.IDENTITY, Level.CATEGORY):
                # Categories hang off identities by ownership, not by a single parent
                continue
            parent_id = parent.id if parent is not None else None
            known = parents[level].get(node.id, None)
            if node.id not in parents[level] or known is None:
                parents[level][node.id] = parent_id
            elif parent_id is not None and parent_id != known:
                logger.warning(
                    "Catalog: %s %r listed under %s %r and %r; keeping the first parent",
                    level.value,
                    node.id,
                    level.parent.value,
                    known,
                    parent_id,
                )

        return _CatalogIndex(
            nodes=nodes,
            parents=parents,
            children={lvl: {k: frozenset(v) for k, v in m.items()} for lvl, m in children.items()},
            occurrences=occurrences,
        )

    @cached_property
    def ownership(self) -> OwnershipIndex:
        """Ownership index, built once per Catalog instance."""
        return OwnershipIndex.build(self.identities)

    # ---- lookups ----

    def node(self, level: Level, node_id: str | None) -> TaxonomyNode | None:
        if node_id is None:
            return None
        return self._index.nodes[level].get(node_id)

    def contains(self, level: Level, node_id: str | None) -> bool:
        return node_id is not None and node_id in self._index.nodes[level]

    def ids(self, level: Level) -> frozenset[str]:
        return frozenset(self._index.nodes[level])

    def parent_id(self, level: Level, node_id: str) -> str | None:
        """Parent id for subcategories and sub-subcategories (None otherwise)."""
        return self._index.parents[level].get(node_id)

    def child_ids(self, level: Level, node_id: str) -> frozenset[str]:
        """Ids of the node's children, unioned over every place the node appears."""
        return self._index.children[level].get(node_id, _EMPTY)

    def descendant_ids(self, level: Level, node_id: str) -> Mapping[Level, frozenset[str]]:
        """Selectable descendants of a node, grouped by level."""
        key = (level, node_id)
        cache = self._index.descendants
        if key in cache:
            return cache[key]

        out: dict[Level, frozenset[str]] = {}
        frontier: frozenset[str] = frozenset({node_id}) if self.contains(level, node_id) else _EMPTY
        current = level
        while current.child is not None:
            nxt: set[str] = set()
            for nid in frontier:
                nxt.update(self.child_ids(current, nid))
            current = current.child
            frontier = frozenset(nxt)
            out[current] = frontier

        cache[key] = out
        return out

    def ancestor_path(self, level: Level, node_id: str | None) -> dict[Level, str] | None:
        """
        Ids of the category/subcategory ancestors a selection of this node requires.

        Returns None when the node is unknown or its chain contains an id-less
        parent (the node can then never be selected consistently).
        """
        if not self.contains(level, node_id):
            return None
        path: dict[Level, str] = {}
        current, current_id = level, node_id
        while current in (Level.SUBCATEGORY, Level.SUBSUB):
            parent_id = self.parent_id(current, current_id)
            if parent_id is None:
                return None
            current = current.parent
            current_id = parent_id
            path[current] = current_id
        return path

    def is_selectable(self, level: Level, node_id: str | None) -> bool:
        return self.ancestor_path(level, node_id) is not None

    def duplicate_ids(self) -> dict[Level, list[str]]:
        """Ids occurring more than once per level (empty for a tree-shaped catalog)."""
        out: dict[Level, list[str]] = {}
        for level, counts in self._index.occurrences.items():
            dups = sorted(k for k, n in counts.items() if n > 1)
            if dups:
                out[level] = dups
        return out

    @property
    def mode(self) -> NodeMode:
        """Detected node mode: shared if any node has more than one owner."""
        return NodeMode.SHARED if self.ownership.is_shared() else NodeMode.EXCLUSIVE
