"""Which identities can reach a given category, subcategory or sub-subcategory."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from domain.taxonomy.levels import OWNED_LEVELS, Level

if TYPE_CHECKING:
    from domain.taxonomy.catalog import TaxonomyNode

logger = logging.getLogger(__name__)

_EMPTY: frozenset[str] = frozenset()


@dataclass(frozen=True)
class OwnershipIndex:
    """
    Read-only map from (level, node id) to the identity ids that reference it.

    Built by a single traversal of the catalog. In exclusive mode every owned
    node has exactly one owner; in shared mode a node may have several.
    """

    identity_ids: frozenset[str] = _EMPTY
    owners: Mapping[Level, Mapping[str, frozenset[str]]] = field(default_factory=dict)

    @classmethod
    def build(cls, identities: Iterable["TaxonomyNode"]) -> "OwnershipIndex":
        acc: dict[Level, dict[str, set[str]]] = {level: {} for level in OWNED_LEVELS}
        roots: set[str] = set()

        for identity in identities:
            if identity.id is None:
                # Nothing below an id-less identity can be owned through it
                continue
            roots.add(identity.id)
            for category in identity.children:
                _add(acc, Level.CATEGORY, category.id, identity.id)
                for sub in category.children:
                    _add(acc, Level.SUBCATEGORY, sub.id, identity.id)
                    for subsub in sub.children:
                        _add(acc, Level.SUBSUB, subsub.id, identity.id)

        owners = {level: {k: frozenset(v) for k, v in by_id.items()} for level, by_id in acc.items()}
        logger.debug(
            "Ownership index built: %d identities, %s",
            len(roots),
            ", ".join(f"{level.value}={len(owners[level])}" for level in OWNED_LEVELS),
        )
        return cls(identity_ids=frozenset(roots), owners=owners)

    def owner_identities(self, level: Level, node_id: str | None) -> frozenset[str]:
        """All identity ids from which `node_id` is reachable (empty if unknown)."""
        if node_id is None:
            return _EMPTY
        if level is Level.IDENTITY:
            return frozenset({node_id}) if node_id in self.identity_ids else _EMPTY
        return self.owners.get(level, {}).get(node_id, _EMPTY)

    def is_reachable(self, level: Level, node_id: str, identity_ids: Iterable[str]) -> bool:
        """True if any of `identity_ids` owns the node."""
        owners = self.owner_identities(level, node_id)
        return any(i in owners for i in identity_ids)

    def is_shared(self) -> bool:
        """True if any node is reachable from more than one identity."""
        return any(len(v) > 1 for by_id in self.owners.values() for v in by_id.values())


def _add(acc: dict[Level, dict[str, set[str]]], level: Level, node_id: str | None, identity_id: str) -> None:
    if node_id is None:
        return
    acc[level].setdefault(node_id, set()).add(identity_id)
