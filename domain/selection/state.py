"""Immutable selection snapshot and its payload form."""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from domain.taxonomy.levels import Level

# Payload keys used by the host application's persistence endpoints
PAYLOAD_KEYS: dict[Level, str] = {
    Level.IDENTITY: "identityIds",
    Level.CATEGORY: "categoryIds",
    Level.SUBCATEGORY: "subcategoryIds",
    Level.SUBSUB: "subsubCategoryIds",
}

_FIELDS: dict[Level, str] = {
    Level.IDENTITY: "identity_ids",
    Level.CATEGORY: "category_ids",
    Level.SUBCATEGORY: "subcategory_ids",
    Level.SUBSUB: "subsub_ids",
}


def payload_key(level: Level, prefix: str = "") -> str:
    """Payload key for a level, e.g. ``categoryIds`` or ``interestCategoryIds``."""
    key = PAYLOAD_KEYS[level]
    if not prefix:
        return key
    return prefix + key[0].upper() + key[1:]


class SelectionState(BaseModel):
    """
    Four sets of selected ids, one per level.

    Frozen and hashable: equality is structural, so two snapshots with the same
    ids compare equal regardless of how they were produced.
    """

    model_config = ConfigDict(frozen=True)

    identity_ids: frozenset[str] = Field(default_factory=frozenset)
    category_ids: frozenset[str] = Field(default_factory=frozenset)
    subcategory_ids: frozenset[str] = Field(default_factory=frozenset)
    subsub_ids: frozenset[str] = Field(default_factory=frozenset)

    def ids(self, level: Level) -> frozenset[str]:
        return getattr(self, _FIELDS[level])

    def has(self, level: Level, node_id: str | None) -> bool:
        return node_id is not None and node_id in self.ids(level)

    def replace(self, updates: Mapping[Level, Iterable[str]]) -> "SelectionState":
        """Copy with the given levels replaced."""
        return self.model_copy(update={_FIELDS[level]: frozenset(ids) for level, ids in updates.items()})

    @property
    def is_empty(self) -> bool:
        return not any(self.ids(level) for level in Level)

    def total(self) -> int:
        return sum(len(self.ids(level)) for level in Level)

    def to_payload(self, prefix: str = "") -> dict[str, list[str]]:
        """Sorted id lists keyed the way the host persists them."""
        return {payload_key(level, prefix): sorted(self.ids(level)) for level in Level}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], prefix: str = "") -> "SelectionState":
        """
        Build a state from a stored payload (missing keys mean empty sets).

        Raises:
            ValueError: If a present key does not hold a list of ids
        """
        sets: dict[str, frozenset[str]] = {}
        for level in Level:
            key = payload_key(level, prefix)
            raw = payload.get(key) or []
            if not isinstance(raw, (list, tuple, set, frozenset)):
                raise ValueError(f"{key} must be a list of ids, got {type(raw).__name__}")
            sets[_FIELDS[level]] = frozenset(str(v) for v in raw if v is not None)
        return cls(**sets)
