"""Taxonomy levels and navigation between them."""

from enum import Enum


class Level(str, Enum):
    """The four levels of the audience taxonomy, top-down."""

    IDENTITY = "identity"
    CATEGORY = "category"
    SUBCATEGORY = "subcategory"
    SUBSUB = "subsub"

    @property
    def depth(self) -> int:
        return _ORDER.index(self)

    @property
    def child(self) -> "Level | None":
        """Next level down, or None for sub-subcategories."""
        i = self.depth
        return _ORDER[i + 1] if i + 1 < len(_ORDER) else None

    @property
    def parent(self) -> "Level | None":
        """Next level up, or None for identities."""
        i = self.depth
        return _ORDER[i - 1] if i > 0 else None


_ORDER: tuple[Level, ...] = (Level.IDENTITY, Level.CATEGORY, Level.SUBCATEGORY, Level.SUBSUB)

# Levels that can be owned by an identity (everything below the roots)
OWNED_LEVELS: tuple[Level, ...] = _ORDER[1:]

# Levels with accordion expansion (sub-subcategories are leaves)
EXPANDABLE_LEVELS: tuple[Level, ...] = _ORDER[:3]
