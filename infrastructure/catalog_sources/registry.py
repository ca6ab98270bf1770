import logging

from infrastructure.config.models import SourceKind

from .base import CatalogSource

logger = logging.getLogger(__name__)

# Source kind -> CatalogSource class
_SOURCE_REGISTRY: dict[SourceKind, type[CatalogSource]] = {}


def register_source(kind: SourceKind, source_cls: type[CatalogSource], *, override: bool = False) -> None:
    """Register a catalog source class for a kind.

    This is the plugin hook: source modules call this at import time.
    """
    if (kind in _SOURCE_REGISTRY) and not override:
        existing = _SOURCE_REGISTRY[kind]
        raise RuntimeError(
            f"Catalog source already registered for kind={kind.value}: {existing.__name__}. "
            f"Use override=True to replace."
        )
    _SOURCE_REGISTRY[kind] = source_cls
    logger.debug("Registered catalog source for kind=%s: %s", kind.value, source_cls.__name__)


def get_source_class(kind: SourceKind) -> type[CatalogSource] | None:
    """Return the registered source class (or None if not registered yet)."""
    return _SOURCE_REGISTRY.get(kind)
