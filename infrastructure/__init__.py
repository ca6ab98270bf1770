"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Catalog sources (file, HTTP, mock)
- Configuration loading (YAML, environment)
- Observability (logging)
- Saved selections on disk

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.catalog_sources import CatalogSource, make_catalog_source
from infrastructure.config import (
    PickerConfig,
    SourceKind,
    load_picker_config,
)

__all__ = [
    # Catalog sources (most commonly used)
    "make_catalog_source",
    "CatalogSource",
    # Configuration (most commonly used)
    "load_picker_config",
    "PickerConfig",
    "SourceKind",
]
