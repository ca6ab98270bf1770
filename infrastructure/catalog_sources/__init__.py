"""
Catalog sources.

Implements the adapter pattern for where the catalog comes from:
- File (YAML/JSON)
- HTTP (host application's identities endpoint)
- Mock (for testing)

All sources implement the CatalogSource interface.
"""

from infrastructure.catalog_sources.base import CatalogSource
from infrastructure.catalog_sources.factory import make_catalog_source
from infrastructure.catalog_sources.file import FileCatalogSource
from infrastructure.catalog_sources.http import HttpCatalogSource
from infrastructure.catalog_sources.mock import MockCatalogSource

__all__ = [
    # Abstract base
    "CatalogSource",
    # Concrete implementations
    "FileCatalogSource",
    "HttpCatalogSource",
    "MockCatalogSource",
    # Factory (most commonly used)
    "make_catalog_source",
]
