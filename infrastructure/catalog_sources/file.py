"""Catalog read from a YAML or JSON file."""

import logging
from typing import Any

from infrastructure.catalog_sources.base import CatalogSource
from infrastructure.catalog_sources.registry import register_source
from infrastructure.config.loader import load_document
from infrastructure.config.models import SourceKind

logger = logging.getLogger(__name__)


class FileCatalogSource(CatalogSource):
    """Reads `file.path`; JSON files are parsed by the YAML loader too."""

    kind = SourceKind.FILE

    def fetch_raw(self) -> Any:
        path = self.cfg.file.path
        logger.info("Reading catalog file %s...", path)
        return load_document(path)


register_source(SourceKind.FILE, FileCatalogSource)
