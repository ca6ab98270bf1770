"""Base interface for catalog sources."""

import logging
from abc import ABC, abstractmethod
from typing import Any

from domain.taxonomy.catalog import Catalog
from domain.taxonomy.levels import Level
from domain.taxonomy.loader import parse_catalog
from infrastructure.config.models import PickerConfig, SourceKind

logger = logging.getLogger(__name__)


class CatalogSource(ABC):
    """
    Abstract base class for catalog sources.
    Common interface for the places an identities-with-categories payload comes from.

    All concrete sources must implement:
    - fetch_raw(): return the decoded payload (mapping or list of identities)
    """

    kind: SourceKind
    cfg: PickerConfig
    client: Any

    def __init__(self, *, cfg: PickerConfig, client: Any = None) -> None:
        self.cfg = cfg
        self.client = client

    @classmethod
    def from_cfg(cls, cfg: PickerConfig) -> "CatalogSource":
        return cls(cfg=cfg)

    @abstractmethod
    def fetch_raw(self) -> Any:
        """Return the raw catalog payload."""
        raise NotImplementedError

    def load(self) -> Catalog:
        """Fetch and parse the catalog using the configured node mode."""
        data = self.fetch_raw()
        catalog = parse_catalog(data, mode=self.cfg.node_mode)
        logger.info(
            "Catalog loaded from %s source: %d identities, %d categories (mode=%s, detected=%s)",
            self.kind.value,
            len(catalog.ids(Level.IDENTITY)),
            len(catalog.ids(Level.CATEGORY)),
            self.cfg.node_mode.value,
            catalog.mode.value,
        )
        return catalog

    def close(self) -> None:
        """Release the underlying client, if any."""
        close = getattr(self.client, "close", None)
        if callable(close):
            close()
