"""Factory for creating catalog sources."""

import importlib
import logging
from typing import Any

from infrastructure.config.models import PickerConfig, SourceKind

from .base import CatalogSource
from .mock import MockCatalogSource
from .registry import get_source_class

logger = logging.getLogger(__name__)


def _ensure_source_imported(kind: SourceKind) -> None:
    """
    Lazy-import the source module to trigger `register_source(...)`.

    Convention:
      - SourceKind value MUST match module filename under infrastructure/catalog_sources/
        e.g., SourceKind.HTTP.value == "http" -> infrastructure/catalog_sources/http.py
    """
    module_name = f"{__package__}.{kind.value}"
    try:
        importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        if getattr(e, "name", None) == module_name:
            raise RuntimeError(
                f"No catalog source module found for source='{kind.value}'. "
                f"Expected file: infrastructure/catalog_sources/{kind.value}.py"
            ) from e
        raise


def make_catalog_source(
    cfg: PickerConfig,
    *,
    use_mock: bool = False,
    mock_payload: Any = None,
) -> CatalogSource:
    """
    Factory function to create the appropriate catalog source.
    Args:
        cfg: Picker configuration containing source settings
        use_mock: If True, use the MockCatalogSource regardless of cfg
        mock_payload: Optional payload for the MockCatalogSource
    Returns:
        An instance of CatalogSource for the configured kind.
    Raises:
        RuntimeError: If the source kind is unsupported.
    """
    if use_mock:
        return MockCatalogSource(cfg=cfg, payload=mock_payload)

    source_cls = get_source_class(cfg.source)

    if source_cls is None:
        _ensure_source_imported(cfg.source)
        source_cls = get_source_class(cfg.source)

    if source_cls is None:
        raise RuntimeError(
            f"Catalog source '{cfg.source.value}' did not register a class. "
            f"Make sure {cfg.source.value}.py calls register_source(...)."
        )

    return source_cls.from_cfg(cfg)
