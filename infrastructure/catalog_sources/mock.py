"""In-memory catalog source for demos and tests."""

import logging
from typing import Any

from infrastructure.catalog_sources.base import CatalogSource
from infrastructure.catalog_sources.registry import register_source
from infrastructure.config.models import PickerConfig, SourceKind

logger = logging.getLogger(__name__)

# "Technology" is listed under both identities, so the demo runs in shared-node mode
DEMO_PAYLOAD: dict[str, Any] = {
    "identities": [
        {
            "id": "I1",
            "name": "Entrepreneur",
            "categories": [
                {
                    "id": "C1",
                    "name": "Technology",
                    "subcategories": [
                        {"id": "S1", "name": "Fintech", "subsubs": [{"id": "X1", "name": "Payments"}]},
                    ],
                },
            ],
        },
        {
            "id": "I2",
            "name": "Investor",
            "categories": [
                {
                    "id": "C1",
                    "name": "Technology",
                    "subcategories": [
                        {"id": "S1", "name": "Fintech", "subsubs": [{"id": "X1", "name": "Payments"}]},
                    ],
                },
                {"id": "C2", "name": "Real Estate", "subcategories": []},
            ],
        },
    ]
}

MOCK_FIXTURES: dict[str, dict[str, Any]] = {
    "demo": DEMO_PAYLOAD,
    "empty": {"identities": []},
}


class MockCatalogSource(CatalogSource):
    """Returns a built-in fixture (``mock.fixture``) or an explicit payload."""

    kind = SourceKind.MOCK

    def __init__(self, *, cfg: PickerConfig, payload: Any = None) -> None:
        super().__init__(cfg=cfg, client=None)
        if payload is None:
            name = cfg.mock.fixture if cfg.mock is not None else "demo"
            if name not in MOCK_FIXTURES:
                raise ValueError(f"Unknown mock fixture {name!r}. Available: {sorted(MOCK_FIXTURES)}")
            payload = MOCK_FIXTURES[name]
        self.payload = payload
        logger.info("Initialized mock catalog source (no network or file access)")

    def fetch_raw(self) -> Any:
        return self.payload


register_source(SourceKind.MOCK, MockCatalogSource)
