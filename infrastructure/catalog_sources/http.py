"""Catalog fetched from the host application's identities endpoint."""

import logging
from typing import Any

import httpx

from infrastructure.catalog_sources.base import CatalogSource
from infrastructure.catalog_sources.registry import register_source
from infrastructure.config.models import PickerConfig, SourceKind

logger = logging.getLogger(__name__)


class HttpCatalogSource(CatalogSource):
    """
    GET {base_url}{endpoint} (default /public/identities).

    - Optional bearer token from config or AUDIENCE_API_TOKEN
    - Non-2xx responses raise httpx.HTTPStatusError; no retries
    """

    kind = SourceKind.HTTP

    @classmethod
    def from_cfg(cls, cfg: PickerConfig) -> "HttpCatalogSource":
        http_cfg = cfg.http
        headers = {"Accept": "application/json"}
        if http_cfg.token:
            headers["Authorization"] = f"Bearer {http_cfg.token}"
        client = httpx.Client(
            base_url=http_cfg.base_url.rstrip("/"),
            timeout=http_cfg.timeout_s,
            headers=headers,
        )
        return cls(cfg=cfg, client=client)

    def fetch_raw(self) -> Any:
        endpoint = self.cfg.http.endpoint
        logger.info("Fetching catalog from %s%s...", self.client.base_url, endpoint)
        resp = self.client.get(endpoint)
        resp.raise_for_status()
        return resp.json()


register_source(SourceKind.HTTP, HttpCatalogSource)
