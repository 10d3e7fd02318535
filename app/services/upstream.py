"""
Client for the upstream launcher metadata host.

Fetching is split in two steps: decode (HTTP body -> JSON value) and
validation (JSON value -> pydantic model). Transport problems raise
UpstreamUnavailableError, anything wrong with the body raises
UpstreamSchemaError. Nothing is retried here; the next request simply tries
again.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from app.domain.errors import UpstreamSchemaError, UpstreamUnavailableError
from app.domain.models import Catalog, Release, ReleaseDetail

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_document(model: Type[ModelT], payload: Any, url: str) -> ModelT:
    """
    Validate an already decoded JSON value against an upstream model.
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise UpstreamSchemaError(url, f"invalid {model.__name__} document: {e}") from e


class UpstreamClient:
    """
    Fetches the catalog and release detail documents over HTTP.
    """

    def __init__(
        self,
        catalog_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.catalog_url = catalog_url
        self._client = httpx.AsyncClient(
            follow_redirects=True,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def get_json(self, url: str) -> Any:
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(url, str(e) or type(e).__name__) from e

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamSchemaError(url, f"response is not valid JSON: {e}") from e

    async def fetch_catalog(self) -> Catalog:
        logger.info(f"Fetching catalog from {self.catalog_url}")
        payload = await self.get_json(self.catalog_url)
        return validate_document(Catalog, payload, self.catalog_url)

    async def fetch_release_detail(self, release: Release) -> ReleaseDetail:
        url = release.url
        logger.info(f"Fetching release detail for {release.id} from {url}")
        payload = await self.get_json(url)
        return validate_document(ReleaseDetail, payload, url)

    async def aclose(self) -> None:
        await self._client.aclose()
