"""Tests for the upstream client, with httpx.MockTransport standing in for the network."""

from __future__ import annotations

import httpx
import pytest

from app.domain.errors import UpstreamSchemaError, UpstreamUnavailableError
from app.domain.models import Catalog, Release
from app.services.upstream import UpstreamClient, validate_document

from .conftest import catalog_payload, detail_payload, release_payload

CATALOG_URL = "https://piston-meta.example.test/mc/game/version_manifest_v2.json"


def make_client(handler) -> UpstreamClient:
    return UpstreamClient(CATALOG_URL, timeout=5.0, transport=httpx.MockTransport(handler))


@pytest.fixture
def release() -> Release:
    return Release.model_validate(release_payload("1.1"))


class TestFetchCatalog:
    @pytest.mark.asyncio
    async def test_fetch_and_validate(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json=catalog_payload([release_payload("1.1"), release_payload("1.0")]))

        client = make_client(handler)
        try:
            catalog = await client.fetch_catalog()
        finally:
            await client.aclose()

        assert seen == [CATALOG_URL]
        assert isinstance(catalog, Catalog)
        assert [r.id for r in catalog.versions] == ["1.1", "1.0"]

    @pytest.mark.asyncio
    async def test_non_2xx_is_unavailable(self):
        client = make_client(lambda request: httpx.Response(503))
        try:
            with pytest.raises(UpstreamUnavailableError) as exc_info:
                await client.fetch_catalog()
        finally:
            await client.aclose()
        assert exc_info.value.url == CATALOG_URL

    @pytest.mark.asyncio
    async def test_transport_error_is_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        try:
            with pytest.raises(UpstreamUnavailableError):
                await client.fetch_catalog()
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)
        try:
            with pytest.raises(UpstreamUnavailableError):
                await client.fetch_catalog()
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_invalid_json_is_schema_error(self):
        client = make_client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
        try:
            with pytest.raises(UpstreamSchemaError, match="not valid JSON"):
                await client.fetch_catalog()
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_wrong_shape_is_schema_error(self):
        client = make_client(lambda request: httpx.Response(200, json={"latest": {}, "versions": []}))
        try:
            with pytest.raises(UpstreamSchemaError, match="invalid Catalog document"):
                await client.fetch_catalog()
        finally:
            await client.aclose()


class TestFetchReleaseDetail:
    @pytest.mark.asyncio
    async def test_fetches_release_url(self, release):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json=detail_payload("1.1"))

        client = make_client(handler)
        try:
            detail = await client.fetch_release_detail(release)
        finally:
            await client.aclose()

        assert seen == [str(release.url)]
        assert detail.id == "1.1"

    @pytest.mark.asyncio
    async def test_invalid_detail_is_schema_error(self, release):
        payload = detail_payload("1.1")
        payload["downloads"]["client"]["size"] = "big"
        client = make_client(lambda request: httpx.Response(200, json=payload))
        try:
            with pytest.raises(UpstreamSchemaError, match="invalid ReleaseDetail document"):
                await client.fetch_release_detail(release)
        finally:
            await client.aclose()


def test_validate_document_keeps_pydantic_error_text():
    with pytest.raises(UpstreamSchemaError) as exc_info:
        validate_document(Catalog, {"versions": []}, "https://meta.test/c.json")
    assert "latest" in exc_info.value.reason
    assert exc_info.value.__cause__ is not None
