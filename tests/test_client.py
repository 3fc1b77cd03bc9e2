"""Tests for the category API client."""

import httpx
import pytest

from catalog_browser.client import (
    CatalogClient,
    CatalogFetchError,
    CategoryNotFoundError,
    InvalidCategoryIdError,
)
from catalog_browser.config import ClientConfig

BASE_URL = "https://shop.example.com"


def client_for(handler) -> CatalogClient:
    return CatalogClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_category(mock_transport):
    async with CatalogClient(base_url=BASE_URL, transport=mock_transport) as client:
        page = await client.fetch_category("cat-women", page=2, limit=10)

    assert page.category.name == "Women"
    assert [product.id for product in page.products] == ["p1", "p2", "p3"]

    assert len(mock_transport.requests) == 1
    request = mock_transport.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/api/categories/cat-women"
    assert request.url.params["includeProducts"] == "true"
    assert request.url.params["page"] == "2"
    assert request.url.params["limit"] == "10"


@pytest.mark.asyncio
async def test_not_found(mock_transport):
    async with CatalogClient(base_url=BASE_URL, transport=mock_transport) as client:
        with pytest.raises(CategoryNotFoundError) as exc_info:
            await client.fetch_category("missing")

    assert exc_info.value.status_code == 404
    assert str(exc_info.value) == "Category not found"


@pytest.mark.asyncio
async def test_server_error_uses_api_message():
    def handler(request):
        return httpx.Response(500, json={"error": "database unavailable"})

    async with client_for(handler) as client:
        with pytest.raises(CatalogFetchError) as exc_info:
            await client.fetch_category("cat-women")

    assert exc_info.value.status_code == 500
    assert str(exc_info.value) == "database unavailable"


@pytest.mark.asyncio
async def test_server_error_without_body():
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    async with client_for(handler) as client:
        with pytest.raises(CatalogFetchError, match="Failed to fetch category data"):
            await client.fetch_category("cat-women")


@pytest.mark.asyncio
async def test_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with client_for(handler) as client:
        with pytest.raises(CatalogFetchError) as exc_info:
            await client.fetch_category("cat-women")

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_invalid_payload():
    def handler(request):
        return httpx.Response(200, json={"products": []})

    async with client_for(handler) as client:
        with pytest.raises(CatalogFetchError, match="Invalid category data"):
            await client.fetch_category("cat-women")


@pytest.mark.asyncio
async def test_invalid_json():
    def handler(request):
        return httpx.Response(200, text="<html>oops</html>")

    async with client_for(handler) as client:
        with pytest.raises(CatalogFetchError, match="Invalid category data"):
            await client.fetch_category("cat-women")


@pytest.mark.asyncio
async def test_no_retry_on_failure():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503)

    async with client_for(handler) as client:
        with pytest.raises(CatalogFetchError):
            await client.fetch_category("cat-women")

    assert len(calls) == 1


@pytest.mark.asyncio
async def test_blank_category_id(mock_transport):
    async with CatalogClient(base_url=BASE_URL, transport=mock_transport) as client:
        with pytest.raises(InvalidCategoryIdError) as exc_info:
            await client.fetch_category("  ")
    assert isinstance(exc_info.value, CatalogFetchError)
    assert isinstance(exc_info.value, ValueError)
    assert mock_transport.requests == []


@pytest.mark.asyncio
async def test_category_id_is_quoted(mock_transport):
    async with CatalogClient(base_url=BASE_URL, transport=mock_transport) as client:
        with pytest.raises(CategoryNotFoundError):
            await client.fetch_category("a/b?x=1")

    request = mock_transport.requests[0]
    assert request.url.raw_path.split(b"?")[0] == b"/api/categories/a%2Fb%3Fx%3D1"
    assert request.url.params["includeProducts"] == "true"
    assert "x" not in request.url.params


@pytest.mark.asyncio
async def test_requires_context_manager():
    client = CatalogClient(base_url=BASE_URL)
    with pytest.raises(RuntimeError):
        await client.fetch_category("cat-women")


def test_from_config():
    config = ClientConfig(base_url="https://shop.example.com/", timeout_seconds=5, user_agent="ua")
    client = CatalogClient.from_config(config)
    assert client.base_url == "https://shop.example.com"
    assert client.timeout == 5
    assert client.user_agent == "ua"
