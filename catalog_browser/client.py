"""HTTP client for the marketplace category endpoint."""

import logging
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from .config import ClientConfig
from .models import CategoryPage

logger = logging.getLogger(__name__)


class CatalogFetchError(Exception):
    """Raised when category data cannot be fetched."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class CategoryNotFoundError(CatalogFetchError):
    """Raised when the category does not exist."""


class InvalidCategoryIdError(CatalogFetchError, ValueError):
    """Raised for a blank category identifier, before any request."""


class CatalogClient:
    """Async client for category detail requests."""

    CATEGORY_PATH = "/api/categories/{category_id}"

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: float = 30.0,
        user_agent: str = "catalog-browser/0.1",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            base_url: Marketplace base URL
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "CatalogClient":
        return cls(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            user_agent=config.user_agent,
            transport=transport,
        )

    async def __aenter__(self) -> "CatalogClient":
        """Async context manager entry."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_category(
        self,
        category_id: str,
        page: int = 1,
        limit: int = 20,
    ) -> CategoryPage:
        """Fetch a category with its children and first product page.

        Args:
            category_id: Category identifier
            page: 1-based product page
            limit: Products per page

        Returns:
            CategoryPage with category metadata and products

        Raises:
            CategoryNotFoundError: If the API answers 404
            InvalidCategoryIdError: If category_id is blank
            CatalogFetchError: On any other HTTP, network or payload failure
        """
        if not self._client:
            raise RuntimeError("Client not started. Use async context manager.")
        if not category_id or not category_id.strip():
            raise InvalidCategoryIdError("Category id must not be blank")

        path = self.CATEGORY_PATH.format(category_id=quote(category_id, safe=""))
        params = {"includeProducts": "true", "limit": limit, "page": page}
        logger.debug(f"GET {path} {params}")

        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Request for category {category_id} failed: {e}")
            raise CatalogFetchError(f"Failed to fetch category data: {e}") from e

        if response.status_code == 404:
            raise CategoryNotFoundError(
                self._error_message(response, "Category not found"),
                status_code=404,
            )
        if not response.is_success:
            message = self._error_message(response, "Failed to fetch category data")
            logger.error(f"Category {category_id} returned HTTP {response.status_code}: {message}")
            raise CatalogFetchError(message, status_code=response.status_code)

        try:
            result = CategoryPage.model_validate(response.json())
        except (ValidationError, ValueError) as e:
            logger.error(f"Invalid category payload for {category_id}: {e}")
            raise CatalogFetchError("Invalid category data received") from e

        logger.info(
            f"Fetched category '{result.category.name}' with {len(result.products)} products"
        )
        return result

    @staticmethod
    def _error_message(response: httpx.Response, default: str) -> str:
        """Use the API's ``error`` field when the body carries one."""
        try:
            body = response.json()
        except ValueError:
            return default
        if isinstance(body, dict) and isinstance(body.get("error"), str):
            return body["error"]
        return default
