"""Browsing session for a single category page."""

import logging
from enum import Enum

from .client import CatalogClient, CatalogFetchError
from .facets import Facets, extract_facets
from .filters import FilterState, SortBy, SortOrder, derive_products, parse_sort_option
from .models import Category, CategoryPage, Product, SubCategory

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    """Lifecycle of the category fetch."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class BrowsingSession:
    """State of one shopper browsing one category.

    Holds the fetched page, the facets computed from it and the current
    filter state. The visible product list is recomputed from the raw list
    on every access.
    """

    def __init__(self, category_id: str, filters: FilterState | None = None):
        self.category_id = category_id
        self.filters = filters or FilterState()
        self.status = LoadStatus.LOADING
        self.error: str | None = None
        self.facets = Facets()
        self._page: CategoryPage | None = None

    async def load(self, client: CatalogClient, page: int = 1, limit: int = 20) -> bool:
        """Fetch the category and extract facets.

        Args:
            client: Started CatalogClient
            page: Product page to request
            limit: Products per page

        Returns:
            True if the category loaded
        """
        self.status = LoadStatus.LOADING
        self.error = None
        logger.info(f"Loading category {self.category_id}")

        try:
            result = await client.fetch_category(self.category_id, page=page, limit=limit)
        except CatalogFetchError as e:
            self.status = LoadStatus.ERROR
            self.error = str(e) or "An error occurred"
            logger.error(f"Failed to load category {self.category_id}: {self.error}")
            return False

        self.set_page(result)
        return True

    def set_page(self, page: CategoryPage) -> None:
        """Install fetched data and compute facets from the raw products."""
        self._page = page
        self.facets = extract_facets(page.products)
        self.status = LoadStatus.READY
        self.error = None

    # =========================================================================
    # Fetched data
    # =========================================================================

    @property
    def page(self) -> CategoryPage:
        if self._page is None:
            raise RuntimeError("Category not loaded. Call load() first.")
        return self._page

    @property
    def category(self) -> Category:
        return self.page.category

    @property
    def products(self) -> list[Product]:
        return self.page.products

    @property
    def is_ready(self) -> bool:
        return self.status == LoadStatus.READY

    # =========================================================================
    # Filter mutators
    # =========================================================================

    def set_min_price(self, value) -> None:
        self.filters = self.filters.with_min_price(value)

    def set_max_price(self, value) -> None:
        self.filters = self.filters.with_max_price(value)

    def set_price_range(self, min_price, max_price) -> None:
        self.filters = self.filters.with_price_range(min_price, max_price)

    def toggle_color(self, color: str) -> None:
        self.filters = self.filters.toggle_color(color)

    def toggle_size(self, size: str) -> None:
        self.filters = self.filters.toggle_size(size)

    def toggle_tag(self, tag: str) -> None:
        self.filters = self.filters.toggle_tag(tag)

    def set_sort(self, sort_by: SortBy | str, sort_order: SortOrder | str) -> None:
        self.filters = self.filters.with_sort(sort_by, sort_order)

    def apply_sort_option(self, value: str) -> None:
        """Apply a sort option value such as ``price_desc``."""
        self.set_sort(*parse_sort_option(value))

    def select_subcategory(self, subcategory_id: str | None) -> None:
        self.filters = self.filters.with_subcategory(subcategory_id)

    def toggle_subcategory(self, subcategory_id: str) -> None:
        self.filters = self.filters.toggle_subcategory(subcategory_id)

    def clear_filters(self) -> None:
        self.filters = self.filters.reset()

    # =========================================================================
    # Derived view
    # =========================================================================

    @property
    def visible_products(self) -> list[Product]:
        return derive_products(self.products, self.filters)

    @property
    def is_empty(self) -> bool:
        """True when the category loaded but no product passes the filters."""
        return self.is_ready and not self.visible_products

    @property
    def selected_subcategory(self) -> SubCategory | None:
        return self.category.find_child(self.filters.subcategory_id)

    @property
    def breadcrumb(self) -> list[str]:
        trail = ["Shopping"]
        if self.category.parent:
            trail.append(self.category.parent.name)
        trail.append(self.category.name)
        return trail

    @property
    def heading(self) -> str:
        heading = f"Products ({len(self.visible_products)})"
        selected = self.selected_subcategory
        if selected:
            heading += f" in {selected.name}"
        return heading
