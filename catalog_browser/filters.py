"""Filter state and the derived product view for a category page."""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from .models import Product

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SortBy(str, Enum):
    """Product attribute used for ordering."""

    CREATED_AT = "createdAt"
    PRICE = "price"
    VIEW_COUNT = "viewCount"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class SortOption(BaseModel):
    """A sort choice offered to shoppers."""

    model_config = ConfigDict(frozen=True)

    sort_by: SortBy
    sort_order: SortOrder
    label: str

    @property
    def value(self) -> str:
        return f"{self.sort_by.value}_{self.sort_order.value}"


SORT_OPTIONS: tuple[SortOption, ...] = (
    SortOption(sort_by=SortBy.CREATED_AT, sort_order=SortOrder.DESC, label="Newest First"),
    SortOption(sort_by=SortBy.CREATED_AT, sort_order=SortOrder.ASC, label="Oldest First"),
    SortOption(sort_by=SortBy.PRICE, sort_order=SortOrder.ASC, label="Price: Low to High"),
    SortOption(sort_by=SortBy.PRICE, sort_order=SortOrder.DESC, label="Price: High to Low"),
    SortOption(sort_by=SortBy.VIEW_COUNT, sort_order=SortOrder.DESC, label="Most Popular"),
)


def parse_sort_option(value: str) -> tuple[SortBy, SortOrder]:
    """Split a ``<sortBy>_<sortOrder>`` value into its enums.

    Args:
        value: Option value such as ``price_asc``

    Returns:
        Tuple of (SortBy, SortOrder)

    Raises:
        ValueError: If the value is not one of SORT_OPTIONS
    """
    for option in SORT_OPTIONS:
        if option.value == value:
            return option.sort_by, option.sort_order
    choices = ", ".join(option.value for option in SORT_OPTIONS)
    raise ValueError(f"Unknown sort option '{value}' (choose from: {choices})")


def parse_price(value: str | int | float | Decimal | None) -> Decimal | None:
    """Convert user price input to a Decimal.

    Blank, malformed and non-finite input returns None, which leaves the
    price bound inactive.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        logger.debug(f"Ignoring malformed price input: {value!r}")
        return None
    if not price.is_finite():
        logger.debug(f"Ignoring non-finite price input: {value!r}")
        return None
    return price


def _toggle(values: frozenset[str], value: str) -> frozenset[str]:
    if value in values:
        return values - {value}
    return values | {value}


class FilterState(BaseModel):
    """Shopper's current filter and sort selection.

    Instances are immutable; every mutator returns a new state.
    """

    model_config = ConfigDict(frozen=True)

    min_price: Decimal | None = Field(default=None, description="Inclusive lower price bound")
    max_price: Decimal | None = Field(default=None, description="Inclusive upper price bound")
    colors: frozenset[str] = Field(default_factory=frozenset)
    sizes: frozenset[str] = Field(default_factory=frozenset)
    tags: frozenset[str] = Field(default_factory=frozenset)
    sort_by: SortBy = Field(default=SortBy.CREATED_AT)
    sort_order: SortOrder = Field(default=SortOrder.DESC)
    subcategory_id: str | None = Field(default=None, description="Selected child category")

    @field_serializer("colors", "sizes", "tags")
    def _sorted_values(self, values: frozenset[str]) -> list[str]:
        return sorted(values)

    def with_min_price(self, value) -> "FilterState":
        return self.model_copy(update={"min_price": parse_price(value)})

    def with_max_price(self, value) -> "FilterState":
        return self.model_copy(update={"max_price": parse_price(value)})

    def with_price_range(self, min_price, max_price) -> "FilterState":
        return self.model_copy(
            update={"min_price": parse_price(min_price), "max_price": parse_price(max_price)}
        )

    def toggle_color(self, color: str) -> "FilterState":
        return self.model_copy(update={"colors": _toggle(self.colors, color)})

    def toggle_size(self, size: str) -> "FilterState":
        return self.model_copy(update={"sizes": _toggle(self.sizes, size)})

    def toggle_tag(self, tag: str) -> "FilterState":
        return self.model_copy(update={"tags": _toggle(self.tags, tag)})

    def with_sort(self, sort_by: SortBy | str, sort_order: SortOrder | str) -> "FilterState":
        """Set the sort key and direction together."""
        return self.model_copy(
            update={"sort_by": SortBy(sort_by), "sort_order": SortOrder(sort_order)}
        )

    def with_subcategory(self, subcategory_id: str | None) -> "FilterState":
        return self.model_copy(update={"subcategory_id": subcategory_id})

    def toggle_subcategory(self, subcategory_id: str) -> "FilterState":
        """Select a child category, or clear it when it is already selected."""
        if self.subcategory_id == subcategory_id:
            return self.with_subcategory(None)
        return self.with_subcategory(subcategory_id)

    def reset(self) -> "FilterState":
        return FilterState()

    @property
    def is_default(self) -> bool:
        return self == FilterState()

    @property
    def active_filter_count(self) -> int:
        """Number of active filter selections, sort excluded."""
        count = len(self.colors) + len(self.sizes) + len(self.tags)
        count += sum(
            1 for bound in (self.min_price, self.max_price, self.subcategory_id)
            if bound is not None
        )
        return count


def matches(product: Product, state: FilterState) -> bool:
    """Check a product against every active filter.

    Dimensions combine with AND; values within a dimension with OR.
    """
    if state.subcategory_id is not None and product.category_id != state.subcategory_id:
        return False
    if state.min_price is not None and product.price < state.min_price:
        return False
    if state.max_price is not None and product.price > state.max_price:
        return False
    if state.colors and state.colors.isdisjoint(product.colors):
        return False
    if state.sizes and state.sizes.isdisjoint(product.sizes):
        return False
    if state.tags and state.tags.isdisjoint(product.tags):
        return False
    return True


def _sort_key(sort_by: SortBy):
    if sort_by == SortBy.PRICE:
        return lambda product: product.price
    if sort_by == SortBy.VIEW_COUNT:
        return lambda product: product.view_count
    return lambda product: _timestamp(product.created_at)


def _timestamp(value: datetime | None) -> float:
    if value is None:
        return EPOCH.timestamp()
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def sort_products(
    products: Iterable[Product],
    sort_by: SortBy = SortBy.CREATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
) -> list[Product]:
    """Return products ordered by the given key.

    The sort is stable in both directions: products with equal keys keep
    their incoming order.
    """
    return sorted(
        products,
        key=_sort_key(SortBy(sort_by)),
        reverse=SortOrder(sort_order) == SortOrder.DESC,
    )


def derive_products(products: Iterable[Product], state: FilterState) -> list[Product]:
    """Compute the visible product list for a filter state.

    Args:
        products: Raw product list (left untouched)
        state: Current filter state

    Returns:
        New list of matching products in display order
    """
    products = list(products)
    visible = [product for product in products if matches(product, state)]
    logger.debug(f"Filters kept {len(visible)}/{len(products)} products")
    return sort_products(visible, state.sort_by, state.sort_order)
