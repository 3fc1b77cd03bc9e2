"""Facet extraction for the filter sidebar."""

import logging
from collections.abc import Callable, Iterable

from pydantic import BaseModel, ConfigDict, Field

from .models import Product

logger = logging.getLogger(__name__)


class Facets(BaseModel):
    """Distinct filter values available in a product list."""

    model_config = ConfigDict(frozen=True)

    colors: tuple[str, ...] = Field(default=(), description="Available colors, sorted")
    sizes: tuple[str, ...] = Field(default=(), description="Available sizes, sorted")
    tags: tuple[str, ...] = Field(default=(), description="Available tags, sorted")

    @property
    def is_empty(self) -> bool:
        return not (self.colors or self.sizes or self.tags)


def extract_facets(
    products: Iterable[Product],
    key: Callable[[str], object] | None = None,
) -> Facets:
    """Collect the colors, sizes and tags present across products.

    Facets describe the whole fetched list, so callers pass the raw
    products rather than a filtered view.

    Args:
        products: Raw product list
        key: Optional sort key; default is case-sensitive code point order

    Returns:
        Facets with each dimension sorted
    """
    colors: set[str] = set()
    sizes: set[str] = set()
    tags: set[str] = set()

    for product in products:
        colors.update(product.colors)
        sizes.update(product.sizes)
        tags.update(product.tags)

    facets = Facets(
        colors=tuple(sorted(colors, key=key)),
        sizes=tuple(sorted(sizes, key=key)),
        tags=tuple(sorted(tags, key=key)),
    )
    logger.debug(
        f"Facets: {len(facets.colors)} colors, {len(facets.sizes)} sizes, {len(facets.tags)} tags"
    )
    return facets
