"""Command line entry point for browsing a marketplace category."""

import argparse
import asyncio
import json
import logging
import sys

from .client import CatalogClient
from .config import ClientConfig
from .filters import SORT_OPTIONS, FilterState, parse_sort_option
from .session import BrowsingSession

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "catalog_browser.yaml"


def positive_int(value: str) -> int:
    """argparse type for page and limit values."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {number}")
    return number


def build_filters(args: argparse.Namespace) -> FilterState:
    """Build the initial filter state from CLI options."""
    state = FilterState().with_price_range(args.min_price, args.max_price)
    state = state.model_copy(update={
        "colors": frozenset(args.color),
        "sizes": frozenset(args.size),
        "tags": frozenset(args.tag),
    })
    state = state.with_sort(*parse_sort_option(args.sort))
    if args.subcategory:
        state = state.with_subcategory(args.subcategory)
    return state


async def run_browse(
    category_id: str,
    config: ClientConfig,
    filters: FilterState | None = None,
    page: int = 1,
    limit: int | None = None,
) -> BrowsingSession:
    """Load a category and apply filters.

    Args:
        category_id: Category identifier
        config: Client configuration
        filters: Initial filter state
        page: Product page to request
        limit: Products per page (defaults to config.page_size)

    Returns:
        BrowsingSession in ready or error state
    """
    if limit is None:
        limit = config.page_size
    session = BrowsingSession(category_id, filters=filters)
    async with CatalogClient.from_config(config) as client:
        await session.load(client, page=page, limit=limit)
    return session


def print_session(session: BrowsingSession) -> None:
    """Print breadcrumb, heading and product lines."""
    print(" / ".join(session.breadcrumb))
    if session.category.children:
        chips = []
        for child in session.category.children:
            marker = "*" if child.id == session.filters.subcategory_id else " "
            chips.append(f"[{marker}] {child.name} ({child.product_count})")
        print("  ".join(chips))
    print(session.heading)
    print("-" * 50)

    if session.is_empty:
        print("No products found")
        print("Try adjusting your filters or browse other categories.")
        return

    for product in session.visible_products:
        badge = " [NEW]" if product.is_new else ""
        print(
            f"{product.display_price:>14}  {product.name}{badge}"
            f"  - {product.professional.display_name}"
            f" ({product.view_count} views, {product.likes} likes)"
        )


def print_facets(session: BrowsingSession) -> None:
    facets = session.facets
    print(f"Colors: {', '.join(facets.colors) or '-'}")
    print(f"Sizes:  {', '.join(facets.sizes) or '-'}")
    print(f"Tags:   {', '.join(facets.tags) or '-'}")


def session_to_json(session: BrowsingSession) -> str:
    """Serialize the derived view, facets and filter state."""
    data = {
        "category": session.category.model_dump(mode="json", by_alias=True),
        "filters": session.filters.model_dump(mode="json"),
        "facets": session.facets.model_dump(mode="json"),
        "products": [
            product.model_dump(mode="json", by_alias=True)
            for product in session.visible_products
        ],
    }
    if session.page.pagination:
        data["pagination"] = session.page.pagination.model_dump(mode="json")
    return json.dumps(data, indent=2, ensure_ascii=False)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Catalog Browser - Filter and sort products of a marketplace category"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Browse command
    browse_parser = subparsers.add_parser("browse", help="List products of a category")
    browse_parser.add_argument("category_id", help="Category identifier")
    browse_parser.add_argument("--min-price", default=None, help="Minimum price (inclusive)")
    browse_parser.add_argument("--max-price", default=None, help="Maximum price (inclusive)")
    browse_parser.add_argument(
        "--color", action="append", default=[], help="Color to include (repeatable)"
    )
    browse_parser.add_argument(
        "--size", action="append", default=[], help="Size to include (repeatable)"
    )
    browse_parser.add_argument(
        "--tag", action="append", default=[], help="Tag to include (repeatable)"
    )
    browse_parser.add_argument(
        "--sort",
        default="createdAt_desc",
        choices=[option.value for option in SORT_OPTIONS],
        help="Sort order (default: createdAt_desc)"
    )
    browse_parser.add_argument("--subcategory", default=None, help="Child category identifier")
    browse_parser.add_argument("--json", action="store_true", help="Print JSON output")

    # Facets command
    facets_parser = subparsers.add_parser("facets", help="Show available filter values")
    facets_parser.add_argument("category_id", help="Category identifier")

    for sub in (browse_parser, facets_parser):
        sub.add_argument(
            "-c", "--config",
            default=DEFAULT_CONFIG,
            help=f"Config file path (default: {DEFAULT_CONFIG})"
        )
        sub.add_argument("--page", type=positive_int, default=1, help="Product page (default: 1)")
        sub.add_argument("--limit", type=positive_int, default=None, help="Products per page")
        sub.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    # Config command
    config_parser = subparsers.add_parser("config", help="Write a default config file")
    config_parser.add_argument(
        "--write",
        default=DEFAULT_CONFIG,
        help=f"Destination path (default: {DEFAULT_CONFIG})"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "config":
        ClientConfig().save(args.write)
        print(f"Config written: {args.write}")
        return 0

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif getattr(args, "json", False):
        # Keep stdout parseable
        logging.getLogger().setLevel(logging.WARNING)

    config = ClientConfig.load(args.config)
    filters = build_filters(args) if args.command == "browse" else None

    try:
        session = asyncio.run(run_browse(
            args.category_id,
            config,
            filters=filters,
            page=args.page,
            limit=args.limit,
        ))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1

    if not session.is_ready:
        print("Error Loading Category")
        print(session.error or "Category not found")
        return 1

    if args.command == "facets":
        print_facets(session)
    elif args.json:
        print(session_to_json(session))
    else:
        print_session(session)
    return 0


if __name__ == "__main__":
    sys.exit(main())
