"""View models for the marketplace category API."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PLACEHOLDER_PRODUCT_IMAGE = "/placeholder-product.jpg"
PLACEHOLDER_AVATAR = "/placeholder-avatar.jpg"
PLACEHOLDER_CATEGORY_IMAGE = "/placeholder-category.jpg"
DEFAULT_RATING = 4.5


class ApiModel(BaseModel):
    """Base for models read from the camelCase JSON API."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )


class CategoryRef(ApiModel):
    """Short category reference embedded in other payloads."""

    id: str | None = Field(default=None, description="Category identifier")
    name: str = Field(description="Category name")
    slug: str = Field(default="", description="URL slug")


class CollectionRef(ApiModel):
    """Collection a product or category belongs to."""

    id: str | None = Field(default=None)
    name: str
    slug: str = Field(default="")


class ProfessionalProfile(ApiModel):
    """Public business profile of a seller."""

    business_name: str | None = Field(default=None, alias="businessName")
    business_image: str | None = Field(default=None, alias="businessImage")
    rating: float | None = Field(default=None)
    total_reviews: int | None = Field(default=None, alias="totalReviews")


class Seller(ApiModel):
    """Professional selling a product."""

    id: str | None = Field(default=None)
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    professional_profile: ProfessionalProfile | None = Field(
        default=None, alias="professionalProfile"
    )

    @property
    def display_name(self) -> str:
        """Business name, or the seller's full name when there is none."""
        profile = self.professional_profile
        if profile and profile.business_name:
            return profile.business_name
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def display_rating(self) -> str:
        profile = self.professional_profile
        rating = DEFAULT_RATING
        if profile and profile.rating is not None:
            rating = profile.rating
        return f"{rating:.1f}"

    @property
    def avatar(self) -> str:
        profile = self.professional_profile
        if profile and profile.business_image:
            return profile.business_image
        return PLACEHOLDER_AVATAR


class ProductCounts(ApiModel):
    """Engagement counters attached to a product (``_count``)."""

    wishlist_items: int = Field(default=0, alias="wishlistItems")
    cart_items: int = Field(default=0, alias="cartItems")
    order_items: int = Field(default=0, alias="orderItems")
    reviews: int = Field(default=0)


class Product(ApiModel):
    """A product as listed on a category page."""

    id: str = Field(description="Product identifier")
    name: str = Field(description="Product name")
    description: str | None = Field(default=None)
    price: Decimal = Field(description="Unit price")
    currency: str = Field(default="USD", description="ISO currency code")
    images: list[str] = Field(default_factory=list, description="Image URLs in display order")
    video_url: str | None = Field(default=None, alias="videoUrl")
    sizes: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    material: str | None = Field(default=None)
    care_instructions: str | None = Field(default=None, alias="careInstructions")
    estimated_delivery: int | None = Field(default=None, alias="estimatedDelivery")
    is_customizable: bool = Field(default=False, alias="isCustomizable")
    view_count: int = Field(default=0, alias="viewCount")
    sold_count: int = Field(default=0, alias="soldCount")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    category_id: str = Field(alias="categoryId")
    category: CategoryRef | None = Field(default=None)
    collection: CollectionRef | None = Field(default=None)
    professional: Seller = Field(default_factory=Seller)
    counts: ProductCounts = Field(default_factory=ProductCounts, alias="_count")

    @field_validator("images", "sizes", "colors", "tags", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @property
    def display_price(self) -> str:
        return f"{self.currency} {self.price:.2f}"

    @property
    def is_new(self) -> bool:
        return "NEW" in self.tags

    @property
    def primary_image(self) -> str:
        return self.images[0] if self.images else PLACEHOLDER_PRODUCT_IMAGE

    @property
    def likes(self) -> int:
        return self.counts.wishlist_items


class SubCategory(ApiModel):
    """Child category shown as a filter chip."""

    id: str
    name: str
    slug: str = Field(default="")
    image_url: str | None = Field(default=None, alias="imageUrl")
    product_count: int = Field(default=0, alias="_count")

    @field_validator("product_count", mode="before")
    @classmethod
    def _unwrap_count(cls, value):
        if isinstance(value, dict):
            return value.get("products", 0)
        return value

    @property
    def image(self) -> str:
        return self.image_url or PLACEHOLDER_CATEGORY_IMAGE


class Category(ApiModel):
    """Category detail with its children and collections."""

    id: str
    name: str
    slug: str = Field(default="")
    image_url: str | None = Field(default=None, alias="imageUrl")
    parent: CategoryRef | None = Field(default=None)
    children: list[SubCategory] = Field(default_factory=list)
    collections: list[CollectionRef] = Field(default_factory=list)
    product_count: int = Field(default=0, alias="_count")

    @field_validator("product_count", mode="before")
    @classmethod
    def _unwrap_count(cls, value):
        if isinstance(value, dict):
            return value.get("products", 0)
        return value

    def find_child(self, child_id: str | None) -> SubCategory | None:
        """Return the child category with the given id, if any."""
        if child_id is None:
            return None
        return next((child for child in self.children if child.id == child_id), None)


class Pagination(ApiModel):
    """Paging information returned alongside products."""

    page: int = Field(default=1)
    limit: int = Field(default=20)
    total: int = Field(default=0)
    pages: int = Field(default=0)


class CategoryPage(ApiModel):
    """Response of the category detail endpoint."""

    category: Category
    products: list[Product] = Field(default_factory=list)
    pagination: Pagination | None = Field(default=None)

    @field_validator("products", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value
