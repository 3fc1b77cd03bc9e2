"""Shared fixtures for catalog browser tests."""

import httpx
import pytest

from catalog_browser.models import Product


def make_product(product_id: str, **overrides) -> Product:
    """Build a Product from API-shaped data."""
    data = {
        "id": product_id,
        "name": f"Product {product_id}",
        "price": 100,
        "currency": "USD",
        "images": [],
        "sizes": [],
        "colors": [],
        "tags": [],
        "viewCount": 0,
        "soldCount": 0,
        "createdAt": "2024-01-01T00:00:00Z",
        "categoryId": "cat-dresses",
        "professional": {"firstName": "Ada", "lastName": "Obi"},
        "_count": {"wishlistItems": 0, "cartItems": 0, "orderItems": 0, "reviews": 0},
    }
    data.update(overrides)
    return Product.model_validate(data)


@pytest.fixture
def category_payload() -> dict:
    """Category endpoint response with three products."""
    return {
        "category": {
            "id": "cat-women",
            "name": "Women",
            "slug": "women",
            "parent": {"id": "cat-root", "name": "Clothing", "slug": "clothing"},
            "children": [
                {"id": "cat-dresses", "name": "Dresses", "slug": "dresses", "_count": {"products": 2}},
                {"id": "cat-tops", "name": "Tops", "slug": "tops", "_count": {"products": 1}},
            ],
            "collections": [{"id": "col-1", "name": "Summer", "slug": "summer"}],
            "_count": {"products": 3},
        },
        "products": [
            {
                "id": "p1",
                "name": "Ankara Wrap Dress",
                "price": 50,
                "currency": "NGN",
                "images": ["https://cdn.example.com/p1.jpg"],
                "sizes": ["S", "M"],
                "colors": ["RED", "black"],
                "tags": ["NEW"],
                "viewCount": 10,
                "soldCount": 2,
                "createdAt": "2024-03-01T10:00:00Z",
                "categoryId": "cat-dresses",
                "category": {"name": "Dresses", "slug": "dresses"},
                "professional": {
                    "firstName": "Ada",
                    "lastName": "Obi",
                    "professionalProfile": {"businessName": "Ada Designs", "rating": 4.8},
                },
                "_count": {"wishlistItems": 3, "cartItems": 1, "orderItems": 0, "reviews": 2},
            },
            {
                "id": "p2",
                "name": "Linen Blouse",
                "price": 150,
                "currency": "NGN",
                "images": [],
                "sizes": ["L"],
                "colors": ["BLUE"],
                "tags": None,
                "viewCount": 40,
                "soldCount": 5,
                "createdAt": "2024-02-01T10:00:00Z",
                "categoryId": "cat-tops",
                "category": {"name": "Tops", "slug": "tops"},
                "professional": {"firstName": "Tunde", "lastName": "Bello"},
                "_count": {"wishlistItems": 0, "cartItems": 0, "orderItems": 1, "reviews": 0},
            },
            {
                "id": "p3",
                "name": "Evening Gown",
                "price": 300,
                "currency": "NGN",
                "images": [],
                "sizes": ["M", "L"],
                "colors": ["black"],
                "tags": ["LIMITED"],
                "viewCount": 25,
                "soldCount": 0,
                "createdAt": "2024-04-01T10:00:00Z",
                "categoryId": "cat-dresses",
                "category": {"name": "Dresses", "slug": "dresses"},
                "professional": {"firstName": "Ada", "lastName": "Obi"},
                "_count": {"wishlistItems": 1, "cartItems": 0, "orderItems": 0, "reviews": 0},
            },
        ],
        "pagination": {"page": 1, "limit": 20, "total": 3, "pages": 1},
    }


@pytest.fixture
def mock_transport(category_payload):
    """Transport answering the category endpoint and recording requests."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path == "/api/categories/cat-women":
            return httpx.Response(200, json=category_payload)
        return httpx.Response(404, json={"error": "Category not found"})

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    return transport
