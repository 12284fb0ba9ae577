"""Pydantic request/response schemas for the product and upload APIs."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Wireless Mouse",
                    "price": 19.99,
                    "brand": "Logi",
                    "category": "Accessories",
                    "short_description": "Compact 2.4GHz mouse",
                    "detailed_description": "Ergonomic wireless mouse with 12-month battery life.",
                    "images": ["3f2a..._mouse.webp"],
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    brand: str | None = Field(None, max_length=100)
    category: str | None = Field(None, max_length=100)
    short_description: str | None = Field(None, max_length=500)
    detailed_description: str | None = None
    views: int = Field(0, ge=0)
    sold_quantity: int = Field(0, ge=0)
    images: list[str] = Field(default_factory=list)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    price: float | None = Field(None, ge=0)
    brand: str | None = Field(None, max_length=100)
    category: str | None = Field(None, max_length=100)
    short_description: str | None = Field(None, max_length=500)
    detailed_description: str | None = None
    views: int | None = Field(None, ge=0)
    sold_quantity: int | None = Field(None, ge=0)
    images: list[str] | None = None


# --- Response Schemas ---


class ProductResponse(BaseModel):
    id: str
    name: str
    price: float
    brand: str | None = None
    category: str | None = None
    views: int = 0
    sold_quantity: int = 0
    short_description: str | None = None
    detailed_description: str | None = None
    images: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            price=product.price,
            brand=product.brand,
            category=product.category,
            views=product.views or 0,
            sold_quantity=product.sold_quantity or 0,
            short_description=product.short_description,
            detailed_description=product.detailed_description,
            images=product.image_urls,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class UploadResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"uploaded": ["0b6f...-4c1e_mouse.webp"]}]}}

    uploaded: list[str]
