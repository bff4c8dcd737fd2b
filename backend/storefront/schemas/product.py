import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from storefront.schemas.image import ImagePublic


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    stock: int = Field(..., gt=0)
    category: str | None = Field(None, max_length=100)
    image: HttpUrl | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Product 1",
                "description": "Product 1 Description",
                "price": 10.00,
                "stock": 10,
                "category": "Category 1",
                "image": "http://example.com/product-1.png",
            }
        }
    )


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    price: Decimal | None = Field(None, gt=0, max_digits=10, decimal_places=2)
    stock: int | None = Field(None, gt=0)
    category: str | None = Field(None, max_length=100)
    image: HttpUrl | None = None


class ProductQuery(BaseModel):
    limit: int = Field(10, ge=0)
    offset: int = Field(0, ge=0)
    category: str | None = None


class ProductPublic(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    price: Decimal
    stock: int
    category: str | None = None
    image: str | None = None
    images: list[ImagePublic] = []

    model_config = ConfigDict(from_attributes=True)


class ProductLikes(BaseModel):
    product_id: uuid.UUID
    likes: int
