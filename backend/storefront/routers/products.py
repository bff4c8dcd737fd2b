import uuid
from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, File, Query, UploadFile

from storefront.dependencies import T_AdminUser, T_CurrentUser, T_ProductsService
from storefront.errors import ErrorType
from storefront.exceptions import AppException
from storefront.schemas.common import MessageResponse
from storefront.schemas.image import ImagePublic
from storefront.schemas.product import (
    ProductCreate,
    ProductLikes,
    ProductPublic,
    ProductQuery,
    ProductUpdate,
)

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductPublic])
async def get_products(
    query: Annotated[ProductQuery, Query()],
    products_service: T_ProductsService,
):
    return await products_service.list(
        limit=query.limit, offset=query.offset, category=query.category
    )


@router.get("/{product_id}", response_model=ProductPublic)
async def get_product(product_id: uuid.UUID, products_service: T_ProductsService):
    return await products_service.get_by_id(product_id)


@router.get("/{product_id}/likes", response_model=ProductLikes)
async def get_product_likes(product_id: uuid.UUID, products_service: T_ProductsService):
    return await products_service.count_likes(product_id)


@router.post("", status_code=HTTPStatus.CREATED, response_model=ProductPublic)
async def create_product(
    product: ProductCreate,
    products_service: T_ProductsService,
    _admin: T_AdminUser,
):
    return await products_service.create(product)


@router.patch("/{product_id}", response_model=ProductPublic)
async def update_product(
    product_id: uuid.UUID,
    product: ProductUpdate,
    products_service: T_ProductsService,
    _admin: T_AdminUser,
):
    return await products_service.update(product_id, product)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: uuid.UUID,
    products_service: T_ProductsService,
    _admin: T_AdminUser,
):
    await products_service.delete(product_id)
    return MessageResponse(message="Product deleted successfully")


@router.post(
    "/{product_id}/img",
    status_code=HTTPStatus.CREATED,
    response_model=ImagePublic,
    tags=["images"],
)
async def upload_product_image(
    product_id: uuid.UUID,
    products_service: T_ProductsService,
    _admin: T_AdminUser,
    image: UploadFile = File(...),
):
    """Upload an image (multipart field `image`) and attach it to the product."""
    data = await image.read()
    if not data:
        raise AppException(ErrorType.VALIDATION, "Uploaded image is empty")
    return await products_service.upload_image(data, product_id, image.filename)


@router.post("/{product_id}/like", response_model=ProductPublic)
async def like_product(
    product_id: uuid.UUID,
    current_user: T_CurrentUser,
    products_service: T_ProductsService,
):
    return await products_service.like(product_id, current_user.id)
