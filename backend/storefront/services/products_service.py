import logging
import uuid
from decimal import Decimal

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.errors import ErrorType
from storefront.exceptions import AppException
from storefront.models import Image, Product, user_liked_products
from storefront.schemas.product import ProductCreate, ProductLikes, ProductUpdate
from storefront.services.image_service import ImageService
from storefront.services.users_service import UsersService

logger = logging.getLogger(__name__)

# Columns that may be cleared with an explicit null in an update
NULLABLE_FIELDS = {"category", "image"}

# Prices are stored and returned with two decimal places
PRICE_QUANTUM = Decimal("0.01")


class ProductsService:
    def __init__(
        self,
        session: AsyncSession,
        users_service: UsersService,
        image_service: ImageService,
    ):
        self.session = session
        self.users_service = users_service
        self.image_service = image_service

    def _not_found(self, product_id: uuid.UUID) -> AppException:
        return AppException(ErrorType.NOT_FOUND, f"Product with id {product_id} not found")

    async def list(
        self,
        limit: int = 10,
        offset: int = 0,
        category: str | None = None,
    ) -> list[Product]:
        """Return a page of products in insertion order, images attached.

        Args:
            limit: Page size (no upper bound)
            offset: Number of products to skip
            category: Exact category to filter on; empty means all
        """
        query = select(Product).options(selectinload(Product.images))
        if category:
            query = query.where(Product.category == category)
        query = (
            query.order_by(Product.created_at, Product.id)
            .limit(limit)
            .offset(offset)
            .execution_options(populate_existing=True)
        )

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, product_id: uuid.UUID, with_likers: bool = False) -> Product:
        options = [selectinload(Product.images)]
        if with_likers:
            options.append(selectinload(Product.likers))

        result = await self.session.execute(
            select(Product)
            .options(*options)
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        product = result.scalar_one_or_none()
        if product is None:
            raise self._not_found(product_id)
        return product

    async def create(self, product_create: ProductCreate) -> Product:
        data = product_create.model_dump()
        data["price"] = data["price"].quantize(PRICE_QUANTUM)
        if data["image"] is not None:
            data["image"] = str(data["image"])

        product = Product(**data, images=[])
        self.session.add(product)
        await self.session.commit()

        logger.info(f"Created product {product.id} ({product.name})")
        return product

    async def update(self, product_id: uuid.UUID, product_update: ProductUpdate) -> Product:
        """Apply only the fields sent by the client; the rest keep their values."""
        product = await self.get_by_id(product_id)

        for key, value in product_update.model_dump(exclude_unset=True).items():
            if value is None and key not in NULLABLE_FIELDS:
                continue
            if key == "price" and value is not None:
                value = value.quantize(PRICE_QUANTUM)
            if key == "image" and value is not None:
                value = str(value)
            setattr(product, key, value)

        await self.session.commit()
        return product

    async def delete(self, product_id: uuid.UUID) -> None:
        """Delete a product; its images and like rows go with it via ON DELETE CASCADE."""
        result = await self.session.execute(
            delete(Product)
            .where(Product.id == product_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.commit()

        if result.rowcount == 0:
            raise self._not_found(product_id)
        logger.info(f"Deleted product {product_id}")

    async def like(self, product_id: uuid.UUID, user_id: uuid.UUID) -> Product:
        """Add the user to the product's likers. Liking again is a no-op."""
        product = await self.get_by_id(product_id, with_likers=True)
        user = await self.users_service.find_by_id(user_id)

        if any(liker.id == user.id for liker in product.likers):
            return product

        product.likers.append(user)
        try:
            await self.session.commit()
        except IntegrityError:
            # A concurrent request stored the same like first
            await self.session.rollback()
            logger.info(f"User {user_id} already likes product {product_id}")
            return await self.get_by_id(product_id, with_likers=True)
        return product

    async def count_likes(self, product_id: uuid.UUID) -> ProductLikes:
        await self.get_by_id(product_id)
        likes = await self.session.scalar(
            select(func.count())
            .select_from(user_liked_products)
            .where(user_liked_products.c.product_id == product_id)
        )
        return ProductLikes(product_id=product_id, likes=likes or 0)

    async def upload_image(
        self,
        data: bytes,
        product_id: uuid.UUID,
        filename: str | None = None,
    ) -> Image:
        product = await self.get_by_id(product_id)
        url = await self.image_service.upload(data, filename)
        image = await self.image_service.create(url, product)
        logger.info(f"Stored image {image.id} for product {product_id}")
        return image
