import logging

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.clients.base import BaseImageHostClient
from storefront.errors import ErrorType
from storefront.exceptions import AppException
from storefront.models import Image, Product

logger = logging.getLogger(__name__)


class ImageService:
    def __init__(self, session: AsyncSession, image_host: BaseImageHostClient):
        self.session = session
        self.image_host = image_host

    async def upload(self, data: bytes, filename: str | None = None) -> str:
        """Send the file to the image host and return its hosted URL.

        Raises:
            AppException: UPLOAD_FAILED on any host or transport error
        """
        try:
            return await self.image_host.upload(data, filename)
        except AppException:
            raise
        except Exception as e:
            logger.error(f"Image upload failed: {e!r}")
            raise AppException(ErrorType.UPLOAD_FAILED, f"Failed to upload image: {e}")

    async def create(self, url: str, product: Product) -> Image:
        image = Image(url=url, product=product)
        self.session.add(image)
        await self.session.commit()
        return image
