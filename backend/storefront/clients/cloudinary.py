"""Cloudinary client - signed uploads over the REST API."""
import hashlib
import logging
import time

import httpx

from storefront.clients.base import BaseImageHostClient
from storefront.config import Config
from storefront.errors import ErrorType
from storefront.exceptions import AppException

logger = logging.getLogger(__name__)

CLOUDINARY_API_URL = "https://api.cloudinary.com/v1_1"


def sign_params(params: dict, api_secret: str) -> str:
    """Cloudinary signature: SHA-1 of the sorted params followed by the secret."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


class CloudinaryClient(BaseImageHostClient):
    """Image host backed by Cloudinary."""

    def __init__(
        self,
        cloud_name: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        folder: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cloud_name = cloud_name or Config.CLOUDINARY_CLOUD_NAME
        self.api_key = api_key or Config.CLOUDINARY_API_KEY
        self.api_secret = api_secret or Config.CLOUDINARY_API_SECRET
        self.folder = folder if folder is not None else Config.CLOUDINARY_FOLDER
        self.transport = transport

    @property
    def upload_url(self) -> str:
        return f"{CLOUDINARY_API_URL}/{self.cloud_name}/image/upload"

    async def upload(self, data: bytes, filename: str | None = None) -> str:
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise AppException(ErrorType.UPLOAD_FAILED, "Cloudinary credentials not configured")

        params = {"timestamp": int(time.time())}
        if self.folder:
            params["folder"] = self.folder

        form = {
            **{key: str(value) for key, value in params.items()},
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }
        files = {"file": (filename or "upload", data)}

        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.post(self.upload_url, data=form, files=files)

        if response.status_code != 200:
            logger.error(f"Cloudinary upload failed ({response.status_code}): {response.text}")
            raise AppException(ErrorType.UPLOAD_FAILED, "Failed to upload image to Cloudinary")

        url = response.json().get("secure_url")
        if not url:
            raise AppException(ErrorType.UPLOAD_FAILED, "Cloudinary response missing secure_url")
        return url
