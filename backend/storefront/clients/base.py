"""Base image-host client."""
from abc import ABC, abstractmethod


class BaseImageHostClient(ABC):
    """Uploads raw image bytes to an external host and returns the public URL."""

    @abstractmethod
    async def upload(self, data: bytes, filename: str | None = None) -> str:
        """
        Upload an image.

        Args:
            data: Raw file contents
            filename: Original file name, if the client sent one

        Returns:
            The hosted URL of the uploaded image
        """
        pass
