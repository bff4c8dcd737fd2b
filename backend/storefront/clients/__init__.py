"""Image-host clients - swap provider here."""
from storefront.clients.base import BaseImageHostClient

_image_host = None


def get_image_host() -> BaseImageHostClient:
    """Get or create the image-host client (lazy initialization)."""
    global _image_host
    if _image_host is None:
        from storefront.clients.cloudinary import CloudinaryClient
        _image_host = CloudinaryClient()
    return _image_host
