from storefront.models.user import Role, User, user_liked_products
from storefront.models.product import Product
from storefront.models.image import Image

__all__ = ["Role", "User", "Product", "Image", "user_liked_products"]
