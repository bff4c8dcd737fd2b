"""Request-scoped wiring of sessions, services and the authenticated user."""
import uuid
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.clients import get_image_host
from storefront.clients.base import BaseImageHostClient
from storefront.db.database import get_session
from storefront.errors import ErrorType
from storefront.exceptions import AppException
from storefront.models import Role, User
from storefront.security import decode_access_token
from storefront.services.auth_service import AuthService
from storefront.services.image_service import ImageService
from storefront.services.products_service import ProductsService
from storefront.services.users_service import UsersService

bearer_scheme = HTTPBearer(auto_error=False)

T_Session = Annotated[AsyncSession, Depends(get_session)]


def get_users_service(session: T_Session) -> UsersService:
    return UsersService(session)


def get_auth_service(
    users_service: Annotated[UsersService, Depends(get_users_service)],
) -> AuthService:
    return AuthService(users_service)


def get_image_service(
    session: T_Session,
    image_host: Annotated[BaseImageHostClient, Depends(get_image_host)],
) -> ImageService:
    return ImageService(session, image_host)


def get_products_service(
    session: T_Session,
    users_service: Annotated[UsersService, Depends(get_users_service)],
    image_service: Annotated[ImageService, Depends(get_image_service)],
) -> ProductsService:
    return ProductsService(session, users_service, image_service)


async def get_current_user(
    users_service: Annotated[UsersService, Depends(get_users_service)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> User:
    """Resolve the bearer token to a stored user."""
    if credentials is None:
        raise AppException(ErrorType.UNAUTHORIZED, "Not authenticated")

    payload = decode_access_token(credentials.credentials)
    try:
        return await users_service.find_by_id(uuid.UUID(str(payload["sub"])))
    except (AppException, AttributeError, TypeError, ValueError):
        raise AppException(ErrorType.UNAUTHORIZED, "Could not validate credentials")


async def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    if current_user.role != Role.ADMIN.value:
        raise AppException(ErrorType.FORBIDDEN, "Admin role required")
    return current_user


T_UsersService = Annotated[UsersService, Depends(get_users_service)]
T_AuthService = Annotated[AuthService, Depends(get_auth_service)]
T_ProductsService = Annotated[ProductsService, Depends(get_products_service)]
T_CurrentUser = Annotated[User, Depends(get_current_user)]
T_AdminUser = Annotated[User, Depends(require_admin)]
