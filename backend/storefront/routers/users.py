from http import HTTPStatus

from fastapi import APIRouter

from storefront.dependencies import T_CurrentUser, T_UsersService
from storefront.schemas.user import UserCreate, UserPublic

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=HTTPStatus.CREATED, response_model=UserPublic)
async def create_user(user: UserCreate, users_service: T_UsersService):
    """Register a new user (public)."""
    return await users_service.create(user)


@router.get("/me", response_model=UserPublic)
async def read_users_me(current_user: T_CurrentUser):
    """Return the authenticated user."""
    return current_user
