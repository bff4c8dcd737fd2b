from fastapi import APIRouter

from storefront.dependencies import T_AuthService
from storefront.schemas.auth import LoginRequest, Token

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Token)
async def login(credentials: LoginRequest, auth_service: T_AuthService):
    """Exchange an email or username and a password for an access token."""
    return await auth_service.authenticate(credentials.username, credentials.password)
