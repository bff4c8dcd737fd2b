from storefront.errors import ErrorType
from storefront.exceptions import AppException
from storefront.schemas.auth import Token
from storefront.schemas.user import UserPublic
from storefront.security import DUMMY_PASSWORD_HASH, create_access_token, verify_password
from storefront.services.users_service import UsersService


class AuthService:
    def __init__(self, users_service: UsersService):
        self.users_service = users_service

    async def validate_credentials(self, identifier: str, password: str) -> UserPublic | None:
        """Return the user when the password matches, otherwise None.

        An unknown identifier and a wrong password give the same result.
        """
        user = await self.users_service.find_by_identifier(identifier)
        if user is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            return None
        if not verify_password(password, user.password):
            return None
        return UserPublic.model_validate(user)

    def login(self, user: UserPublic) -> Token:
        access_token = create_access_token({"username": user.username, "sub": str(user.id)})
        return Token(access_token=access_token)

    async def authenticate(self, identifier: str, password: str) -> Token:
        user = await self.validate_credentials(identifier, password)
        if user is None:
            raise AppException(ErrorType.UNAUTHORIZED, "Incorrect username or password")
        return self.login(user)
