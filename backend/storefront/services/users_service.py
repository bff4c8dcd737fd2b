import logging
import uuid

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from storefront.db.integrity import is_unique_violation, violation_detail
from storefront.errors import ErrorType
from storefront.exceptions import AppException
from storefront.models import Role, User
from storefront.schemas.user import UserCreate, UserPublic
from storefront.security import hash_password

logger = logging.getLogger(__name__)


class UsersService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user_create: UserCreate, role: Role = Role.USER) -> UserPublic:
        """Register a user with a hashed password.

        Signup always stores USER; only internal callers pass another role.

        Returns:
            The stored user without its password

        Raises:
            AppException: UNIQUE_VIOLATION when the email or username is taken
        """
        user = User(
            email=user_create.email,
            username=user_create.username,
            password=hash_password(user_create.password),
            role=role.value,
        )
        self.session.add(user)

        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                raise AppException(ErrorType.UNIQUE_VIOLATION, violation_detail(e))
            raise

        logger.info(f"Created user {user.id} ({user.username})")
        return UserPublic.model_validate(user)

    async def find_by_identifier(self, identifier: str) -> User | None:
        """Find a user by email or username, loading the password hash."""
        result = await self.session.execute(
            select(User)
            .options(undefer(User.password))
            .where(or_(User.email == identifier, User.username == identifier))
        )
        return result.scalars().first()

    async def find_by_id(self, user_id: uuid.UUID) -> User:
        user = await self.session.get(User, user_id)
        if user is None:
            raise AppException(ErrorType.NOT_FOUND, f"User with id {user_id} not found")
        return user
