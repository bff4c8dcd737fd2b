from datetime import datetime, timedelta, timezone

from jwt import InvalidTokenError, decode, encode
from pwdlib import PasswordHash
from pwdlib.hashers.bcrypt import BcryptHasher

from storefront.config import Config
from storefront.errors import ErrorType
from storefront.exceptions import AppException

pwd_context = PasswordHash((BcryptHasher(rounds=Config.SALT_ROUNDS),))

# Checked against when the user does not exist so both failures cost one bcrypt round
DUMMY_PASSWORD_HASH = pwd_context.hash("storefront-dummy-password")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=Config.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode.update({"exp": expire})
    return encode(to_encode, Config.JWT_SECRET, algorithm=Config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decode and validate a JWT; raises UNAUTHORIZED when it is unusable."""
    try:
        payload = decode(token, Config.JWT_SECRET, algorithms=[Config.JWT_ALGORITHM])
    except InvalidTokenError:
        raise AppException(ErrorType.UNAUTHORIZED, "Could not validate credentials")

    if not payload.get("sub"):
        raise AppException(ErrorType.UNAUTHORIZED, "Could not validate credentials")
    return payload
