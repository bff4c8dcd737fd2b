import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from storefront.models.user import Role


class UserCreate(BaseModel):
    email: EmailStr
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane@example.com",
                "username": "jane",
                "password": "s3cret-pass",
            }
        }
    )


class UserPublic(BaseModel):
    """User as returned by the API; never carries the password."""

    id: uuid.UUID
    email: EmailStr
    username: str
    role: Role

    model_config = ConfigDict(from_attributes=True)
