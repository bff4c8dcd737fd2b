from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    # Either the email or the username
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
