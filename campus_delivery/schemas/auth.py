"""Authentication-related request and response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Payload for user registration."""

    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6, max_length=128)
    username: str | None = Field(default=None, min_length=3, max_length=128)
    role: str = "CUSTOMER"


class LoginRequest(BaseModel):
    """Payload for user login."""

    email: str
    password: str


class TokenResponse(BaseModel):
    """JWT response payload."""

    access_token: str
    token_type: str = "bearer"


class AuthUserResponse(BaseModel):
    """User response for auth endpoints."""

    id: int
    username: str
    email: str
    role: str
    full_name: str | None = None
    phone_number: str | None = None
    max_owned_restaurants: int

    model_config = ConfigDict(from_attributes=True)
