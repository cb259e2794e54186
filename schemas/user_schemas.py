import uuid
from datetime import datetime
from pydantic import EmailStr, field_validator
from schemas.common import CamelModel

PASSWORD_MIN_LENGTH = 8


class UserCredentials(CamelModel):
    """Body of register and update requests."""
    email: EmailStr
    password: str

    @field_validator('password')
    @classmethod
    def validate_password(cls, value):
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError(f'Password must be at least {PASSWORD_MIN_LENGTH} characters')
        return value


class LoginRequest(CamelModel):
    email: EmailStr
    password: str
    expires_in_seconds: int | None = None


class UserResponse(CamelModel):
    id: uuid.UUID
    email: str
    created_at: datetime
    updated_at: datetime
    is_chirpy_red: bool


class LoginResponse(UserResponse):
    token: str
    refresh_token: str


class AccessTokenResponse(CamelModel):
    token: str


class PolkaWebhookData(CamelModel):
    user_id: uuid.UUID


class PolkaWebhookRequest(CamelModel):
    event: str
    data: PolkaWebhookData
