import uuid
from typing import Annotated
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from core.config import settings
from core.database import SessionLocal
from core.errors import UnauthorizedError
from services.token_service import TokenService

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

db_dependency = Annotated[Session, Depends(get_db)]


def _get_authorization_value(request: Request, scheme: str, missing_message: str) -> str:
    header = request.headers.get("Authorization")
    if not header:
        raise UnauthorizedError("Missing Authorization header")

    if not header.startswith(scheme):
        raise UnauthorizedError("Invalid Authorization header format")

    value = header[len(scheme):].strip()
    if not value:
        raise UnauthorizedError(missing_message)

    return value


def get_bearer_token(request: Request) -> str:
    """Token from an `Authorization: Bearer <token>` header."""
    return _get_authorization_value(request, "Bearer", "Missing token")


def get_api_key(request: Request) -> str:
    """Key from an `Authorization: ApiKey <key>` header, as sent by Polka."""
    return _get_authorization_value(request, "ApiKey", "Missing API key")


def get_current_user_id(request: Request) -> uuid.UUID:
    token = get_bearer_token(request)
    subject = TokenService.validate_jwt(token, settings.SECRET_KEY)
    try:
        return uuid.UUID(subject)
    except ValueError:
        raise UnauthorizedError("Invalid token subject")


bearer_token_dependency = Annotated[str, Depends(get_bearer_token)]
user_id_dependency = Annotated[uuid.UUID, Depends(get_current_user_id)]
