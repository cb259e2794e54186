from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request
from core.config import settings
from core.errors import UnauthorizedError
from services.token_service import TokenService
from utils.deps import get_bearer_token

def get_user_id(request: Request):
    """Rate limit key: the JWT subject for authenticated calls, else the client address."""
    try:
        token = get_bearer_token(request)
        return TokenService.validate_jwt(token, settings.SECRET_KEY)
    except UnauthorizedError:
        return get_remote_address(request)

limiter = Limiter(
    key_func=get_user_id,
    default_limits=["200/hour"],
    enabled=settings.ENV != "testing"
)
