from fastapi import APIRouter, Request, Response
from starlette import status
from utils.deps import db_dependency, bearer_token_dependency
from schemas.user_schemas import LoginRequest, LoginResponse, AccessTokenResponse
from services.auth_service import AuthService
from services.token_service import TokenService
from middleware.rate_limiter import limiter
from utils.logger import get_logger

logger = get_logger(__name__)


router = APIRouter(
    prefix="/api",
    tags=["auth"]
)


@router.post("/login", response_model=LoginResponse)
@limiter.limit("10/minute")
async def login(request: Request, body: LoginRequest, db: db_dependency):
    """
    Exchange email + password for an access token and a refresh token.

    `expiresInSeconds` may shorten the access token's lifetime but never
    extend it past one hour.
    """
    user = AuthService.authenticate_user(body.email, body.password, db)
    tokens = TokenService.create_tokens(user, db, body.expires_in_seconds)

    logger.info(
        "User logged in successfully",
        extra={"user_id": str(user.id), "email": user.email}
    )

    return LoginResponse(
        id=user.id,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
        is_chirpy_red=user.is_chirpy_red,
        token=tokens["token"],
        refresh_token=tokens["refresh_token"]
    )


@router.post("/refresh", response_model=AccessTokenResponse)
@limiter.limit("30/minute")
async def refresh_token(request: Request, token: bearer_token_dependency, db: db_dependency):
    """
    New access token for the refresh token in the Authorization header.
    """
    access_token = TokenService.refresh_access_token(token, db)

    logger.info("Access token refreshed")

    return AccessTokenResponse(token=access_token)


@router.post("/revoke", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_token(token: bearer_token_dependency, db: db_dependency):
    """
    Revoke the refresh token in the Authorization header (logout).
    """
    db_token = TokenService.revoke_token(token, db)

    logger.info("Refresh token revoked", extra={"user_id": str(db_token.user_id)})

    return Response(status_code=status.HTTP_204_NO_CONTENT)
