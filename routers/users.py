from fastapi import APIRouter, Request
from starlette import status
from utils.deps import db_dependency, user_id_dependency
from schemas.user_schemas import UserCredentials, UserResponse
from services.auth_service import AuthService
from services.user_service import UserService
from middleware.rate_limiter import limiter
from utils.logger import get_logger

logger = get_logger(__name__)


router = APIRouter(
    prefix="/api/users",
    tags=["users"]
)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")
async def create_user(request: Request, body: UserCredentials, db: db_dependency):
    user = AuthService.create_user(body, db)

    logger.info(
        "User registered successfully",
        extra={"user_id": str(user.id), "email": user.email}
    )

    return user


@router.put("", response_model=UserResponse, status_code=status.HTTP_200_OK)
async def update_user(body: UserCredentials, user_id: user_id_dependency, db: db_dependency):
    """
    Change email and password of the caller (identified by the access token).
    """
    user = UserService.update_user(user_id, body, db)

    logger.info("User updated", extra={"user_id": str(user.id)})

    return user
