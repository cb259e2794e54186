from fastapi import APIRouter
from starlette import status
from core.config import settings
from core.errors import ForbiddenError
from utils.deps import db_dependency
from services.user_service import UserService
from utils.logger import get_logger

logger = get_logger(__name__)


router = APIRouter(
    prefix="/admin",
    tags=["admin"]
)


@router.post("/reset", status_code=status.HTTP_200_OK)
async def reset(db: db_dependency):
    """
    Delete every user (and with them all chirps and refresh tokens).
    Only available when PLATFORM=dev.
    """
    if settings.PLATFORM != "dev":
        logger.warning("Reset attempted outside dev", extra={"platform": settings.PLATFORM})
        raise ForbiddenError("Reset is only allowed in dev environment.")

    deleted = UserService.delete_all_users(db)

    logger.info("Database reset", extra={"deleted_users": deleted})

    return {"message": "Reset complete", "deletedUsers": deleted}
