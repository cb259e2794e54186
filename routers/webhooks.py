from fastapi import APIRouter, Depends, Response
from starlette import status
from core.config import settings
from core.errors import UnauthorizedError
from utils.deps import db_dependency, get_api_key
from schemas.user_schemas import PolkaWebhookRequest
from services.user_service import UserService


router = APIRouter(
    prefix="/api/polka",
    tags=["webhooks"]
)


def verify_polka_key(api_key: str = Depends(get_api_key)):
    if api_key != settings.POLKA_KEY:
        raise UnauthorizedError("Invalid API key")


@router.post("/webhooks", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(verify_polka_key)])
async def polka_webhook(body: PolkaWebhookRequest, db: db_dependency):
    """
    Payment events from Polka. Always 204 unless the key is wrong or the
    user to upgrade does not exist.
    """
    UserService.handle_polka_event(body.event, body.data.user_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
