import uuid
from sqlalchemy.orm import Session
from core.errors import BadRequestError, ForbiddenError, NotFoundError
from models.chirps import Chirp, CHIRP_MAX_LENGTH
from schemas.chirp_schemas import CreateChirpRequest, SortOrder
from services.auth_service import AuthService
from utils.content_filter import filter_profanity
from utils.logger import get_logger

logger = get_logger(__name__)


def parse_chirp_id(chirp_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(chirp_id)
    except ValueError:
        raise NotFoundError("Chirp not found")


class ChirpService:

    @staticmethod
    def validate_body(body: str) -> str:
        if not body:
            raise BadRequestError("Chirp body cannot be empty")
        if len(body) > CHIRP_MAX_LENGTH:
            raise BadRequestError(f"Chirp is too long. Max length is {CHIRP_MAX_LENGTH}")
        return body

    @staticmethod
    def create_chirp(request: CreateChirpRequest, db: Session) -> Chirp:
        """
        Validates, filters and stores a chirp for `request.user_id`.

        Raises:
            BadRequestError: empty body or longer than 140 characters
            NotFoundError: no user with that id
        """
        body = ChirpService.validate_body(request.body)

        if not AuthService.get_user_by_id(db, request.user_id):
            raise NotFoundError("User not found")

        model = Chirp(
            body=filter_profanity(body),
            user_id=request.user_id
        )
        db.add(model)
        db.commit()
        db.refresh(model)

        logger.info(
            "Chirp created",
            extra={"chirp_id": str(model.id), "user_id": str(model.user_id)}
        )
        return model

    @staticmethod
    def list_chirps(db: Session, author_id: uuid.UUID | None = None,
                    sort: SortOrder = SortOrder.asc) -> list[Chirp]:
        query = db.query(Chirp)
        if author_id is not None:
            query = query.filter(Chirp.user_id == author_id)

        order = Chirp.created_at.desc() if sort == SortOrder.desc else Chirp.created_at.asc()
        return query.order_by(order).all()

    @staticmethod
    def get_chirp(chirp_id: str, db: Session) -> Chirp:
        model = db.query(Chirp).filter(Chirp.id == parse_chirp_id(chirp_id)).one_or_none()
        if not model:
            raise NotFoundError("Chirp not found")
        return model

    @staticmethod
    def delete_chirp(chirp_id: str, user_id: uuid.UUID, db: Session):
        """Deletes a chirp owned by `user_id`; anyone else gets ForbiddenError."""
        model = ChirpService.get_chirp(chirp_id, db)

        if model.user_id != user_id:
            logger.warning(
                "Attempt to delete another user's chirp",
                extra={"chirp_id": chirp_id, "user_id": str(user_id)}
            )
            raise ForbiddenError("You can only delete your own chirps")

        db.delete(model)
        db.commit()
