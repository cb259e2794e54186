from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from core.errors import BadRequestError, NotFoundError
from models.chirps import Chirp
from models.refresh_tokens import RefreshToken
from models.users import User
from schemas.user_schemas import UserCredentials
from services.auth_service import AuthService
from utils.hashing import hash_password
from utils.logger import get_logger

logger = get_logger(__name__)

UPGRADE_EVENT = "user.upgraded"


class UserService:

    @staticmethod
    def update_user(user_id, request: UserCredentials, db: Session) -> User:
        """
        Changes email and password of the authenticated user.

        Raises:
            NotFoundError: the token subject no longer exists
            BadRequestError: the new email belongs to another user
        """
        model = AuthService.get_user_by_id(db, user_id)
        if not model:
            raise NotFoundError("User not found")

        owner = AuthService.get_user_by_email(db, request.email)
        if owner and owner.id != model.id:
            raise BadRequestError("Email already registered")

        model.email = request.email
        model.hashed_password = hash_password(request.password)

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise BadRequestError("Email already registered")

        db.refresh(model)
        return model

    @staticmethod
    def handle_polka_event(event: str, user_id, db: Session) -> bool:
        """
        Applies a Polka payment webhook.

        Only "user.upgraded" does anything; other events are acknowledged
        and ignored. Returns True when a user was upgraded.
        """
        if event != UPGRADE_EVENT:
            logger.debug("Ignoring Polka event", extra={"event": event})
            return False

        model = AuthService.get_user_by_id(db, user_id)
        if not model:
            raise NotFoundError("User not found")

        model.is_chirpy_red = True
        db.commit()

        logger.info("User upgraded to Chirpy Red", extra={"user_id": str(user_id)})
        return True

    @staticmethod
    def delete_all_users(db: Session) -> int:
        """
        Wipes every user together with their chirps and refresh tokens.

        Children are deleted explicitly so the result does not depend on the
        backend enforcing ON DELETE CASCADE.
        """
        db.query(Chirp).delete()
        db.query(RefreshToken).delete()
        deleted = db.query(User).delete()
        db.commit()
        return deleted
