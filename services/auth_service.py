from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from utils.hashing import check_password_hash, hash_password
from models.users import User
from schemas.user_schemas import UserCredentials
from core.errors import BadRequestError, UnauthorizedError
from utils.logger import get_logger

logger = get_logger(__name__)

class AuthService:

    @staticmethod
    def create_user(request: UserCredentials, db: Session) -> User:
        """
        Registers a new user. The password is hashed before it is stored.

        Raises:
            BadRequestError: email already registered (checked up front and
                again through the unique constraint)
        """
        existing_user = AuthService.get_user_by_email(db, request.email)
        if existing_user:
            logger.warning(
                "Registration attempt with existing email",
                extra={"email": request.email}
            )
            raise BadRequestError("Email already registered")

        model = User(
            email=request.email,
            hashed_password=hash_password(request.password)
        )

        db.add(model)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                "Registration lost a race on the email unique constraint",
                extra={"email": request.email}
            )
            raise BadRequestError("Email already registered")

        db.refresh(model)
        return model


    @staticmethod
    def authenticate_user(email: str, password: str, db: Session) -> User:
        user = AuthService.get_user_by_email(db, email)

        if not user:
            logger.warning(
                "Login failed - user not found",
                extra={"email": email}
            )
            raise UnauthorizedError("Incorrect email or password")

        if not check_password_hash(password, user.hashed_password):
            logger.warning(
                "Login failed - invalid password",
                extra={"user_id": str(user.id), "email": email}
            )
            raise UnauthorizedError("Incorrect email or password")

        logger.debug(
            "User authenticated successfully",
            extra={"user_id": str(user.id), "email": email}
        )

        return user

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> User | None:
        return db.query(User).filter(User.email == email).one_or_none()

    @staticmethod
    def get_user_by_id(db: Session, user_id) -> User | None:
        return db.query(User).filter(User.id == user_id).one_or_none()
