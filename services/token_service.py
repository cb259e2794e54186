import secrets
import time
from datetime import datetime, timezone, timedelta
from sqlalchemy.orm import Session
from jose import jwt, JWTError
from core.config import settings
from core.errors import UnauthorizedError
from models.refresh_tokens import RefreshToken
from models.users import User
from utils.logger import get_logger

logger = get_logger(__name__)

TOKEN_ISSUER = "chirpy"


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TokenService:
    """
    Access tokens (signed JWTs) and refresh tokens (opaque random strings
    stored in the database).
    """

    @staticmethod
    def make_jwt(user_id, ttl_seconds: int, secret: str) -> str:
        """
        Issues a signed access token for `user_id`.

        Claims: iss="chirpy", sub=<user id>, iat and exp in epoch seconds.
        """
        issued_at = int(time.time())
        payload = {
            "iss": TOKEN_ISSUER,
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + ttl_seconds
        }
        return jwt.encode(payload, secret, algorithm=settings.ALGORITHM)

    @staticmethod
    def validate_jwt(token: str, secret: str) -> str:
        """
        Verifies signature, expiry and issuer of an access token.

        Returns:
            The subject (user id as a string)

        Raises:
            UnauthorizedError: bad signature, expired, wrong issuer,
                or no string subject
        """
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[settings.ALGORITHM],
                issuer=TOKEN_ISSUER
            )
        except JWTError:
            raise UnauthorizedError("Invalid or expired token")

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise UnauthorizedError("Token payload missing subject")

        return subject

    @staticmethod
    def make_refresh_token() -> str:
        """256 bits of randomness, hex encoded. Not tied to a user until stored."""
        return secrets.token_hex(32)

    @staticmethod
    def access_token_ttl(requested_seconds: int | None) -> int:
        """Requested lifetime capped at ACCESS_TOKEN_EXPIRE_SECONDS, which is also the default."""
        max_ttl = settings.ACCESS_TOKEN_EXPIRE_SECONDS
        if requested_seconds is None or requested_seconds <= 0:
            return max_ttl
        return min(requested_seconds, max_ttl)

    @staticmethod
    def create_refresh_token(user_id, db: Session) -> RefreshToken:
        """Generates a refresh token for `user_id` and stores it."""
        db_token = RefreshToken(
            token=TokenService.make_refresh_token(),
            user_id=user_id,
            expires_at=datetime.now(timezone.utc) + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
        )
        db.add(db_token)
        db.commit()
        db.refresh(db_token)
        return db_token

    @staticmethod
    def create_tokens(user: User, db: Session, expires_in_seconds: int | None = None) -> dict:
        """
        Access + refresh token pair for a freshly authenticated user.
        """
        access_token = TokenService.make_jwt(
            user.id,
            TokenService.access_token_ttl(expires_in_seconds),
            settings.SECRET_KEY
        )
        refresh_token = TokenService.create_refresh_token(user.id, db)

        return {
            "token": access_token,
            "refresh_token": refresh_token.token
        }

    @staticmethod
    def get_active_refresh_token(token: str, db: Session) -> RefreshToken | None:
        """The stored token if it is neither revoked nor expired."""
        db_token = db.query(RefreshToken).filter(
            RefreshToken.token == token,
            RefreshToken.revoked_at.is_(None)
        ).one_or_none()

        if not db_token:
            return None

        if as_utc(db_token.expires_at) <= datetime.now(timezone.utc):
            logger.info(
                "Expired refresh token presented",
                extra={"user_id": str(db_token.user_id)}
            )
            return None

        return db_token

    @staticmethod
    def refresh_access_token(refresh_token: str, db: Session) -> str:
        """
        New access token for the owner of an active refresh token.

        The refresh token itself is left untouched (no rotation).

        Raises:
            UnauthorizedError: unknown, revoked or expired refresh token
        """
        db_token = TokenService.get_active_refresh_token(refresh_token, db)
        if not db_token or not db_token.user:
            raise UnauthorizedError("Invalid refresh token")

        return TokenService.make_jwt(
            db_token.user.id,
            settings.ACCESS_TOKEN_EXPIRE_SECONDS,
            settings.SECRET_KEY
        )

    @staticmethod
    def revoke_token(refresh_token: str, db: Session) -> RefreshToken:
        """
        Marks an active refresh token as revoked.

        Revoking an unknown or already revoked token is an error, not a no-op.
        """
        db_token = TokenService.get_active_refresh_token(refresh_token, db)
        if not db_token:
            raise UnauthorizedError("Invalid refresh token")

        db_token.revoked_at = datetime.now(timezone.utc)
        db.commit()
        return db_token

