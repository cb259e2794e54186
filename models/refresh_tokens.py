from core.database import Base
from sqlalchemy import Column, DateTime, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from models.mixins import TimestampMixin

class RefreshToken(Base, TimestampMixin):
    """
    Opaque refresh tokens issued at login.

    The token string itself is the primary key; the owning user is a
    separate column. Tokens are soft-revoked by setting `revoked_at` and
    kept for auditing, so a row is only usable while `revoked_at` is
    NULL and `expires_at` lies in the future.
    """
    __tablename__ = "refresh_tokens"

    #pk
    token = Column(String(64), primary_key=True)

    #fk
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    #relationships
    user = relationship("User", back_populates="refresh_tokens")

    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)
