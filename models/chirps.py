from core.database import Base
from sqlalchemy import Column, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from models.mixins import UUIDPrimaryKeyMixin, TimestampMixin

CHIRP_MAX_LENGTH = 140

class Chirp(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "chirps"

    #fk
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    #relationships
    user = relationship("User", back_populates="chirps")

    # Stored already filtered, never rewritten afterwards
    body = Column(String(CHIRP_MAX_LENGTH), nullable=False)
