from core.database import Base
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from models.mixins import UUIDPrimaryKeyMixin, TimestampMixin

class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "users"

    #relationships
    chirps = relationship("Chirp", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    email = Column(String(256), unique=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    # Set by the Polka payment webhook
    is_chirpy_red = Column(Boolean, default=False, nullable=False)
