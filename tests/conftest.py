import os
import tempfile

# Settings are read at import time, so the environment has to be in place first
os.environ["ENV"] = "testing"
os.environ["PLATFORM"] = "dev"
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["POLKA_KEY"] = "test-polka-key"
os.environ["LOG_DIR"] = os.path.join(tempfile.gettempdir(), "chirpy-test-logs")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from main import app
from core.config import settings
from core.database import Base
from models.users import User
from services.token_service import TokenService
from utils.deps import get_db
from tests.helpers import bearer, create_user

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False}
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """
    A fresh, empty database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
async def client(session: Session):
    """
    HTTP client talking to the app in-process, with get_db pointed at the
    test session.
    """
    def override_get_db():
        try:
            yield session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def user(session) -> User:
    return create_user(session, "frodo@shire.com")


@pytest.fixture
def other_user(session) -> User:
    return create_user(session, "sam@shire.com")


@pytest.fixture
def auth_headers(user) -> dict:
    token = TokenService.make_jwt(user.id, 3600, settings.SECRET_KEY)
    return bearer(token)
