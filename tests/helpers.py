from sqlalchemy.orm import Session
from models.users import User
from utils.hashing import hash_password

TEST_PASSWORD = "04234lotr"


def create_user(session: Session, email: str, password: str = TEST_PASSWORD) -> User:
    user = User(email=email, hashed_password=hash_password(password))
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
