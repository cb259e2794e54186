from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

# argon2id with the library's default cost parameters and a random salt per hash
password_hasher = PasswordHasher()

def hash_password(password: str) -> str:
    return password_hasher.hash(password)


def check_password_hash(password: str, hashed_password: str) -> bool:
    """True when `password` matches `hashed_password`. Mismatches and malformed hashes return False."""
    try:
        return password_hasher.verify(hashed_password, password)
    except (VerificationError, InvalidHashError):
        return False
