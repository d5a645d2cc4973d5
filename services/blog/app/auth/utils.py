import hashlib
import secrets

from passlib.context import CryptContext

context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return context.hash(password)


def verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    return context.verify(plain, hashed)


def generate_reset_token() -> str:
    """32 random bytes, hex-encoded; only the sha256 digest is persisted."""
    return secrets.token_hex(32)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
