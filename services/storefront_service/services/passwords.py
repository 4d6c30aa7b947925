"""Password hashing (bcrypt via passlib)."""

from functools import lru_cache

from libs.common.config import get_settings
from passlib.context import CryptContext


@lru_cache
def get_password_context() -> CryptContext:
    settings = get_settings()
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.BCRYPT_ROUNDS,
    )


def hash_password(password: str) -> str:
    return get_password_context().hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return get_password_context().verify(plain_password, password_hash)
