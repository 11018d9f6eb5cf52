from functools import lru_cache
from passlib.context import CryptContext

DEFAULT_ROUNDS = 12

@lru_cache(maxsize=8)
def _pwd_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    return _pwd_context(rounds).hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    # cost is read from the hash itself, the context's rounds only matter for hashing
    return _pwd_context(DEFAULT_ROUNDS).verify(password, password_hash)

def dummy_verify() -> None:
    """Burn one hash check so unknown usernames cost the same as a wrong password."""
    _pwd_context(DEFAULT_ROUNDS).dummy_verify()
