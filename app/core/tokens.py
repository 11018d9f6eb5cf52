# app/core/tokens.py
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Any
from jose import jwt, JWTError

from app.core.config_env import Settings
from app.core.errors import InvalidToken
from app.models.enums import PrincipalKind, UserRole


@dataclass(frozen=True)
class Subject:
    """Identity carried by a validated access token."""
    id: int
    username: str
    role: UserRole
    kind: PrincipalKind

    @property
    def is_authority(self) -> bool:
        return self.role == UserRole.authority

    @property
    def citizen_id(self) -> int | None:
        # only rows of the users table can own reports
        return self.id if self.kind == PrincipalKind.citizen else None

    def public(self) -> Dict[str, Any]:
        return {"id": self.id, "username": self.username, "role": self.role.value}


def _now_utc_naive() -> datetime:
    # используем наивный UTC, чтобы сопоставлять с datetime.utcnow()
    return datetime.now(timezone.utc).replace(tzinfo=None)

def _to_epoch_seconds(dt_naive_utc: datetime) -> int:
    return int(dt_naive_utc.replace(tzinfo=timezone.utc).timestamp())

def create_access_token(subject: Subject, settings: Settings) -> str:
    """
    Возвращает JWT-строку. iat/exp — числовые секунды, UTC.
    """
    now = _now_utc_naive()
    exp = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload: Dict[str, Any] = {
        "sub": str(subject.id),
        "username": subject.username,
        "role": subject.role.value,
        "kind": subject.kind.value,
        "type": "access",
        "iat": _to_epoch_seconds(now),
        "exp": _to_epoch_seconds(exp),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)

def decode_access_token(token: str, settings: Settings) -> Subject:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except JWTError:
        raise InvalidToken("Invalid or expired token")

    if payload.get("type") != "access":
        raise InvalidToken("Invalid token type")
    try:
        return Subject(
            id=int(payload.get("sub")),
            username=str(payload.get("username") or ""),
            role=UserRole(payload.get("role")),
            kind=PrincipalKind(payload.get("kind")),
        )
    except (TypeError, ValueError):
        raise InvalidToken("Malformed token claims")
