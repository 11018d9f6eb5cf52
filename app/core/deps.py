# app/core/deps.py
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from app.core.config_env import Settings
from app.core.errors import InvalidToken, Unauthenticated
from app.core.tokens import Subject, decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)

logger = logging.getLogger("auth")


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def _log(settings: Settings, msg: str, **kw):
    if settings.DEBUG_AUTH:
        safe_kw = {k: (v if k != "token" else f"{str(v)[:16]}...") for k, v in kw.items()}
        logger.info("[auth] " + msg + " " + " ".join(f"{k}={v}" for k, v in safe_kw.items()))


def get_current_subject(
    settings: Settings = Depends(get_app_settings),
    token: Optional[str] = Depends(oauth2_scheme),
) -> Subject:
    # токен stateless: БД не трогаем, всё нужное лежит в claims
    if not token:
        _log(settings, "missing token -> 401")
        raise Unauthenticated("Access token required")

    _log(settings, "incoming token", token=token, len=len(token))
    try:
        subject = decode_access_token(token, settings)
    except InvalidToken as e:
        _log(settings, "token rejected", err=e.detail)
        raise

    _log(settings, "subject resolved", id=subject.id, kind=subject.kind.value, role=subject.role.value)
    return subject
