# app/services/auth_service.py
"""
Credential store and session issuer.

Two independent credential tables back two login surfaces:
  - users        -> citizens (role "user", or "authority" if requested at registration)
  - authorities  -> dedicated authority accounts (role always "authority")
Both end up as a Subject inside a signed access token.
"""
import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config_env import Settings
from app.core.errors import Conflict, InvalidInput, StoreFailure, Unauthenticated
from app.core.security import dummy_verify, hash_password, verify_password
from app.core.tokens import Subject, create_access_token
from app.models.authority import Authority
from app.models.enums import PrincipalKind, UserRole
from app.models.user import User

logger = logging.getLogger("auth")


def _citizen_subject(user: User) -> Subject:
    return Subject(id=user.id, username=user.username, role=UserRole(user.role), kind=PrincipalKind.citizen)

def _authority_subject(authority: Authority) -> Subject:
    return Subject(id=authority.id, username=authority.username, role=UserRole.authority, kind=PrincipalKind.authority)

def _require_credentials(username: str, password: str) -> None:
    if not username or not password:
        raise InvalidInput("Username and password are required")

def issue_session(subject: Subject, settings: Settings) -> Tuple[str, dict]:
    return create_access_token(subject, settings), subject.public()


def _insert(db: Session, row) -> None:
    try:
        db.add(row)
        db.commit()
        db.refresh(row)
    except IntegrityError:
        # гонка двух регистраций с одним именем
        db.rollback()
        raise Conflict("Username already exists")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("credential insert failed")
        raise StoreFailure()


def register_citizen(db: Session, settings: Settings, username: str, password: str,
                     requested_role: str | None = None) -> Tuple[str, dict]:
    _require_credentials(username, password)
    if db.query(User).filter(User.username == username).first():
        raise Conflict("Username already exists")

    role = UserRole.authority if requested_role == UserRole.authority.value else UserRole.user
    user = User(
        username=username,
        password_hash=hash_password(password, settings.BCRYPT_ROUNDS),
        role=role.value,
    )
    _insert(db, user)
    logger.info("registered citizen id=%s role=%s", user.id, role.value)
    return issue_session(_citizen_subject(user), settings)


def register_authority(db: Session, settings: Settings, username: str, password: str) -> Tuple[str, dict]:
    _require_credentials(username, password)
    if db.query(Authority).filter(Authority.username == username).first():
        raise Conflict("Username already exists")

    authority = Authority(username=username, password_hash=hash_password(password, settings.BCRYPT_ROUNDS))
    _insert(db, authority)
    logger.info("registered authority id=%s", authority.id)
    return issue_session(_authority_subject(authority), settings)


def login(db: Session, settings: Settings, username: str, password: str) -> Tuple[str, dict]:
    user = db.query(User).filter(User.username == username).first() if username else None
    if not user:
        dummy_verify()
        raise Unauthenticated("Invalid credentials")
    if not verify_password(password or "", user.password_hash):
        raise Unauthenticated("Invalid credentials")
    return issue_session(_citizen_subject(user), settings)


def login_authority(db: Session, settings: Settings, username: str, password: str) -> Tuple[str, dict]:
    authority = db.query(Authority).filter(Authority.username == username).first() if username else None
    if not authority:
        dummy_verify()
        raise Unauthenticated("Invalid credentials")
    if not verify_password(password or "", authority.password_hash):
        raise Unauthenticated("Invalid credentials")
    return issue_session(_authority_subject(authority), settings)
