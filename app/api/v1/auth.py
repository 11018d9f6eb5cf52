# app/api/v1/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.config_env import Settings
from app.core.deps import get_app_settings
from app.db.session import get_db
from app.schemas.auth import AuthResponse, LoginRequest, RegisterAuthorityRequest, RegisterRequest
from app.services import auth_service

router = APIRouter(tags=["auth"])

@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db), settings: Settings = Depends(get_app_settings)):
    token, user = auth_service.login(db, settings, payload.username, payload.password)
    return {"token": token, "user": user}

@router.post("/login-authority", response_model=AuthResponse)
def login_authority(payload: LoginRequest, db: Session = Depends(get_db), settings: Settings = Depends(get_app_settings)):
    token, user = auth_service.login_authority(db, settings, payload.username, payload.password)
    return {"token": token, "user": user}

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db), settings: Settings = Depends(get_app_settings)):
    token, user = auth_service.register_citizen(db, settings, payload.username, payload.password, payload.role)
    return {"token": token, "user": user}

@router.post("/register-authority", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_authority(payload: RegisterAuthorityRequest, db: Session = Depends(get_db), settings: Settings = Depends(get_app_settings)):
    token, user = auth_service.register_authority(db, settings, payload.username, payload.password)
    return {"token": token, "user": user}
