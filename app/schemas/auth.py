from typing import Optional
from pydantic import BaseModel
from app.models.enums import UserRole

class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""

class RegisterRequest(BaseModel):
    username: str = ""
    password: str = ""
    # only the literal "authority" is honoured, anything else becomes "user"
    role: Optional[str] = None

class RegisterAuthorityRequest(BaseModel):
    username: str = ""
    password: str = ""

class PrincipalOut(BaseModel):
    id: int
    username: str = ""
    role: UserRole

class AuthResponse(BaseModel):
    token: str
    user: PrincipalOut
