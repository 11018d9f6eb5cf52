from typing import Annotated, List
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    # Database (single-file SQLite by default, postgresql+psycopg2://... in prod)
    DATABASE_URL: str = "sqlite:///./civic_reports.db"

    # Auth / JWT
    JWT_SECRET: str = "CHANGE_ME_DEV_SECRET"
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 12

    # CORS (CSV in .env: http://localhost:5173,http://127.0.0.1:5173)
    CORS_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    # Uploads
    UPLOAD_DIR: str = "uploads"

    # Reports
    STRICT_STATUS_TRANSITIONS: bool = False
    SEED_DEFAULTS: bool = True

    # Debug
    DEBUG_AUTH: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _split_cors(cls, v):
        if v is None or v == "":
            return []
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v


def get_settings() -> Settings:
    return Settings()
