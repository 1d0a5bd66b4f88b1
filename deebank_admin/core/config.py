# deebank_admin/core/config.py
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    PROJECT_NAME: str = "deeBank Admin"
    API_V1_STR: str = "/api/v1"

    # Database (the platform's backend Postgres)
    DATABASE_URL: str

    # Bearer tokens are issued by the identity provider
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    DEFAULT_ADMIN_NAME: str = "Admin Master"

    # Transaction review
    WITHDRAWAL_FEE_RATE: float = 0.10
    RECENT_ACTIVITY_LIMIT: int = 20
    MAX_RECENT_ACTIVITY_LIMIT: int = 200
    SETTLEMENT_VERSION_CHECK: bool = True

    # Angola (WAT) has no daylight saving
    LOCAL_UTC_OFFSET_HOURS: int = 1

    # Company accounts
    DEFAULT_BENEFICIARY: str = "DEEPBANK LDA"

    # Messages
    DEFAULT_LANGUAGE: str = "pt"
    AUDIT_LANGUAGE: str = "pt"

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    DEBUG: bool = False

    class Config:
        env_file = ".env"


settings = Settings()
