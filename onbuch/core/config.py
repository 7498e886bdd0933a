from pydantic_settings import BaseSettings
from pydantic import AnyHttpUrl
from typing import List, Optional


class Settings(BaseSettings):
    ENV: str = "development"
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    ALGORITHM: str = "HS256"

    CORS_ORIGINS: List[AnyHttpUrl] = []

    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = None

    # Fallback when no key is stored in settings/apiKeys
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.0-flash"

    ADMIN_EMAILS: List[str] = []

    class Config:
        env_file = ".env"

settings = Settings()
