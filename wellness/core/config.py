from typing import FrozenSet, List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import model_validator
from urllib.parse import quote_plus
from enum import Enum
import json


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


def _split_list(raw: Optional[str]) -> List[str]:
    """Accept a JSON list or a comma-separated string from the environment."""
    if not raw or not raw.strip():
        return []
    raw = raw.strip()
    if raw.startswith("["):
        try:
            return [str(x).strip() for x in json.loads(raw) if str(x).strip()]
        except (json.JSONDecodeError, TypeError):
            pass
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseSettings):
    # Environment Configuration
    ENVIRONMENT: Environment = Environment.DEVELOPMENT

    # Project Information
    PROJECT_NAME: str = "Wellness Backend"
    VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"

    # Server settings
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 4000

    # Database
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_DB: str = "savidha"
    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    # Security
    SECRET_KEY: Optional[str] = None
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Staff access
    NUTRITIONIST_ALLOWLIST: str = ""  # comma-separated or JSON list of emails
    ALLOW_PUBLIC_ADMIN_REGISTRATION: bool = False

    # CORS
    CORS_ORIGINS: str = "http://localhost:5173"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Follow-ups / feeds / uploads
    OVERDUE_AFTER_HOURS: int = 48
    ALERTS_LIST_LIMIT: int = 50
    MAX_PLAN_FILE_BYTES: int = 5 * 1024 * 1024

    @model_validator(mode="after")
    def _finalize_and_validate(self) -> "Settings":
        # Derive SQLALCHEMY_DATABASE_URI if not provided
        if not self.SQLALCHEMY_DATABASE_URI:
            user = self.POSTGRES_USER
            server = self.POSTGRES_SERVER
            if user and server:
                safe_user = quote_plus(user)
                if self.POSTGRES_PASSWORD:
                    safe_password = quote_plus(self.POSTGRES_PASSWORD)
                    self.SQLALCHEMY_DATABASE_URI = (
                        f"postgresql://{safe_user}:{safe_password}@{server}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
                    )
                else:
                    self.SQLALCHEMY_DATABASE_URI = (
                        f"postgresql://{safe_user}@{server}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
                    )
            else:
                # Local fallback so the app and scripts start without a Postgres server
                self.SQLALCHEMY_DATABASE_URI = "sqlite:///./wellness.db"

        if self.is_production and not self.SECRET_KEY:
            raise ValueError("SECRET_KEY is required in production")
        return self

    # Environment-specific properties
    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION

    @property
    def nutritionist_allowlist(self) -> FrozenSet[str]:
        return frozenset(e.lower() for e in _split_list(self.NUTRITIONIST_ALLOWLIST))

    @property
    def allowed_cors_origins(self) -> List[str]:
        return _split_list(self.CORS_ORIGINS)

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")


settings = Settings()
