from typing import Optional, Union
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, PostgresDsn, ValidationInfo, field_validator
from pathlib import Path

# Define the root directory of the carbon_tracker service
SERVICE_ROOT_DIR = Path(__file__).parent.parent.resolve()
# Path to the repository root (two levels up from this settings.py)
PROJECT_ROOT_DIR = SERVICE_ROOT_DIR.parent


def _split_csv(value: Union[str, list[str]]) -> list[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(',') if item.strip()]
    return value


class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "CarbonTrackerService"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Security settings
    ALLOWED_HOSTS: Union[str, list[str]] = "localhost,127.0.0.1,0.0.0.0"
    CORS_ORIGINS: Union[str, list[str]] = "http://localhost:8501"
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: Union[str, list[str]] = "GET,POST"
    CORS_ALLOW_HEADERS: Union[str, list[str]] = "*"

    # Database settings
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "user"
    DB_PASSWORD: str = "password"
    DB_NAME: str = "carbon_tracker_db"
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("DATABASE_URL", mode='before')
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        if isinstance(v, str) and v:
            return v
        return str(PostgresDsn.build(
            scheme="postgresql+asyncpg",
            username=info.data.get("DB_USER"),
            password=info.data.get("DB_PASSWORD"),
            host=info.data.get("DB_HOST"),
            port=info.data.get("DB_PORT"),
            path=info.data.get("DB_NAME") or "",
        ))

    # Session / authentication settings
    SESSION_SECRET_KEY: str = "change-me-in-production-please-use-a-long-random-value"
    SESSION_ALGORITHM: str = "HS256"
    SESSION_TTL_MINUTES: int = 60 * 24 * 30
    SESSION_COOKIE_NAME: str = "carbon_session"
    SESSION_COOKIE_SECURE: bool = False
    PASSWORD_HASH_ROUNDS: int = 12

    # Route gating
    SIGN_IN_PATH: str = "/auth/signin"
    GATING_EXCLUDED_PREFIXES: Union[str, list[str]] = (
        "/api,/static,/docs,/redoc,/openapi.json,/favicon.ico,/health"
    )

    # Streamlit dashboard the /dashboard page points at
    DASHBOARD_URL: str = "http://localhost:8501"

    # Create tables on startup instead of relying on alembic (local development only)
    AUTO_CREATE_TABLES: bool = False

    # Logging configuration path (can be overridden by env var)
    LOGGING_CONFIG_PATH: str = str(SERVICE_ROOT_DIR / "config" / "logging_config.yaml")
    LOG_FORMAT: str = "text"  # "text" or "json"

    def model_post_init(self, __context) -> None:
        """Parse comma-separated strings into lists after model initialization."""
        self.ALLOWED_HOSTS = _split_csv(self.ALLOWED_HOSTS)
        self.CORS_ORIGINS = _split_csv(self.CORS_ORIGINS)
        self.CORS_ALLOW_METHODS = _split_csv(self.CORS_ALLOW_METHODS)
        self.GATING_EXCLUDED_PREFIXES = _split_csv(self.GATING_EXCLUDED_PREFIXES)

        if isinstance(self.CORS_ALLOW_HEADERS, str):
            if self.CORS_ALLOW_HEADERS == "*":
                self.CORS_ALLOW_HEADERS = ["*"]
            else:
                self.CORS_ALLOW_HEADERS = _split_csv(self.CORS_ALLOW_HEADERS)

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT_DIR / ".env"),  # Load variables from project root .env
        env_file_encoding='utf-8',
        extra='ignore'
    )


# Instantiate settings
settings = Settings()
