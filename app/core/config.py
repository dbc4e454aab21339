from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from app.core.validators import is_hhmm


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    APP_ENV: str = "dev"  # dev|prod|test
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    # comma-separated, e.g. "http://localhost:3000,https://admin.example.com"
    CORS_ORIGINS: str = "http://localhost:3000"

    # Business
    BUSINESS_NAME: str = "Brooklin Pub"
    # IANA zone of the venue; wall-clock "now" is always read here, never in the host zone
    BUSINESS_TIMEZONE: str = "America/Toronto"
    # Placeholder hours when the stored schedule cannot be loaded
    DEFAULT_OPEN_TIME: str = "11:00"
    DEFAULT_CLOSE_TIME: str = "23:00"

    # Database
    POSTGRES_HOST: str = "postgres"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "pubadmin"
    POSTGRES_USER: str = "pubadmin"
    POSTGRES_PASSWORD: str = "pubadmin"
    # Optional: full database URL override (e.g., sqlite:///./test.db). When set, it takes precedence.
    DATABASE_URL_OVERRIDE: str = ""
    DB_ECHO: bool = False  # log every SQL statement (debug only)

    # Auth
    AUTH_JWT_SECRET: str = "changeme"
    AUTH_JWT_EXPIRE_MINUTES: int = 60
    AUTH_SEED_ADMIN_EMAIL: str = ""
    AUTH_SEED_ADMIN_PASSWORD: str = ""

    @field_validator("BUSINESS_TIMEZONE")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone: {v}") from e
        return v

    @field_validator("DEFAULT_OPEN_TIME", "DEFAULT_CLOSE_TIME")
    @classmethod
    def _hhmm(cls, v: str) -> str:
        if not is_hhmm(v):
            raise ValueError("expected HH:mm")
        return v

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def business_tz(self) -> ZoneInfo:
        return ZoneInfo(self.BUSINESS_TIMEZONE)

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore


settings = get_settings()
