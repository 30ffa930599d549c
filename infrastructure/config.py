"""Runtime configuration and logging setup"""
import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Settings read from HOTEL_* environment variables"""
    data_file: str = "hotel-data.json"
    strict_load: bool = False
    log_level: str = "INFO"

    # Staff authentication for the HTTP API
    secret_key: str = "change-me-hotel-reservation-secret"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=30, gt=0)
    admin_username: str = "admin"
    admin_password: str = "admin123"

    class Config:
        frozen = True


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@lru_cache()
def get_settings() -> Settings:
    """Build settings once per process, after reading an optional .env file"""
    load_dotenv()
    defaults = Settings()
    return Settings(
        data_file=os.getenv("HOTEL_DATA_FILE") or defaults.data_file,
        strict_load=_env_flag("HOTEL_STRICT_LOAD", defaults.strict_load),
        log_level=(os.getenv("HOTEL_LOG_LEVEL") or defaults.log_level).upper(),
        secret_key=os.getenv("HOTEL_SECRET_KEY") or defaults.secret_key,
        access_token_expire_minutes=int(
            os.getenv("HOTEL_ACCESS_TOKEN_EXPIRE_MINUTES") or defaults.access_token_expire_minutes
        ),
        admin_username=os.getenv("HOTEL_ADMIN_USERNAME") or defaults.admin_username,
        admin_password=os.getenv("HOTEL_ADMIN_PASSWORD") or defaults.admin_password,
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
