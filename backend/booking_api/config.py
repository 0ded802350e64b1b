# backend/booking_api/config.py

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repository root


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/booking.db"
    redis_url: Optional[str] = None

    # Admin back office
    admin_password: Optional[str] = None
    session_secret: Optional[str] = None
    admin_session_ttl_seconds: int = 7 * 24 * 60 * 60

    # Slots
    default_service_duration_minutes: int = 60
    reject_unknown_service: bool = False
    occupancy_mode: Literal["exact", "interval"] = "exact"

    seed_on_startup: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # Relative sqlite path -> absolute, anchored at the repo root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
