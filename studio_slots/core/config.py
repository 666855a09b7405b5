from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from the project root so it loads regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str

    # CORS
    cors_origins: str = "http://localhost:3000"

    # Studio wall clock. Catalog times are naive and read in this zone.
    studio_timezone: str = "Asia/Dubai"

    # Availability rules
    slot_buffer_minutes: int = 0  # prep/cleaning time appended to every reserving interval
    default_booking_duration_minutes: int = 120
    # Pending bookings (checkout never completed) stop holding capacity after this
    pending_hold_hours: int = 24
    housekeeping_interval_seconds: int = 60 * 60

    # Env
    env: str = "development"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
