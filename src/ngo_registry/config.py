# src/ngo_registry/config.py
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",            # auto-load .env (optional; process env wins)
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database (DATABASE_URL wins over the individual components)
    DATABASE_URL: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_HOST: str = "127.0.0.1"
    DB_PORT: str = "5432"
    DB_NAME: Optional[str] = None
    DB_DRIVER: str = "postgresql+asyncpg"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_TIMEOUT: int = 30

    TIMEZONE: str = "Africa/Dakar"

    # Intervention zones
    ZONE_RESOLUTION_MODE: Literal["lenient", "strict"] = "lenient"
    ZONE_ATOMIC_WRITES: bool = True       # one transaction for delete + 3 passes
    ZONE_ROOT_COUNTRY: str = "Sénégal"    # only country with sub-levels

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"{self.DB_DRIVER}://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

settings = Settings()
