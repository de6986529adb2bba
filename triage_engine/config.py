from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False

    LOG_LEVEL: str = "INFO"

    # =================================================================
    # INVENTORY PLANNING SETTINGS
    # =================================================================
    REORDER_THRESHOLD: int = 3
    GENERIC_SUPPLIER_NAME: str = "Proveedor genérico"
    GENERIC_LEAD_TIME_DAYS: int = 3
    FALLBACK_LEAD_TIME_DAYS: int = 7

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        env_prefix="TRIAGE_",
        extra="ignore",
    )

    def log_level(self) -> str:
        """Effective log level; debug mode always wins."""
        if self.debug:
            return "DEBUG"
        return self.LOG_LEVEL.upper()


settings = Settings()
