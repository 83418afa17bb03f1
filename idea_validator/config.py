from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
import logging

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    # Provider keys, checked in this order
    together_api_key: str = ""
    groq_api_key: str = ""
    provider_timeout: float = 60.0

    # App
    frontend_url: str = "http://localhost:5173"
    allowed_hosts: list[str] = []
    log_level: str = "INFO"
    debug: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def missing_provider_keys(self) -> list[str]:
        keys = {"TOGETHER_API_KEY": self.together_api_key, "GROQ_API_KEY": self.groq_api_key}
        return [name for name, value in keys.items() if not value.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Set up root logging once per process. Unknown level names fall back to INFO."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        logger.warning(f"Unknown LOG_LEVEL {settings.log_level!r}, using INFO.")
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
