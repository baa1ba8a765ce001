import logging
import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _log_level(value: str) -> str:
    level = value.strip().upper()
    # unknown names would make basicConfig raise
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    env: str = "development"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    seed_coupons: bool = False

    @property
    def is_development(self) -> bool:
        return self.env.lower() == "development"


def get_settings() -> Settings:
    return Settings(
        env=os.getenv("APP_ENV", "development"),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", 8000)),
        log_level=_log_level(os.getenv("LOG_LEVEL", "INFO")),
        seed_coupons=_as_bool(os.getenv("SEED_COUPONS", "false")),
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
