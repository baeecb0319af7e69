import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

ORM_PEEWEE = "peewee"
ORM_SQLALCHEMY = "sqlalchemy"
ORM_MEMORY = "memory"
SUPPORTED_ORMS = (ORM_PEEWEE, ORM_SQLALCHEMY, ORM_MEMORY)

# uvicorn log levels and the stdlib level each one configures; "trace" has
# no stdlib counterpart.
LOG_LEVELS = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True, slots=True)
class Settings:
    orm: str = ORM_PEEWEE
    database_url: str = "sqlite:///tasks.db"
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = True
    log_level: str = "info"
    app_title: str = "Task Desk API"
    cors_origins: tuple[str, ...] = ("*",)
    cors_allow_credentials: bool = True
    cors_allow_methods: tuple[str, ...] = ("*",)
    cors_allow_headers: tuple[str, ...] = ("*",)

    @property
    def logging_level(self) -> int:
        return LOG_LEVELS[self.log_level]


def load_settings() -> Settings:
    """
    Reads the settings from the environment, after loading ``.env`` if present.

    Variables already set in the environment take precedence over ``.env``.

    Raises:
        ValueError: If ``ORM`` names an unsupported backend, ``LOG_LEVEL`` an
            unknown level or ``PORT`` is not a number.
    """
    load_dotenv()

    orm = os.getenv("ORM", ORM_PEEWEE).strip().lower()
    if orm not in SUPPORTED_ORMS:
        raise ValueError(f"Unsupported ORM '{orm}', expected one of {SUPPORTED_ORMS}")

    log_level = os.getenv("LOG_LEVEL", "info").strip().lower()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"Unsupported LOG_LEVEL '{log_level}', expected one of {tuple(LOG_LEVELS)}"
        )

    return Settings(
        orm=orm,
        database_url=os.getenv("DATABASE_URL", "sqlite:///tasks.db"),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=_as_bool(os.getenv("RELOAD", "true")),
        log_level=log_level,
        app_title=os.getenv("APP_TITLE", "Task Desk API"),
        cors_origins=tuple(_as_list(os.getenv("CORS_ORIGINS", "*"))),
        cors_allow_credentials=_as_bool(os.getenv("CORS_ALLOW_CREDENTIALS", "true")),
        cors_allow_methods=tuple(_as_list(os.getenv("CORS_ALLOW_METHODS", "*"))),
        cors_allow_headers=tuple(_as_list(os.getenv("CORS_ALLOW_HEADERS", "*"))),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
