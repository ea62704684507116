from dataclasses import dataclass
from fastapi import Request
import os
from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Runtime configuration passed into create_app()"""
    database_url: str
    jwt_secret: str
    port: int = 3001
    cors_origin: str = "http://localhost:5173"
    token_ttl_seconds: int = 3600
    db_echo: bool = False
    log_level: str = "INFO"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """
    Build Settings from environment variables (and a .env file if present)

    Raises:
        ValueError: If DATABASE_URL or JWT_SECRET is not set
    """
    load_dotenv()

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise ValueError("DATABASE_URL environment variable is not set")

    jwt_secret = os.getenv("JWT_SECRET")
    if not jwt_secret:
        raise ValueError("JWT_SECRET environment variable is not set")

    return Settings(
        database_url=database_url,
        jwt_secret=jwt_secret,
        port=int(os.getenv("PORT", "3001")),
        cors_origin=os.getenv("CORS_ORIGIN", "http://localhost:5173").strip(),
        token_ttl_seconds=int(os.getenv("TOKEN_TTL_SECONDS", "3600")),
        db_echo=_env_flag("DB_ECHO"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def get_settings(request: Request) -> Settings:
    """Settings of the running app - used as FastAPI dependency"""
    return request.app.state.settings
