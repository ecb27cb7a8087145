"""Configuration management for Notelytic.

Every setting can come from the environment or a ``.env`` file in the
working directory.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_TRUE = ("true", "1", "yes", "on")
_FALSE = ("false", "0", "no", "off")


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable, treating an empty value as unset."""
    return os.getenv(key) or default


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer, falling back on bad input."""
    try:
        return int(os.environ[key])
    except (KeyError, ValueError):
        return default


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return default


def get_env_path(key: str, default: Path) -> Path:
    """Get environment variable as a path with ``~`` expanded."""
    value = get_env(key)
    return Path(value).expanduser() if value else default


def get_env_list(key: str, default: str) -> list[str]:
    """Get a comma-separated environment variable as a list of values."""
    raw = get_env(key, default) or ""
    return [item.strip() for item in raw.split(",") if item.strip()]


# Data directory (defaults to ~/.notelytic)
NOTELYTIC_DATA_DIR = get_env_path("NOTELYTIC_DATA_DIR", Path.home() / ".notelytic")
NOTELYTIC_DATA_DIR.mkdir(parents=True, exist_ok=True)

DATABASE_PATH = get_env_path("DATABASE_PATH", NOTELYTIC_DATA_DIR / "notelytic.db")

# Notebook rules
MAX_PINNED_NOTES = get_env_int("NOTELYTIC_MAX_PINNED", 3)
SEED_WELCOME_NOTES = get_env_bool("NOTELYTIC_SEED_WELCOME", True)

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO")

# API server
NOTELYTIC_API_KEY = get_env("NOTELYTIC_API_KEY")
NOTELYTIC_HOST = get_env("NOTELYTIC_HOST", "127.0.0.1")
NOTELYTIC_PORT = get_env_int("NOTELYTIC_PORT", 8430)
NOTELYTIC_ALLOW_NO_AUTH = get_env_bool("NOTELYTIC_ALLOW_NO_AUTH", False)
NOTELYTIC_CORS_ORIGINS = get_env_list(
    "NOTELYTIC_CORS_ORIGINS", "http://localhost:3000"
)


def setup_logging() -> logging.Logger:
    """Configure root logging from LOG_LEVEL and return the config logger."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, (LOG_LEVEL or "INFO").upper(), logging.INFO),
    )
    return logging.getLogger(__name__)


def validate_api_environment() -> tuple[bool, str]:
    """
    Check that the REST API can authenticate requests.

    Returns:
        (is_valid, message) - If not valid, message explains what's missing.
    """
    if not NOTELYTIC_API_KEY and not NOTELYTIC_ALLOW_NO_AUTH:
        return (
            False,
            "Missing NOTELYTIC_API_KEY - set it or NOTELYTIC_ALLOW_NO_AUTH=true",
        )
    return True, ""
