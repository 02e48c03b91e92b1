import os
import re
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env early so env vars are available for YAML interpolation
_env_file = Path(__file__).parent.parent / ".env"
load_dotenv(_env_file)

ENV_VAR_PATTERN = re.compile(r"\$([A-Z_][A-Z0-9_]*)")


def interpolate_env_vars(value):
    """Recursively replace $VAR_NAME with os.environ values."""
    if isinstance(value, str):

        def replace(match):
            var = match.group(1)
            val = os.environ.get(var)
            if val is None:
                raise ValueError(f"Environment variable ${var} not set")
            return val

        return ENV_VAR_PATTERN.sub(replace, value)
    elif isinstance(value, dict):
        return {k: interpolate_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


def get_config_path() -> Path:
    """Path of the optional app.yaml, overridable with WIKIREV_CONFIG."""
    override = os.environ.get("WIKIREV_CONFIG")
    if override:
        return Path(override)
    return Path.cwd() / "app.yaml"


def load_app_config() -> dict:
    """Load and parse app.yaml with environment variable interpolation."""
    config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"app.yaml not found at {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    return interpolate_env_vars(config)


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    url: str = "sqlite+aiosqlite:///./wiki.db"
    pool_size: int = 5
    pool_overflow: int = 10
    pool_timeout: int = 30
    pool_pre_ping: bool = True
    echo: bool = False
    # Create tables on startup instead of relying on migrations (dev/test only)
    create_all: bool = False


class LogfireConfig(BaseModel):
    """Pydantic Logfire observability configuration."""

    enabled: bool = False
    service_name: str = "wikirev"
    environment: str | None = None
    sample_rate: float = 1.0
    console: bool = False


class LoggingConfig(BaseModel):
    """Stdlib logging configuration used by the CLI."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AuthConfig(BaseModel):
    """Bearer token configuration."""

    token_max_age: int = 7 * 24 * 3600


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    debug: bool = False
    secret_key: str

    db: DatabaseConfig = DatabaseConfig()
    auth: AuthConfig = AuthConfig()
    logfire: LogfireConfig = LogfireConfig()
    logging: LoggingConfig = LoggingConfig()


_SECTIONS = {
    "db": DatabaseConfig,
    "auth": AuthConfig,
    "logfire": LogfireConfig,
    "logging": LoggingConfig,
}


@lru_cache
def get_settings() -> Settings:
    """Load settings from .env and app.yaml."""
    base_settings = Settings()

    try:
        app_config = load_app_config()
    except FileNotFoundError:
        return base_settings

    updates = {
        key: section(**app_config[key])
        for key, section in _SECTIONS.items()
        if key in app_config
    }

    if updates:
        return base_settings.model_copy(update=updates)

    return base_settings
