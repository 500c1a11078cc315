"""castdesk configuration via pydantic-settings."""

import warnings
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_SECRET_KEY = "insecure-dev-key-change-me"


class CastdeskSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CASTDESK_")

    environment: str = "development"
    secret_key: str = _INSECURE_SECRET_KEY

    # Database
    db_url: str = "sqlite+aiosqlite:///./data/castdesk.db"
    db_echo: bool = False

    # API
    api_title: str = "castdesk"
    api_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 8080
    api_prefix: str = "/api"
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # Session cookie
    session_cookie_name: str = "castdesk_session"
    session_max_age: int = 30 * 24 * 3600  # 30 days

    @property
    def is_sqlite(self) -> bool:
        return self.db_url.startswith("sqlite")

    def validate_for_production(self) -> None:
        """Raise if the default secret key is used outside development."""
        if self.secret_key != _INSECURE_SECRET_KEY:
            return

        if self.environment != "development":
            raise RuntimeError(
                f"Insecure default secret key detected in '{self.environment}' environment. "
                "Set CASTDESK_SECRET_KEY to a secure value. "
                "Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(48))\""
            )

        warnings.warn(
            "Using insecure default secret key, set CASTDESK_SECRET_KEY for production",
            UserWarning,
            stacklevel=2,
        )


@lru_cache
def get_settings() -> CastdeskSettings:
    settings = CastdeskSettings()
    settings.validate_for_production()
    return settings
