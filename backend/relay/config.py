"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - CLIENT_ID and CONSUMER_SECRET have no defaults: Settings() fails without them
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Env var names kept from the original deployment (CLIENT_ID, CONSUMER_SECRET)
    - SecretStr for consumer secret and admin token: masked in repr and logs
"""

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


try:
    APP_VERSION = version("snaptrade-relay")
except PackageNotFoundError:  # running from a source checkout
    APP_VERSION = "0.0.0"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # SnapTrade
    client_id: str
    consumer_secret: SecretStr
    snaptrade_base_url: str = "https://api.snaptrade.com/api/v1"
    snaptrade_timeout_seconds: float = 30.0

    # API
    relay_api_prefix: str = "/api/snaptrade"
    cors_origins: list[str] = ["*"]
    admin_token: SecretStr | None = None

    # Server
    host: str = "0.0.0.0"  # nosec B104
    port: int = 4000
    port_retry_limit: int = 10

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("client_id")
    @classmethod
    def client_id_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("CLIENT_ID cannot be empty")
        return v.strip()

    @field_validator("consumer_secret")
    @classmethod
    def consumer_secret_not_blank(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("CONSUMER_SECRET cannot be empty")
        return v

    @field_validator("admin_token", mode="before")
    @classmethod
    def blank_admin_token_is_unset(cls, v):
        """An empty ADMIN_TOKEN disables admin routes, same as leaving it unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("relay_api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        v = v.strip().strip("/")
        return f"/{v}" if v else ""


@lru_cache
def get_settings() -> Settings:
    return Settings()
