"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./freightdesk.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="change-me-please", min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    reset_token_expire_minutes: int = 30


class CarrierSettings(BaseModel):
    """RapidDeals shipment API."""

    base_url: str = "https://ship.rapiddeals.com/api/shipment"
    api_id: str = ""
    api_key: str = ""
    timeout: float = 30.0
    quote_retries: int = 3
    results_retries: int = 2
    retry_delay: float = 2.0
    poll_attempts: int = 3
    poll_interval: float = 4.0
    mock: bool = False

    @property
    def configured(self) -> bool:
        return bool(self.api_id and self.api_key)


class FedexSettings(BaseModel):
    base_url: str = "https://apis.fedex.com"
    client_id: str = ""
    client_secret: str = ""
    timeout: float = 15.0

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret)


class BalanceSettings(BaseModel):
    currency: str = "USD"
    admin_reset_cents: int = 200_000
    customer_reset_cents: int = 100_000


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"
    project_name: str = "FreightDesk"
    api_prefix: str = "/api"
    cors_origins: list[str] = ["*"]

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    carrier: CarrierSettings = CarrierSettings()
    fedex: FedexSettings = FedexSettings()
    balances: BalanceSettings = BalanceSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def access_token_expire_minutes(self) -> int:
        return self.security.access_token_expire_minutes


@lru_cache()
def get_settings() -> Settings:
    return Settings()
