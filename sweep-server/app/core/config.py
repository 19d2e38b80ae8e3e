"""Application configuration using pydantic settings with structured sections."""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24


class LedgerSettings(BaseModel):
    rpc_url: str = "https://api.mainnet-beta.solana.com"
    commitment: Literal["processed", "confirmed", "finalized"] = "confirmed"
    timeout_seconds: float = 10.0
    confirm_transfers: bool = False


class SweepSettings(BaseModel):
    destination: Optional[str] = None
    retention_fraction: Decimal = Field(default=Decimal("0.05"), gt=0, lt=1)


class CustodySettings(BaseModel):
    keys_dir: Path = Field(default=Path("storage/custody"))


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    log_level: str = "INFO"
    project_name: str = "Custodial Sweep Server"
    api_prefix: str = "/api"
    cors_origins: list[str] = Field(default_factory=list)

    server: ServerSettings = ServerSettings()
    security: SecuritySettings = SecuritySettings()
    ledger: LedgerSettings = LedgerSettings()
    sweep: SweepSettings = SweepSettings()
    custody: CustodySettings = CustodySettings()

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

    @property
    def custody_keys_dir(self) -> Path:
        return self.custody.keys_dir


@lru_cache()
def get_settings() -> Settings:
    return Settings()
