from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Network
    network_id: str = Field(default="testnet", description="Network id handed to the signer")
    node_url: str = Field(
        default="https://rpc.testnet.near.org",
        description="JSON-RPC endpoint of the ledger node",
    )
    request_timeout_seconds: float = Field(default=30.0, description="HTTP request timeout")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    near_no_logs: bool = Field(
        default=False,
        description="Suppress receipt logs, failures and retry warnings",
        validation_alias=AliasChoices("near_no_logs", "NEAR_NO_LOGS"),
    )

    # Transaction nonce retries
    tx_nonce_retry_number: int = Field(
        default=12,
        ge=1,
        description="Attempts with a fresh nonce/block hash before giving up on a transaction",
    )
    tx_nonce_retry_wait_ms: int = Field(default=500, ge=0, description="Wait before the first retry")
    tx_nonce_retry_wait_backoff: float = Field(
        default=1.5,
        ge=1.0,
        description="Exponential back off applied to the retry wait",
    )

    # Provider transport retries
    request_retry_number: int = Field(default=12, ge=1, description="Attempts per JSON-RPC request")
    request_retry_wait_ms: int = Field(default=500, ge=0, description="Wait before the first request retry")
    request_retry_wait_backoff: float = Field(default=1.5, ge=1.0, description="Request retry back off")

    def model_post_init(self, __context: Any) -> None:
        super().model_post_init(__context)
        self.network_id = self.network_id.strip() or "testnet"

    @property
    def emit_logs(self) -> bool:
        return not self.near_no_logs


# Global settings instance
settings = Settings()
