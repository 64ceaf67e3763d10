from pathlib import Path
from typing import Any, Dict, List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ETH_BRIDGE_",
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def model_post_init(self, __context: Any) -> None:
        """Resolve relative paths against the working directory the CLI runs from."""

        super().model_post_init(__context)

        if not self.keys_file.is_absolute():
            object.__setattr__(self, "keys_file", Path.cwd() / self.keys_file)
        if not self.log_dir.is_absolute():
            object.__setattr__(self, "log_dir", Path.cwd() / self.log_dir)

    # Files
    keys_file: Path = Field(
        default=Path("config/pk.txt"),
        description="Newline-delimited private keys, one wallet per line",
        validation_alias=AliasChoices("eth_bridge_keys_file", "private_keys_file", "PK_FILE"),
    )
    log_dir: Path = Field(default=Path("logs"), description="Directory for dated log files")
    log_level: str = Field(default="INFO", description="Logging level")

    # Relay API
    relay_testnet_url: str = Field(
        default="https://api.testnets.relay.link",
        description="Relay API base URL used for testnet bridges",
    )
    relay_mainnet_url: str = Field(
        default="https://api.relay.link",
        description="Relay API base URL used for mainnet bridges",
    )
    relay_source: str = Field(default="eth-bridge", description="Referrer sent with Relay quotes")
    request_timeout_seconds: int = Field(default=20, description="Relay HTTP request timeout")

    # RPC
    rpc_timeout_seconds: int = Field(default=10, description="JSON-RPC request timeout")
    receipt_timeout_seconds: int = Field(
        default=300,
        ge=1,
        description="Max seconds to wait for an origin transaction receipt",
    )
    extra_rpcs: Dict[int, List[str]] = Field(
        default_factory=dict,
        description="Additional RPC candidates per chain id, tried before the built-in ones",
    )

    # Status polling
    status_poll_interval_seconds: float = Field(
        default=3.0,
        ge=0,
        description="Fixed delay between bridge status polls",
    )
    status_poll_max_attempts: int = Field(
        default=100,
        ge=1,
        description="Status poll attempt budget before giving up",
    )

    def relay_base_url(self, is_testnet: bool) -> str:
        url = self.relay_testnet_url if is_testnet else self.relay_mainnet_url
        return url.rstrip("/")


# Global settings instance
settings = Settings()
