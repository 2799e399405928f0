from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Ethereum JSON-RPC node
    rpc_url: str = "https://cloudflare-eth.com"
    rpc_timeout_seconds: float = 10.0

    # Scan window (number of trailing blocks)
    default_block_range: int = 1
    max_block_range: int = 100

    # Address matching against tx from/to
    match_case_sensitive: bool = True

    # Reject subscriptions that are not 0x + 40 hex chars
    validate_addresses: bool = True

    # Server
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
