from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _bool(name: str, default: str = "false") -> bool:
    return str(_env(name, default)).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    solana_rpc_url: str
    solana_rpc_commitment: str
    solana_rpc_timeout_seconds: float
    solana_rpc_max_retries: int
    solana_rpc_min_interval_ms: int
    whirlpool_program_id: str
    validate_tick_arrays: bool
    price_precision: int


def get_settings() -> Settings:
    price_precision = int(_env("PRICE_PRECISION", "40"))
    if price_precision < 1:
        raise ValueError("PRICE_PRECISION must be >= 1.")

    return Settings(
        solana_rpc_url=_env("SOLANA_RPC_URL", "https://api.mainnet-beta.solana.com"),
        solana_rpc_commitment=_env("SOLANA_RPC_COMMITMENT", "confirmed"),
        solana_rpc_timeout_seconds=float(_env("SOLANA_RPC_TIMEOUT_SECONDS", "30")),
        solana_rpc_max_retries=int(_env("SOLANA_RPC_MAX_RETRIES", "3")),
        solana_rpc_min_interval_ms=int(_env("SOLANA_RPC_MIN_INTERVAL_MS", "0")),
        whirlpool_program_id=_env("WHIRLPOOL_PROGRAM_ID", "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc"),
        validate_tick_arrays=_bool("VALIDATE_TICK_ARRAYS"),
        price_precision=price_precision,
    )
