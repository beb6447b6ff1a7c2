from __future__ import annotations

from functools import lru_cache

from whirlpool_liquidity.application.use_cases.get_liquidity_distribution import (
    GetLiquidityDistributionUseCase,
)
from whirlpool_liquidity.infrastructure.accounts.repositories.rpc_liquidity_distribution_repository import (
    RpcLiquidityDistributionRepository,
)
from whirlpool_liquidity.infrastructure.clients.solana_rpc_client import (
    SolanaRpcClient,
    SolanaRpcClientSettings,
)
from whirlpool_liquidity.shared.config import get_settings


@lru_cache(maxsize=1)
def _get_solana_rpc_client() -> SolanaRpcClient:
    settings = get_settings()
    return SolanaRpcClient(
        SolanaRpcClientSettings(
            rpc_url=settings.solana_rpc_url,
            commitment=settings.solana_rpc_commitment,
            timeout_seconds=settings.solana_rpc_timeout_seconds,
            max_retries=settings.solana_rpc_max_retries,
            min_interval_ms=settings.solana_rpc_min_interval_ms,
        )
    )


def get_liquidity_distribution_use_case() -> GetLiquidityDistributionUseCase:
    settings = get_settings()
    return GetLiquidityDistributionUseCase(
        distribution_port=RpcLiquidityDistributionRepository(
            _get_solana_rpc_client(),
            program_id=settings.whirlpool_program_id,
        ),
        validate_tick_arrays=settings.validate_tick_arrays,
        price_precision=settings.price_precision,
    )
