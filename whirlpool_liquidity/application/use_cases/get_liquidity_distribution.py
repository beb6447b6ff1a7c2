from __future__ import annotations

import logging
import re

from whirlpool_liquidity.application.dto.liquidity_distribution import (
    GetLiquidityDistributionInput,
    GetLiquidityDistributionOutput,
    LiquidityDistributionPointOutput,
)
from whirlpool_liquidity.application.ports.liquidity_distribution_port import LiquidityDistributionPort
from whirlpool_liquidity.domain.exceptions import LiquidityDistributionInputError, PoolNotFoundError
from whirlpool_liquidity.domain.services.liquidity_sweep import compute_liquidity_distribution
from whirlpool_liquidity.domain.services.whirlpool_math import DEFAULT_PRICE_PRECISION


logger = logging.getLogger(__name__)

_BASE58_ADDRESS = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


class GetLiquidityDistributionUseCase:
    def __init__(
        self,
        *,
        distribution_port: LiquidityDistributionPort,
        validate_tick_arrays: bool = False,
        price_precision: int = DEFAULT_PRICE_PRECISION,
    ):
        self._distribution_port = distribution_port
        self._validate_tick_arrays = validate_tick_arrays
        self._price_precision = price_precision

    def execute(self, command: GetLiquidityDistributionInput) -> GetLiquidityDistributionOutput:
        pool_address = (command.pool_address or "").strip()
        if not _BASE58_ADDRESS.match(pool_address):
            raise LiquidityDistributionInputError("pool_address must be a base58 account address.")

        pool = self._distribution_port.get_pool_snapshot(pool_address=pool_address)
        if pool is None:
            raise PoolNotFoundError(f"Pool {pool_address} not found.")

        # Snapshot and tick arrays are separate reads and may come from different slots.
        tick_arrays = self._distribution_port.get_tick_arrays(pool_address=pool_address)

        distribution = compute_liquidity_distribution(
            tick_arrays,
            pool,
            validate=self._validate_tick_arrays,
            price_precision=self._price_precision,
        )

        logger.info(
            "liquidity_distribution: computed pool=%s tick_arrays=%s datapoints=%s current_tick=%s",
            pool_address,
            len(tick_arrays),
            len(distribution.datapoints),
            distribution.current_tick_index,
        )

        return GetLiquidityDistributionOutput(
            pool_address=pool_address,
            current_tick_index=distribution.current_tick_index,
            current_price=distribution.current_price,
            current_liquidity=distribution.current_liquidity,
            datapoints=[
                LiquidityDistributionPointOutput(
                    tick_index=item.tick_index,
                    price=item.price,
                    liquidity=item.liquidity,
                )
                for item in distribution.datapoints
            ],
        )
