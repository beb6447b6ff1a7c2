from __future__ import annotations

from collections.abc import Iterable, Sequence

from whirlpool_liquidity.domain.entities.liquidity_distribution import (
    LiquidityDistribution,
    LiquidityDistributionDataPoint,
    PoolSnapshot,
    TickArray,
)
from whirlpool_liquidity.domain.exceptions import LiquidityUnderflowError
from whirlpool_liquidity.domain.services.tick_array_assembler import (
    assemble_tick_arrays,
    validate_tick_arrays,
)
from whirlpool_liquidity.domain.services.whirlpool_math import (
    DEFAULT_PRICE_PRECISION,
    sqrt_price_x64_to_price,
    tick_to_price,
)


def sweep_liquidity(
    tick_arrays: Sequence[TickArray],
    pool: PoolSnapshot,
    *,
    price_precision: int = DEFAULT_PRICE_PRECISION,
) -> LiquidityDistribution:
    """
    Walk the tick axis left to right, adding each liquidity_net to a running total.

    `tick_arrays` must already be sorted by start_tick_index. Only ticks with a
    non-zero liquidity_net produce a datapoint; its liquidity is the active
    liquidity at and above that tick. The current tick/price/liquidity come
    straight from `pool` and are not reconciled with the sweep.
    """
    datapoints: list[LiquidityDistributionDataPoint] = []
    liquidity = 0
    for tick_array in tick_arrays:
        for offset, tick in enumerate(tick_array.ticks):
            if tick.liquidity_net == 0:
                continue

            tick_index = tick_array.tick_index_at(offset, pool.tick_spacing)
            liquidity += tick.liquidity_net
            if liquidity < 0:
                raise LiquidityUnderflowError(
                    f"Liquidity went negative ({liquidity}) at tick {tick_index}."
                )

            datapoints.append(
                LiquidityDistributionDataPoint(
                    tick_index=tick_index,
                    price=tick_to_price(
                        tick_index,
                        pool.decimals_a,
                        pool.decimals_b,
                        precision=price_precision,
                    ),
                    liquidity=liquidity,
                )
            )

    return LiquidityDistribution(
        current_tick_index=pool.current_tick_index,
        current_price=sqrt_price_x64_to_price(
            pool.current_sqrt_price,
            pool.decimals_a,
            pool.decimals_b,
            precision=price_precision,
        ),
        current_liquidity=pool.current_liquidity,
        datapoints=tuple(datapoints),
    )


def compute_liquidity_distribution(
    records: Iterable[TickArray],
    pool: PoolSnapshot,
    *,
    validate: bool = False,
    price_precision: int = DEFAULT_PRICE_PRECISION,
) -> LiquidityDistribution:
    tick_arrays = assemble_tick_arrays(records)
    if validate:
        validate_tick_arrays(tick_arrays, tick_spacing=pool.tick_spacing)
    return sweep_liquidity(tick_arrays, pool, price_precision=price_precision)
