from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


TICK_ARRAY_SIZE = 88


@dataclass(frozen=True)
class TickRecord:
    liquidity_net: int
    liquidity_gross: int = 0
    initialized: bool = False


@dataclass(frozen=True)
class TickArray:
    start_tick_index: int
    ticks: tuple[TickRecord, ...]
    address: str | None = None

    def tick_index_at(self, offset: int, tick_spacing: int) -> int:
        return self.start_tick_index + offset * tick_spacing


@dataclass(frozen=True)
class PoolSnapshot:
    tick_spacing: int
    current_tick_index: int
    current_sqrt_price: int
    current_liquidity: int
    decimals_a: int
    decimals_b: int


@dataclass(frozen=True)
class LiquidityDistributionDataPoint:
    tick_index: int
    price: Decimal
    liquidity: int


@dataclass(frozen=True)
class LiquidityDistribution:
    current_tick_index: int
    current_price: Decimal
    current_liquidity: int
    datapoints: tuple[LiquidityDistributionDataPoint, ...]
