from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class GetLiquidityDistributionInput:
    pool_address: str


@dataclass(frozen=True)
class LiquidityDistributionPointOutput:
    tick_index: int
    price: Decimal
    liquidity: int


@dataclass(frozen=True)
class GetLiquidityDistributionOutput:
    pool_address: str
    current_tick_index: int
    current_price: Decimal
    current_liquidity: int
    datapoints: list[LiquidityDistributionPointOutput]
