from __future__ import annotations

from typing import Protocol

from whirlpool_liquidity.domain.entities.liquidity_distribution import PoolSnapshot, TickArray


class LiquidityDistributionPort(Protocol):
    def get_pool_snapshot(self, *, pool_address: str) -> PoolSnapshot | None:
        ...

    def get_tick_arrays(self, *, pool_address: str) -> list[TickArray]:
        ...
