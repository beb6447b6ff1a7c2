from __future__ import annotations

from pydantic import BaseModel, Field


class LiquidityDistributionPointResponse(BaseModel):
    tick_index: int
    price: str = Field(..., description="Token B per token A at tick_index.")
    liquidity: str = Field(..., description="Active liquidity at and above tick_index.")


class LiquidityDistributionResponse(BaseModel):
    pool_address: str
    current_tick_index: int
    current_price: str = Field(..., description="Token B per token A, from the pool sqrt_price.")
    current_liquidity: str = Field(..., description="Active liquidity reported by the pool account.")
    datapoints: list[LiquidityDistributionPointResponse]
