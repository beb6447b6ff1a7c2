from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from whirlpool_liquidity.api.deps import get_liquidity_distribution_use_case
from whirlpool_liquidity.api.schemas.liquidity_distribution import (
    LiquidityDistributionPointResponse,
    LiquidityDistributionResponse,
)
from whirlpool_liquidity.application.dto.liquidity_distribution import GetLiquidityDistributionInput
from whirlpool_liquidity.application.use_cases.get_liquidity_distribution import (
    GetLiquidityDistributionUseCase,
)
from whirlpool_liquidity.domain.exceptions import (
    LiquidityDistributionInputError,
    LiquidityUnderflowError,
    PoolDataSourceError,
    PoolNotFoundError,
    TickArrayLayoutError,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/v1/whirlpools/{pool_address}/liquidity-distribution",
    response_model=LiquidityDistributionResponse,
)
def get_liquidity_distribution(
    pool_address: str,
    use_case: GetLiquidityDistributionUseCase = Depends(get_liquidity_distribution_use_case),
):
    try:
        result = use_case.execute(GetLiquidityDistributionInput(pool_address=pool_address))
    except LiquidityDistributionInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PoolNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (PoolDataSourceError, TickArrayLayoutError, LiquidityUnderflowError) as exc:
        logger.warning(
            "liquidity_distribution_router: upstream_data_error pool=%s error=%s detail=%s",
            pool_address,
            type(exc).__name__,
            exc,
        )
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return LiquidityDistributionResponse(
        pool_address=result.pool_address,
        current_tick_index=result.current_tick_index,
        current_price=str(result.current_price),
        current_liquidity=str(result.current_liquidity),
        datapoints=[
            LiquidityDistributionPointResponse(
                tick_index=item.tick_index,
                price=str(item.price),
                liquidity=str(item.liquidity),
            )
            for item in result.datapoints
        ],
    )
