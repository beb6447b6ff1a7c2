from __future__ import annotations

from decimal import Decimal

from fastapi.testclient import TestClient

from whirlpool_liquidity.api.deps import get_liquidity_distribution_use_case
from whirlpool_liquidity.application.dto.liquidity_distribution import (
    GetLiquidityDistributionOutput,
    LiquidityDistributionPointOutput,
)
from whirlpool_liquidity.domain.exceptions import (
    LiquidityDistributionInputError,
    LiquidityUnderflowError,
    PoolDataSourceError,
    PoolNotFoundError,
    TickArrayLayoutError,
)
from whirlpool_liquidity.main import app


POOL_ADDRESS = "HJPjoWUrhoZzkNfRpHuieeFk9WcZWjwy6PBjZ81ngndJ"


class FakeGetLiquidityDistributionUseCase:
    def __init__(self, error: Exception | None = None):
        self._error = error
        self.commands = []

    def execute(self, command):
        self.commands.append(command)
        if self._error is not None:
            raise self._error
        return GetLiquidityDistributionOutput(
            pool_address=command.pool_address,
            current_tick_index=700,
            current_price=Decimal("1.5"),
            current_liquidity=2**100,
            datapoints=[
                LiquidityDistributionPointOutput(tick_index=640, price=Decimal("1.066"), liquidity=500),
                LiquidityDistributionPointOutput(tick_index=5632, price=Decimal("1.756"), liquidity=0),
            ],
        )


def _get(use_case: FakeGetLiquidityDistributionUseCase, address: str = POOL_ADDRESS):
    app.dependency_overrides[get_liquidity_distribution_use_case] = lambda: use_case
    try:
        client = TestClient(app)
        return client.get(f"/v1/whirlpools/{address}/liquidity-distribution")
    finally:
        app.dependency_overrides.clear()


def test_router_returns_distribution_with_string_numbers():
    use_case = FakeGetLiquidityDistributionUseCase()

    response = _get(use_case)

    assert response.status_code == 200
    payload = response.json()
    assert payload == {
        "pool_address": POOL_ADDRESS,
        "current_tick_index": 700,
        "current_price": "1.5",
        "current_liquidity": str(2**100),
        "datapoints": [
            {"tick_index": 640, "price": "1.066", "liquidity": "500"},
            {"tick_index": 5632, "price": "1.756", "liquidity": "0"},
        ],
    }
    assert use_case.commands[0].pool_address == POOL_ADDRESS


def test_router_maps_domain_errors_to_status_codes():
    assert _get(FakeGetLiquidityDistributionUseCase(LiquidityDistributionInputError("bad"))).status_code == 400
    assert _get(FakeGetLiquidityDistributionUseCase(PoolNotFoundError("missing"))).status_code == 404

    response = _get(FakeGetLiquidityDistributionUseCase(PoolDataSourceError("rpc down")))
    assert response.status_code == 502
    assert response.json() == {"detail": "rpc down"}


def test_router_maps_sweep_invariant_errors_to_bad_gateway():
    layout = _get(FakeGetLiquidityDistributionUseCase(TickArrayLayoutError("tick array overlaps")))
    assert layout.status_code == 502
    assert layout.json() == {"detail": "tick array overlaps"}

    underflow = _get(FakeGetLiquidityDistributionUseCase(LiquidityUnderflowError("negative liquidity")))
    assert underflow.status_code == 502
    assert underflow.json() == {"detail": "negative liquidity"}
