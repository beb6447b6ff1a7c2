from __future__ import annotations

from decimal import Decimal
import random

import pytest

from whirlpool_liquidity.domain.entities.liquidity_distribution import (
    TICK_ARRAY_SIZE,
    PoolSnapshot,
    TickArray,
    TickRecord,
)
from whirlpool_liquidity.domain.exceptions import LiquidityUnderflowError, TickArrayLayoutError
from whirlpool_liquidity.domain.services.liquidity_sweep import (
    compute_liquidity_distribution,
    sweep_liquidity,
)
from whirlpool_liquidity.domain.services.whirlpool_math import sqrt_price_x64_to_price, tick_to_price


TICK_SPACING = 64
SPAN = TICK_SPACING * TICK_ARRAY_SIZE


def _pool(**overrides) -> PoolSnapshot:
    values = {
        "tick_spacing": TICK_SPACING,
        "current_tick_index": 1000,
        "current_sqrt_price": 2**64,
        "current_liquidity": 777,
        "decimals_a": 9,
        "decimals_b": 6,
    }
    values.update(overrides)
    return PoolSnapshot(**values)


def _array(start_tick_index: int, deltas: dict[int, int]) -> TickArray:
    return TickArray(
        start_tick_index=start_tick_index,
        ticks=tuple(TickRecord(liquidity_net=deltas.get(i, 0)) for i in range(TICK_ARRAY_SIZE)),
    )


class TestSweepLiquidity:
    def test_two_arrays_open_and_close_a_position(self):
        arrays = [_array(0, {10: 500}), _array(SPAN, {0: -500})]

        result = sweep_liquidity(arrays, _pool())

        assert [(p.tick_index, p.liquidity) for p in result.datapoints] == [(640, 500), (5632, 0)]
        assert result.datapoints[0].price == tick_to_price(640, 9, 6)
        assert result.datapoints[1].price == tick_to_price(5632, 9, 6)

    def test_cumulative_liquidity_follows_signed_deltas(self):
        arrays = [_array(0, {1: 100, 5: 50, 9: -30})]

        result = sweep_liquidity(arrays, _pool())

        assert [p.liquidity for p in result.datapoints] == [100, 150, 120]
        assert [p.tick_index for p in result.datapoints] == [64, 320, 576]

    def test_zero_deltas_produce_no_datapoints(self):
        result = sweep_liquidity([_array(0, {}), _array(SPAN, {})], _pool())

        assert result.datapoints == ()

    def test_negative_start_tick_index(self):
        arrays = [_array(-SPAN, {0: 10}), _array(0, {0: -10})]

        result = sweep_liquidity(arrays, _pool())

        assert [(p.tick_index, p.liquidity) for p in result.datapoints] == [(-SPAN, 10), (0, 0)]

    def test_empty_input_keeps_current_state_from_pool(self):
        pool = _pool(current_sqrt_price=2**63)

        result = sweep_liquidity([], pool)

        assert result.datapoints == ()
        assert result.current_tick_index == 1000
        assert result.current_liquidity == 777
        assert result.current_price == sqrt_price_x64_to_price(2**63, 9, 6)
        assert result.current_price == Decimal(250)

    def test_current_liquidity_is_not_recomputed_from_sweep(self):
        arrays = [_array(0, {0: 10})]

        result = sweep_liquidity(arrays, _pool(current_tick_index=64, current_liquidity=999))

        assert result.current_liquidity == 999
        assert result.datapoints[0].liquidity == 10

    def test_handles_liquidity_beyond_native_integer_width(self):
        big = 2**127 - 1
        arrays = [_array(0, {0: big, 1: big}), _array(SPAN, {0: -big, 1: -big})]

        result = sweep_liquidity(arrays, _pool())

        assert [p.liquidity for p in result.datapoints] == [big, 2 * big, big, 0]

    def test_underflow_is_an_error(self):
        with pytest.raises(LiquidityUnderflowError):
            sweep_liquidity([_array(0, {3: -1})], _pool())

    def test_sweep_is_idempotent(self):
        arrays = [_array(0, {10: 500, 20: 25}), _array(SPAN, {0: -525})]
        pool = _pool()

        assert sweep_liquidity(arrays, pool) == sweep_liquidity(arrays, pool)


class TestComputeLiquidityDistribution:
    def test_out_of_order_input_matches_sorted_input(self):
        first = _array(0, {10: 500})
        second = _array(SPAN, {0: -500})

        assert compute_liquidity_distribution([second, first], _pool()) == compute_liquidity_distribution(
            [first, second], _pool()
        )

    def test_any_input_order_gives_same_result(self):
        arrays = [_array(i * SPAN, {i % TICK_ARRAY_SIZE: 10, 87: 5}) for i in range(-3, 4)]
        expected = compute_liquidity_distribution(arrays, _pool())

        shuffled = list(arrays)
        random.Random(7).shuffle(shuffled)

        assert compute_liquidity_distribution(shuffled, _pool()) == expected

    def test_datapoints_strictly_increase_and_match_prefix_sums(self):
        rng = random.Random(42)
        deltas_by_start = {
            start: {slot: rng.randint(1, 1000) for slot in rng.sample(range(TICK_ARRAY_SIZE), 5)}
            for start in (-2 * SPAN, -SPAN, 0, SPAN)
        }
        arrays = [_array(start, deltas) for start, deltas in deltas_by_start.items()]
        all_deltas = {
            start + slot * TICK_SPACING: delta
            for start, deltas in deltas_by_start.items()
            for slot, delta in deltas.items()
        }

        result = compute_liquidity_distribution(arrays, _pool())

        ticks = [p.tick_index for p in result.datapoints]
        prices = [p.price for p in result.datapoints]
        assert all(left < right for left, right in zip(ticks, ticks[1:]))
        assert all(left < right for left, right in zip(prices, prices[1:]))
        assert len(ticks) == len(all_deltas)
        for point in result.datapoints:
            expected = sum(delta for tick, delta in all_deltas.items() if tick <= point.tick_index)
            assert point.liquidity == expected

    def test_validation_is_opt_in(self):
        misaligned = _array(64, {0: 1})

        assert len(compute_liquidity_distribution([misaligned], _pool()).datapoints) == 1
        with pytest.raises(TickArrayLayoutError):
            compute_liquidity_distribution([misaligned], _pool(), validate=True)

    def test_price_precision_is_forwarded(self):
        result = compute_liquidity_distribution([_array(0, {1: 1})], _pool(decimals_a=0, decimals_b=0), price_precision=5)

        assert result.datapoints[0].price == tick_to_price(64, 0, 0, precision=5)
        assert len(result.datapoints[0].price.as_tuple().digits) <= 5
