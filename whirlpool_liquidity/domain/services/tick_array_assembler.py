from __future__ import annotations

from collections.abc import Iterable, Sequence

from whirlpool_liquidity.domain.entities.liquidity_distribution import TICK_ARRAY_SIZE, TickArray
from whirlpool_liquidity.domain.exceptions import TickArrayLayoutError


def assemble_tick_arrays(records: Iterable[TickArray]) -> list[TickArray]:
    # No dedup: a partition returned twice is swept twice.
    return sorted(records, key=lambda tick_array: tick_array.start_tick_index)


def validate_tick_arrays(tick_arrays: Sequence[TickArray], *, tick_spacing: int) -> None:
    """
    Fail fast on input the sweep cannot interpret.

    Expects the output of `assemble_tick_arrays`. Every array must hold exactly
    TICK_ARRAY_SIZE records, start on a multiple of tick_spacing * TICK_ARRAY_SIZE
    and begin at or after the end of the previous one.
    """
    if tick_spacing <= 0:
        raise TickArrayLayoutError("tick_spacing must be > 0.")

    span = tick_spacing * TICK_ARRAY_SIZE
    previous: TickArray | None = None
    for tick_array in tick_arrays:
        if len(tick_array.ticks) != TICK_ARRAY_SIZE:
            raise TickArrayLayoutError(
                f"Tick array at {tick_array.start_tick_index} has {len(tick_array.ticks)} ticks, "
                f"expected {TICK_ARRAY_SIZE}."
            )
        if tick_array.start_tick_index % span != 0:
            raise TickArrayLayoutError(
                f"Tick array start {tick_array.start_tick_index} is not aligned to {span}."
            )
        if previous is not None and tick_array.start_tick_index < previous.start_tick_index + span:
            raise TickArrayLayoutError(
                f"Tick array at {tick_array.start_tick_index} overlaps tick array at "
                f"{previous.start_tick_index}."
            )
        previous = tick_array
