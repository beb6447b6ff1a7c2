from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal, localcontext


DEFAULT_PRICE_PRECISION = 40
# Enough digits to hold a u128 sqrt_price exactly before flooring.
SQRT_PRICE_WORKING_PRECISION = 80
TICK_BASE = Decimal("1.0001")
Q64 = Decimal(2) ** 64


def tick_to_sqrt_price_x64(tick: int) -> int:
    """
    Q64.64 sqrt price at `tick`: floor(1.0001^(tick / 2) * 2^64).
    """
    with localcontext() as ctx:
        ctx.prec = SQRT_PRICE_WORKING_PRECISION
        sqrt_price = TICK_BASE.sqrt() ** int(tick)
        return int((sqrt_price * Q64).to_integral_value(rounding=ROUND_FLOOR))


def tick_to_price(
    tick: int,
    decimals_a: int,
    decimals_b: int,
    *,
    precision: int = DEFAULT_PRICE_PRECISION,
) -> Decimal:
    """
    Price of token A in token B units at `tick`, taken through the same
    sqrt_price path as the pool's current price:
    price = (sqrt_price_x64 / 2^64)^2 * 10^(decimals_a - decimals_b)
    """
    return sqrt_price_x64_to_price(
        tick_to_sqrt_price_x64(tick),
        decimals_a,
        decimals_b,
        precision=precision,
    )


def sqrt_price_x64_to_sqrt_price(sqrt_price_x64: int, *, precision: int = DEFAULT_PRICE_PRECISION) -> Decimal:
    if sqrt_price_x64 < 0:
        raise ValueError("Invalid sqrt_price_x64.")
    with localcontext() as ctx:
        ctx.prec = precision
        return Decimal(sqrt_price_x64) / Q64


def sqrt_price_x64_to_price(
    sqrt_price_x64: int,
    decimals_a: int,
    decimals_b: int,
    *,
    precision: int = DEFAULT_PRICE_PRECISION,
) -> Decimal:
    sqrt_price = sqrt_price_x64_to_sqrt_price(sqrt_price_x64, precision=precision)
    with localcontext() as ctx:
        ctx.prec = precision
        raw_price = sqrt_price * sqrt_price
        return +raw_price.scaleb(decimals_a - decimals_b)
