from __future__ import annotations

from dataclasses import dataclass

import base58
from construct import ConstructError

from whirlpool_liquidity.domain.entities.liquidity_distribution import TickArray, TickRecord
from whirlpool_liquidity.infrastructure.accounts.whirlpool_layouts import (
    MINT_LAYOUT,
    TICK_ARRAY_ACCOUNT_SIZE,
    TICK_ARRAY_DISCRIMINATOR,
    TICK_ARRAY_LAYOUT,
    WHIRLPOOL_DISCRIMINATOR,
    WHIRLPOOL_LAYOUT,
)


class AccountDecodeError(ValueError):
    pass


@dataclass(frozen=True)
class WhirlpoolAccount:
    tick_spacing: int
    liquidity: int
    sqrt_price: int
    tick_current_index: int
    token_mint_a: str
    token_mint_b: str


def encode_pubkey(raw: bytes) -> str:
    return base58.b58encode(raw).decode("ascii")


def map_account_to_tick_array(data: bytes, *, address: str | None = None) -> TickArray:
    if len(data) != TICK_ARRAY_ACCOUNT_SIZE:
        raise AccountDecodeError(
            f"Tick array account {address} has {len(data)} bytes, expected {TICK_ARRAY_ACCOUNT_SIZE}."
        )
    try:
        parsed = TICK_ARRAY_LAYOUT.parse(data)
    except ConstructError as exc:
        raise AccountDecodeError(f"Invalid tick array account {address}: {exc}") from exc
    if parsed.discriminator != TICK_ARRAY_DISCRIMINATOR:
        raise AccountDecodeError(f"Account {address} is not a tick array.")

    return TickArray(
        start_tick_index=parsed.start_tick_index,
        ticks=tuple(
            TickRecord(
                liquidity_net=tick.liquidity_net,
                liquidity_gross=tick.liquidity_gross,
                initialized=bool(tick.initialized),
            )
            for tick in parsed.ticks
        ),
        address=address,
    )


def map_account_to_whirlpool(data: bytes, *, address: str | None = None) -> WhirlpoolAccount:
    try:
        parsed = WHIRLPOOL_LAYOUT.parse(data)
    except ConstructError as exc:
        raise AccountDecodeError(f"Invalid whirlpool account {address}: {exc}") from exc
    if parsed.discriminator != WHIRLPOOL_DISCRIMINATOR:
        raise AccountDecodeError(f"Account {address} is not a whirlpool.")

    return WhirlpoolAccount(
        tick_spacing=parsed.tick_spacing,
        liquidity=parsed.liquidity,
        sqrt_price=parsed.sqrt_price,
        tick_current_index=parsed.tick_current_index,
        token_mint_a=encode_pubkey(parsed.token_mint_a),
        token_mint_b=encode_pubkey(parsed.token_mint_b),
    )


def map_account_to_mint_decimals(data: bytes, *, address: str | None = None) -> int:
    try:
        parsed = MINT_LAYOUT.parse(data)
    except ConstructError as exc:
        raise AccountDecodeError(f"Invalid mint account {address}: {exc}") from exc
    return parsed.decimals
