"""
Binary layouts of the on-chain accounts read by the liquidity distribution.

Only the Whirlpool header up to token_mint_b is declared; trailing fields are
never read.
"""

from __future__ import annotations

import hashlib

from construct import Array, Bytes, BytesInteger, Flag, Int8ul, Int16ul, Int32sl, Int32ul, Int64ul, Struct

from whirlpool_liquidity.domain.entities.liquidity_distribution import TICK_ARRAY_SIZE


def anchor_discriminator(account_name: str) -> bytes:
    return hashlib.sha256(f"account:{account_name}".encode()).digest()[:8]


U128 = BytesInteger(16, signed=False, swapped=True)
I128 = BytesInteger(16, signed=True, swapped=True)

TICK_ARRAY_DISCRIMINATOR = anchor_discriminator("TickArray")
WHIRLPOOL_DISCRIMINATOR = anchor_discriminator("Whirlpool")

TICK_LAYOUT = Struct(
    "initialized" / Flag,
    "liquidity_net" / I128,
    "liquidity_gross" / U128,
    "fee_growth_outside_a" / U128,
    "fee_growth_outside_b" / U128,
    "reward_growths_outside" / Array(3, U128),
)

TICK_ARRAY_LAYOUT = Struct(
    "discriminator" / Bytes(8),
    "start_tick_index" / Int32sl,
    "ticks" / Array(TICK_ARRAY_SIZE, TICK_LAYOUT),
    "whirlpool" / Bytes(32),
)

# 8 + 4 + 88 * 113 + 32
TICK_ARRAY_ACCOUNT_SIZE = TICK_ARRAY_LAYOUT.sizeof()
TICK_ARRAY_WHIRLPOOL_OFFSET = TICK_ARRAY_ACCOUNT_SIZE - 32

WHIRLPOOL_LAYOUT = Struct(
    "discriminator" / Bytes(8),
    "whirlpools_config" / Bytes(32),
    "whirlpool_bump" / Bytes(1),
    "tick_spacing" / Int16ul,
    "tick_spacing_seed" / Bytes(2),
    "fee_rate" / Int16ul,
    "protocol_fee_rate" / Int16ul,
    "liquidity" / U128,
    "sqrt_price" / U128,
    "tick_current_index" / Int32sl,
    "protocol_fee_owed_a" / Int64ul,
    "protocol_fee_owed_b" / Int64ul,
    "token_mint_a" / Bytes(32),
    "token_vault_a" / Bytes(32),
    "fee_growth_global_a" / U128,
    "token_mint_b" / Bytes(32),
)

MINT_LAYOUT = Struct(
    "mint_authority_option" / Int32ul,
    "mint_authority" / Bytes(32),
    "supply" / Int64ul,
    "decimals" / Int8ul,
    "is_initialized" / Flag,
    "freeze_authority_option" / Int32ul,
    "freeze_authority" / Bytes(32),
)
