from __future__ import annotations

import logging

from whirlpool_liquidity.application.ports.liquidity_distribution_port import LiquidityDistributionPort
from whirlpool_liquidity.domain.entities.liquidity_distribution import PoolSnapshot, TickArray
from whirlpool_liquidity.domain.exceptions import PoolDataSourceError
from whirlpool_liquidity.infrastructure.accounts.mappers.whirlpool_accounts_mapper import (
    AccountDecodeError,
    map_account_to_mint_decimals,
    map_account_to_tick_array,
    map_account_to_whirlpool,
)
from whirlpool_liquidity.infrastructure.accounts.whirlpool_layouts import (
    TICK_ARRAY_ACCOUNT_SIZE,
    TICK_ARRAY_WHIRLPOOL_OFFSET,
)
from whirlpool_liquidity.infrastructure.clients.solana_rpc_client import SolanaRpcClient, SolanaRpcError


logger = logging.getLogger(__name__)


class RpcLiquidityDistributionRepository(LiquidityDistributionPort):
    def __init__(self, rpc_client: SolanaRpcClient, program_id: str):
        self._rpc_client = rpc_client
        self._program_id = program_id

    def get_pool_snapshot(self, *, pool_address: str) -> PoolSnapshot | None:
        try:
            data = self._rpc_client.get_account_info(pool_address)
            if data is None:
                return None
            whirlpool = map_account_to_whirlpool(data, address=pool_address)

            mint_addresses = [whirlpool.token_mint_a, whirlpool.token_mint_b]
            mints = self._rpc_client.get_multiple_accounts(mint_addresses)
            decimals: list[int] = []
            for mint_address, mint_data in zip(mint_addresses, mints):
                if mint_data is None:
                    raise PoolDataSourceError(f"Mint {mint_address} of pool {pool_address} not found.")
                decimals.append(map_account_to_mint_decimals(mint_data, address=mint_address))
        except (SolanaRpcError, AccountDecodeError) as exc:
            raise PoolDataSourceError(str(exc)) from exc

        logger.debug(
            "rpc_liquidity_distribution_repo: pool_snapshot pool=%s tick_spacing=%s tick=%s decimals=%s/%s",
            pool_address,
            whirlpool.tick_spacing,
            whirlpool.tick_current_index,
            decimals[0],
            decimals[1],
        )
        return PoolSnapshot(
            tick_spacing=whirlpool.tick_spacing,
            current_tick_index=whirlpool.tick_current_index,
            current_sqrt_price=whirlpool.sqrt_price,
            current_liquidity=whirlpool.liquidity,
            decimals_a=decimals[0],
            decimals_b=decimals[1],
        )

    def get_tick_arrays(self, *, pool_address: str) -> list[TickArray]:
        try:
            accounts = self._rpc_client.get_program_accounts(
                self._program_id,
                data_size=TICK_ARRAY_ACCOUNT_SIZE,
                memcmp_offset=TICK_ARRAY_WHIRLPOOL_OFFSET,
                memcmp_bytes=pool_address,
            )
            tick_arrays = [
                map_account_to_tick_array(account.data, address=account.pubkey)
                for account in accounts
            ]
        except (SolanaRpcError, AccountDecodeError) as exc:
            raise PoolDataSourceError(str(exc)) from exc

        logger.info(
            "rpc_liquidity_distribution_repo: tick_arrays pool=%s count=%s",
            pool_address,
            len(tick_arrays),
        )
        return tick_arrays
