from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
import logging
from threading import Lock
import time

import httpx


logger = logging.getLogger(__name__)


class SolanaRpcError(RuntimeError):
    pass


@dataclass(frozen=True)
class SolanaRpcClientSettings:
    rpc_url: str
    commitment: str
    timeout_seconds: float
    max_retries: int
    min_interval_ms: int


@dataclass(frozen=True)
class ProgramAccount:
    pubkey: str
    data: bytes


class SolanaRpcClient:
    def __init__(self, settings: SolanaRpcClientSettings):
        self._settings = settings
        self._lock = Lock()
        self._last_request_at = 0.0
        self._request_id = 0

    def get_account_info(self, address: str) -> bytes | None:
        result = self._post_rpc(
            method="getAccountInfo",
            params=[
                address,
                {"commitment": self._settings.commitment, "encoding": "base64"},
            ],
        )
        if not isinstance(result, dict):
            raise SolanaRpcError("getAccountInfo returned an unexpected payload.")
        return _decode_account_data(result.get("value"))

    def get_multiple_accounts(self, addresses: list[str]) -> list[bytes | None]:
        if not addresses:
            return []

        result = self._post_rpc(
            method="getMultipleAccounts",
            params=[
                addresses,
                {"commitment": self._settings.commitment, "encoding": "base64"},
            ],
        )
        values = result.get("value") if isinstance(result, dict) else None
        if not isinstance(values, list) or len(values) != len(addresses):
            raise SolanaRpcError("getMultipleAccounts returned an unexpected payload.")
        return [_decode_account_data(value) for value in values]

    def get_program_accounts(
        self,
        program_id: str,
        *,
        data_size: int,
        memcmp_offset: int,
        memcmp_bytes: str,
    ) -> list[ProgramAccount]:
        result = self._post_rpc(
            method="getProgramAccounts",
            params=[
                program_id,
                {
                    "commitment": self._settings.commitment,
                    "encoding": "base64",
                    "filters": [
                        {"dataSize": data_size},
                        {"memcmp": {"offset": memcmp_offset, "bytes": memcmp_bytes}},
                    ],
                },
            ],
        )
        if not isinstance(result, list):
            raise SolanaRpcError("getProgramAccounts returned an unexpected payload.")

        accounts: list[ProgramAccount] = []
        for row in result:
            if not isinstance(row, dict):
                raise SolanaRpcError("getProgramAccounts returned an unexpected account row.")
            pubkey = row.get("pubkey")
            data = _decode_account_data(row.get("account"))
            if pubkey is None or data is None:
                continue
            accounts.append(ProgramAccount(pubkey=pubkey, data=data))

        logger.info(
            "solana_rpc_client: fetched_program_accounts program=%s data_size=%s accounts=%s",
            program_id,
            data_size,
            len(accounts),
        )
        return accounts

    def _post_rpc(self, *, method: str, params: list):
        attempts = max(1, self._settings.max_retries)
        delay = 0.25
        last_exc: Exception | None = None

        for attempt in range(1, attempts + 1):
            self._respect_rate_limit()
            try:
                with httpx.Client(timeout=self._settings.timeout_seconds) as client:
                    response = client.post(
                        self._settings.rpc_url,
                        json={
                            "jsonrpc": "2.0",
                            "id": self._next_request_id(),
                            "method": method,
                            "params": params,
                        },
                    )
                    response.raise_for_status()
                    payload = response.json()

                if not isinstance(payload, dict):
                    raise SolanaRpcError(f"{method} returned an unexpected payload.")

                error = payload.get("error")
                if error:
                    message = error.get("message", error) if isinstance(error, dict) else error
                    raise SolanaRpcError(f"{method} failed: {message}")
                if "result" not in payload:
                    raise SolanaRpcError(f"{method} returned no result.")

                return payload["result"]
            except (httpx.HTTPError, SolanaRpcError, ValueError) as exc:
                last_exc = exc
                if attempt == attempts:
                    break
                logger.warning(
                    "solana_rpc_client: rpc_retry method=%s attempt=%s/%s error=%s",
                    method,
                    attempt,
                    attempts,
                    exc,
                )
                time.sleep(delay)
                delay *= 2

        raise SolanaRpcError(f"RPC request {method} failed after retries: {last_exc}") from last_exc

    def _next_request_id(self) -> int:
        with self._lock:
            self._request_id += 1
            return self._request_id

    def _respect_rate_limit(self) -> None:
        min_interval = max(0, self._settings.min_interval_ms) / 1000.0
        if min_interval <= 0:
            return

        with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_at
            if elapsed < min_interval:
                time.sleep(min_interval - elapsed)
            self._last_request_at = time.monotonic()


def _decode_account_data(account: dict | None) -> bytes | None:
    if not account:
        return None
    if not isinstance(account, dict):
        raise SolanaRpcError("Account entry is not an object.")
    data = account.get("data")
    # base64 accounts come back as [payload, "base64"].
    if not isinstance(data, list) or len(data) != 2 or data[1] != "base64":
        raise SolanaRpcError("Account data is not base64 encoded.")
    try:
        return base64.b64decode(data[0], validate=True)
    except (TypeError, binascii.Error) as exc:
        raise SolanaRpcError(f"Account data is not valid base64: {exc}") from exc
