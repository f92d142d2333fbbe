"""Polling confirmation for submitted Stellar and Soroban transactions."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Protocol
from urllib.parse import quote

from arena_wallet.config import ConfirmationConfig, WalletConfig
from arena_wallet.features.transactions.errors import ConfirmationError, parse_horizon_failure
from arena_wallet.shared.logging import get_logger
from arena_wallet.shared.network import NO_RETRY_CONFIG, NetworkClient, NetworkError
from arena_wallet.types import TxKind

logger = get_logger(__name__)


class ConfirmationWaiterProtocol(Protocol):
    """Resolves once ``tx_hash`` is final; raises on failure or timeout."""

    def __call__(self, tx_hash: str, kind: TxKind) -> Awaitable[None]: ...


def read_soroban_failure_message(result: dict[str, Any]) -> str:
    if isinstance(result.get("errorResultXdr"), str):
        return "Soroban transaction failed while executing contract call."
    return "Soroban transaction failed."


class ConfirmationWaiter:
    def __init__(
        self,
        config: WalletConfig,
        horizon_client: NetworkClient | None = None,
        rpc_client: NetworkClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.policy: ConfirmationConfig = config.confirmation_config
        self.horizon_client = horizon_client or NetworkClient(
            base_url=config.horizon_url,
            timeout_config=config.timeout_config,
            retry_config=NO_RETRY_CONFIG,
        )
        self.rpc_client = rpc_client or NetworkClient(
            base_url=config.soroban_rpc_url,
            timeout_config=config.timeout_config,
            retry_config=NO_RETRY_CONFIG,
        )
        self.sleep = sleep

    async def __call__(self, tx_hash: str, kind: TxKind) -> None:
        await self.wait(tx_hash, kind)

    async def wait(self, tx_hash: str, kind: TxKind) -> None:
        if kind == TxKind.SOROBAN:
            await self.wait_for_soroban(tx_hash)
        else:
            await self.wait_for_horizon(tx_hash)
        logger.info("Transaction %s confirmed (%s)", tx_hash, kind.value)

    async def wait_for_horizon(self, tx_hash: str) -> None:
        endpoint = f"/transactions/{quote(tx_hash, safe='')}"

        for attempt in range(self.policy.horizon_max_attempts):
            try:
                payload = await asyncio.to_thread(
                    self.horizon_client.get_optional,
                    endpoint,
                    context="Check Horizon transaction",
                )
            except NetworkError as e:
                logger.warning("Horizon status check for %s failed: %s", tx_hash, e)
                raise ConfirmationError(
                    "Unable to verify transaction status from Horizon."
                ) from e

            if payload is None:
                logger.debug(
                    "Transaction %s not ingested yet (attempt %d)", tx_hash, attempt + 1
                )
                await self.sleep(self.policy.horizon_not_found_delay)
                continue

            successful = payload.get("successful") if isinstance(payload, dict) else None
            if successful is True:
                return
            if successful is False:
                raise ConfirmationError(parse_horizon_failure(payload))

            await self.sleep(self.policy.horizon_pending_delay)

        raise ConfirmationError("Timed out waiting for Stellar confirmation.")

    async def wait_for_soroban(self, tx_hash: str) -> None:
        for attempt in range(self.policy.soroban_max_attempts):
            body = {
                "jsonrpc": "2.0",
                "id": f"{tx_hash}-{attempt}",
                "method": "getTransaction",
                "params": {"hash": tx_hash},
            }
            try:
                payload = await asyncio.to_thread(
                    self.rpc_client.post,
                    "",
                    context="Soroban getTransaction",
                    json=body,
                )
            except NetworkError as e:
                logger.debug("Soroban RPC poll for %s failed: %s", tx_hash, e)
                await self.sleep(self.policy.soroban_poll_delay)
                continue

            payload = payload if isinstance(payload, dict) else {}
            error = payload.get("error")
            if isinstance(error, dict) and error.get("message"):
                raise ConfirmationError(str(error["message"]))

            result = payload.get("result")
            result = result if isinstance(result, dict) else {}
            status = result.get("status")

            if status == "SUCCESS":
                return
            if status == "FAILED":
                raise ConfirmationError(read_soroban_failure_message(result))

            await self.sleep(self.policy.soroban_poll_delay)

        raise ConfirmationError("Timed out waiting for Soroban confirmation.")
