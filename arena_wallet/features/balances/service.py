"""Balance aggregation for the ArenaX wallet core.

Builds one balance snapshot per wallet out of four independent sources:
- the Horizon account (native XLM line and classic trustlines)
- the escrow service (locked amounts per asset)
- the ARENAX contract balance endpoint, when ARENAX is contract-sourced
"""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from arena_wallet.config import AssetConfig, WalletConfig
from arena_wallet.shared.logging import get_logger
from arena_wallet.shared.network import NO_RETRY_CONFIG, NetworkClient, NetworkError
from arena_wallet.types import ASSET_CODES, AssetCode, AssetSource

logger = get_logger(__name__)

HORIZON_FAILURE_MESSAGE = "Unable to load wallet balances from Horizon."


class BalanceQueryError(Exception):
    """The mandatory account lookup failed for a reason other than not-found."""


@dataclass(frozen=True)
class AssetBalance:
    asset: AssetCode
    available: float
    locked: float
    has_trustline: bool
    source: AssetSource
    issuer: str | None = None
    contract_id: str | None = None
    total: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "total", self.available + self.locked)

    def to_dict(self) -> dict[str, Any]:
        return {
            "asset": self.asset.value,
            "available": self.available,
            "locked": self.locked,
            "total": self.total,
            "hasTrustline": self.has_trustline,
            "source": self.source.value,
            "issuer": self.issuer,
            "contractId": self.contract_id,
        }


WalletBalances = dict[AssetCode, AssetBalance]
LockedBalances = dict[AssetCode, float]


def to_number(value: Any) -> float:
    """Parse a ledger amount; anything unusable or negative counts as zero."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(parsed) or parsed < 0:
        return 0.0
    return parsed


def empty_locked_balances() -> LockedBalances:
    return {code: 0.0 for code in ASSET_CODES}


def normalize_locked_balances(raw: Any) -> LockedBalances:
    """Accept either ``{"locked": {...}}`` or a flat per-asset mapping."""
    if not isinstance(raw, dict):
        return empty_locked_balances()

    locked_node = raw.get("locked")
    if not isinstance(locked_node, dict):
        locked_node = raw

    return {code: to_number(locked_node.get(code.value)) for code in ASSET_CODES}


def find_classic_trustline(
    balance_lines: list[dict[str, Any]],
    asset_code: AssetCode,
    issuer: str | None = None,
) -> dict[str, Any] | None:
    for line in balance_lines:
        if line.get("asset_type") == "native":
            continue
        if line.get("asset_code") != asset_code.value:
            continue
        if issuer and line.get("asset_issuer") != issuer:
            continue
        return line
    return None


def find_native_line(balance_lines: list[dict[str, Any]]) -> dict[str, Any] | None:
    for line in balance_lines:
        if line.get("asset_type") == "native":
            return line
    return None


def build_asset_balance(
    config: AssetConfig,
    available: float,
    locked: float,
    has_trustline: bool,
) -> AssetBalance:
    return AssetBalance(
        asset=config.code,
        available=available,
        locked=locked,
        has_trustline=has_trustline,
        source=config.source,
        issuer=config.issuer,
        contract_id=config.contract_id,
    )


def empty_balances(config: WalletConfig | None = None) -> WalletBalances:
    """Zeroed placeholder shown before the first aggregation finishes."""
    config = config or WalletConfig()
    return {
        code: build_asset_balance(
            config.asset(code), 0.0, 0.0, has_trustline=code == AssetCode.XLM
        )
        for code in ASSET_CODES
    }


def format_asset_amount(amount: float) -> str:
    formatted = f"{amount:,.7f}"
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted


class BalanceAggregator:
    def __init__(
        self,
        config: WalletConfig,
        horizon_client: NetworkClient | None = None,
        service_client: NetworkClient | None = None,
    ):
        self.config = config
        self.horizon_client = horizon_client or NetworkClient(
            base_url=config.horizon_url,
            timeout_config=config.timeout_config,
            retry_config=config.retry_config,
        )
        # Best-effort endpoints: a single attempt, failures degrade to zero.
        self.service_client = service_client or NetworkClient(
            base_url=config.origin,
            timeout_config=config.timeout_config,
            retry_config=NO_RETRY_CONFIG,
        )

    def empty_balances(self) -> WalletBalances:
        return empty_balances(self.config)

    def fetch_account(self, public_identity: str) -> dict[str, Any] | None:
        try:
            account = self.horizon_client.get_optional(
                f"/accounts/{quote(public_identity, safe='')}",
                context="Fetch Horizon account",
            )
        except NetworkError as e:
            logger.error("Horizon account lookup failed: %s", e)
            raise BalanceQueryError(HORIZON_FAILURE_MESSAGE) from e

        if account is None:
            logger.info("Account %s is not funded yet", public_identity)
        return account

    def fetch_locked_balances(self, public_identity: str) -> LockedBalances:
        endpoint = self.config.escrow_balances_endpoint
        if not endpoint:
            return empty_locked_balances()

        try:
            payload = self.service_client.get(
                endpoint,
                context="Fetch locked balances",
                params={"address": public_identity},
                headers={"Content-Type": "application/json"},
            )
        except NetworkError as e:
            logger.warning("Locked balance lookup failed, using zero: %s", e)
            return empty_locked_balances()

        return normalize_locked_balances(payload)

    def fetch_contract_balance(self, public_identity: str) -> float:
        endpoint = self.config.arenax_balance_endpoint
        if not endpoint:
            return 0.0

        try:
            payload = self.service_client.get(
                endpoint,
                context="Fetch ARENAX contract balance",
                params={"address": public_identity},
            )
        except NetworkError as e:
            logger.warning("ARENAX contract balance lookup failed, using zero: %s", e)
            return 0.0

        if not isinstance(payload, dict):
            return 0.0
        return to_number(payload.get("balance"))

    async def _account_then_contract(
        self, public_identity: str, contract_sourced: bool
    ) -> tuple[dict[str, Any] | None, float]:
        account = await asyncio.to_thread(self.fetch_account, public_identity)
        if not contract_sourced:
            return account, 0.0
        return account, await asyncio.to_thread(self.fetch_contract_balance, public_identity)

    async def get_balances(self, public_identity: str) -> WalletBalances:
        arenax_config = self.config.asset(AssetCode.ARENAX)
        contract_sourced = arenax_config.source == AssetSource.SOROBAN

        (account, contract_balance), locked = await asyncio.gather(
            self._account_then_contract(public_identity, contract_sourced),
            asyncio.to_thread(self.fetch_locked_balances, public_identity),
        )

        lines: list[dict[str, Any]] = []
        if isinstance(account, dict):
            lines = account.get("balances") or []

        native_line = find_native_line(lines)
        xlm_available = to_number(native_line.get("balance") if native_line else None)

        usdc_config = self.config.asset(AssetCode.USDC)
        usdc_line = find_classic_trustline(lines, AssetCode.USDC, usdc_config.issuer)
        usdc_available = to_number(usdc_line.get("balance") if usdc_line else None)

        if contract_sourced:
            arenax_available = contract_balance
            arenax_trustline = account is not None
        else:
            arenax_line = find_classic_trustline(
                lines, AssetCode.ARENAX, arenax_config.issuer
            )
            arenax_available = to_number(arenax_line.get("balance") if arenax_line else None)
            arenax_trustline = arenax_line is not None

        balances: WalletBalances = {
            AssetCode.XLM: build_asset_balance(
                self.config.asset(AssetCode.XLM),
                xlm_available,
                locked[AssetCode.XLM],
                has_trustline=True,
            ),
            AssetCode.USDC: build_asset_balance(
                usdc_config,
                usdc_available,
                locked[AssetCode.USDC],
                has_trustline=usdc_line is not None,
            ),
            AssetCode.ARENAX: build_asset_balance(
                arenax_config,
                arenax_available,
                locked[AssetCode.ARENAX],
                has_trustline=arenax_trustline,
            ),
        }

        logger.debug(
            "Balances for %s: %s",
            public_identity,
            {code.value: balance.total for code, balance in balances.items()},
        )
        return balances
