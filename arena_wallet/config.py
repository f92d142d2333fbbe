"""Static configuration for the wallet core, read from ``ARENA_WALLET_*`` variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from arena_wallet.shared.network import RetryConfig, TimeoutConfig
from arena_wallet.types import AssetCode, AssetSource, StellarNetwork

ENV_PREFIX = "ARENA_WALLET_"

HORIZON_URLS = {
    StellarNetwork.TESTNET: "https://horizon-testnet.stellar.org",
    StellarNetwork.MAINNET: "https://horizon.stellar.org",
}

SOROBAN_RPC_URLS = {
    StellarNetwork.TESTNET: "https://soroban-testnet.stellar.org",
    StellarNetwork.MAINNET: "https://soroban-mainnet.stellar.org",
}

EXPLORER_NETWORK_SEGMENTS = {
    StellarNetwork.TESTNET: "testnet",
    StellarNetwork.MAINNET: "public",
}


class ConfigurationError(Exception):
    """Raised at startup when static configuration cannot be used."""


@dataclass(frozen=True)
class AssetConfig:
    code: AssetCode
    source: AssetSource
    issuer: str | None = None
    contract_id: str | None = None


@dataclass
class ConfirmationConfig:
    """Bounded polling policy used while waiting for a transaction to finalize."""

    horizon_max_attempts: int = 24
    horizon_not_found_delay: float = 1.5
    horizon_pending_delay: float = 1.0
    soroban_max_attempts: int = 30
    soroban_poll_delay: float = 1.2


def _env(name: str) -> str | None:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    if value is None or not value.strip():
        return None
    return value.strip()


def parse_network(raw: str | None) -> StellarNetwork:
    value = (raw or "testnet").lower()
    if value in ("mainnet", "public"):
        return StellarNetwork.MAINNET
    return StellarNetwork.TESTNET


def build_asset_configs(
    usdc_issuer: str | None = None,
    arenax_issuer: str | None = None,
    arenax_contract_id: str | None = None,
) -> dict[AssetCode, AssetConfig]:
    arenax_source = (
        AssetSource.SOROBAN
        if arenax_contract_id and not arenax_issuer
        else AssetSource.CLASSIC
    )
    return {
        AssetCode.XLM: AssetConfig(code=AssetCode.XLM, source=AssetSource.NATIVE),
        AssetCode.USDC: AssetConfig(
            code=AssetCode.USDC, source=AssetSource.CLASSIC, issuer=usdc_issuer
        ),
        AssetCode.ARENAX: AssetConfig(
            code=AssetCode.ARENAX,
            source=arenax_source,
            issuer=arenax_issuer,
            contract_id=arenax_contract_id,
        ),
    }


def default_explorer_base(network: StellarNetwork) -> str:
    return f"https://stellar.expert/explorer/{EXPLORER_NETWORK_SEGMENTS[network]}/tx"


@dataclass
class WalletConfig:
    network: StellarNetwork = StellarNetwork.TESTNET
    horizon_url: str = HORIZON_URLS[StellarNetwork.TESTNET]
    soroban_rpc_url: str = SOROBAN_RPC_URLS[StellarNetwork.TESTNET]
    stellar_explorer_base: str = default_explorer_base(StellarNetwork.TESTNET)
    soroban_explorer_base: str = default_explorer_base(StellarNetwork.TESTNET)
    escrow_balances_endpoint: str | None = None
    arenax_balance_endpoint: str | None = None
    origin: str = "http://localhost"
    assets: dict[AssetCode, AssetConfig] = field(default_factory=build_asset_configs)
    storage_dir: Path | None = None
    timeout_config: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry_config: RetryConfig = field(default_factory=RetryConfig)
    confirmation_config: ConfirmationConfig = field(default_factory=ConfirmationConfig)

    def __post_init__(self):
        if set(self.assets) != set(AssetCode):
            raise ConfigurationError("Asset configuration must cover XLM, USDC and ARENAX")

    @classmethod
    def for_network(cls, network: StellarNetwork, **overrides) -> "WalletConfig":
        values = {
            "network": network,
            "horizon_url": HORIZON_URLS[network],
            "soroban_rpc_url": SOROBAN_RPC_URLS[network],
            "stellar_explorer_base": default_explorer_base(network),
            "soroban_explorer_base": default_explorer_base(network),
        }
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_environment(cls) -> "WalletConfig":
        network = parse_network(_env("NETWORK"))
        overrides: dict[str, object] = {
            "escrow_balances_endpoint": _env("ESCROW_BALANCES_ENDPOINT"),
            "arenax_balance_endpoint": _env("ARENAX_BALANCE_ENDPOINT"),
            "assets": build_asset_configs(
                usdc_issuer=_env("USDC_ISSUER"),
                arenax_issuer=_env("ARENAX_ISSUER"),
                arenax_contract_id=_env("ARENAX_CONTRACT_ID"),
            ),
        }

        for env_name, attribute in (
            ("HORIZON_URL", "horizon_url"),
            ("SOROBAN_RPC_URL", "soroban_rpc_url"),
            ("STELLAR_EXPLORER_BASE_URL", "stellar_explorer_base"),
            ("SOROBAN_EXPLORER_BASE_URL", "soroban_explorer_base"),
            ("ORIGIN", "origin"),
        ):
            value = _env(env_name)
            if value:
                overrides[attribute] = value

        storage_dir = _env("DIR")
        if storage_dir:
            overrides["storage_dir"] = Path(storage_dir).expanduser()

        return cls.for_network(network, **overrides)

    def asset(self, code: AssetCode) -> AssetConfig:
        return self.assets[code]
