"""Explorer links for submitted transactions."""

from __future__ import annotations

from urllib.parse import quote, urlparse

from arena_wallet.config import ConfigurationError, WalletConfig
from arena_wallet.types import TxKind


def _validate_base(name: str, base: str) -> str:
    parsed = urlparse(base or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"{name} must be an absolute http(s) URL, got {base!r}")
    return base.rstrip("/")


class ExplorerLinkBuilder:
    def __init__(self, stellar_base: str, soroban_base: str):
        self._bases = {
            TxKind.CLASSIC: _validate_base("Stellar explorer base", stellar_base),
            TxKind.SOROBAN: _validate_base("Soroban explorer base", soroban_base),
        }

    @classmethod
    def from_config(cls, config: WalletConfig) -> "ExplorerLinkBuilder":
        return cls(config.stellar_explorer_base, config.soroban_explorer_base)

    def build_link(self, tx_hash: str, kind: TxKind = TxKind.CLASSIC) -> str:
        return f"{self._bases[kind]}/{quote(tx_hash, safe='')}"


def build_explorer_link(
    tx_hash: str, kind: TxKind = TxKind.CLASSIC, config: WalletConfig | None = None
) -> str:
    return ExplorerLinkBuilder.from_config(config or WalletConfig()).build_link(tx_hash, kind)
