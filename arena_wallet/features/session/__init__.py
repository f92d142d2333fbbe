"""Wallet session feature."""

from arena_wallet.features.session.service import (
    WALLET_SESSION_STORAGE_KEY,
    WalletSession,
    WalletSessionService,
    WalletSessionStore,
)

__all__ = [
    "WALLET_SESSION_STORAGE_KEY",
    "WalletSession",
    "WalletSessionService",
    "WalletSessionStore",
]
