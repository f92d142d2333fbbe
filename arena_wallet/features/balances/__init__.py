"""Balance aggregation feature."""

from arena_wallet.features.balances.service import (
    AssetBalance,
    BalanceAggregator,
    BalanceQueryError,
    WalletBalances,
    empty_balances,
    format_asset_amount,
    normalize_locked_balances,
)

__all__ = [
    "AssetBalance",
    "BalanceAggregator",
    "BalanceQueryError",
    "WalletBalances",
    "empty_balances",
    "format_asset_amount",
    "normalize_locked_balances",
]
