"""ArenaX wallet core - transaction tracking and balance reconciliation.

This package is organized into feature-based modules:
- features.balances: Native, classic, contract and escrowed balance aggregation
- features.transactions: Tracked transaction lifecycle, toasts and history
- features.session: Connected wallet session persistence
- features.explorer: Explorer links for transaction hashes
- shared: Shared utilities (network, storage, logging, validation)
"""

from arena_wallet.config import ConfigurationError, WalletConfig
from arena_wallet.core import WalletCore
from arena_wallet.features.balances import AssetBalance, BalanceAggregator, BalanceQueryError
from arena_wallet.features.explorer import ExplorerLinkBuilder
from arena_wallet.features.session import WalletSession, WalletSessionStore
from arena_wallet.features.transactions import (
    TrackMeta,
    TransactionError,
    TransactionTracker,
    TxMeta,
)
from arena_wallet.shared import (
    JsonFileStorage,
    MemoryStorage,
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    RetryConfig,
    TimeoutConfig,
)
from arena_wallet.types import (
    AssetCode,
    AssetSource,
    SignerKind,
    StellarNetwork,
    TxDirection,
    TxKind,
    TxPhase,
    TxStatus,
)

__version__ = "0.3.0"
__all__ = [
    "AssetBalance",
    "AssetCode",
    "AssetSource",
    "BalanceAggregator",
    "BalanceQueryError",
    "ConfigurationError",
    "ExplorerLinkBuilder",
    "JsonFileStorage",
    "MemoryStorage",
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
    "RetryConfig",
    "SignerKind",
    "StellarNetwork",
    "TimeoutConfig",
    "TrackMeta",
    "TransactionError",
    "TransactionTracker",
    "TxDirection",
    "TxKind",
    "TxMeta",
    "TxPhase",
    "TxStatus",
    "WalletConfig",
    "WalletCore",
    "WalletSession",
    "WalletSessionStore",
]
