"""Transaction tracking feature: toasts, history and confirmation."""

from arena_wallet.features.transactions.confirmation import ConfirmationWaiter
from arena_wallet.features.transactions.errors import (
    ConfirmationError,
    TransactionError,
    parse_horizon_failure,
    sanitize_tx_error,
)
from arena_wallet.features.transactions.history import (
    MAX_HISTORY_ITEMS,
    TX_HISTORY_STORAGE_KEY,
    TransactionHistoryStore,
)
from arena_wallet.features.transactions.models import (
    ToastItem,
    TrackMeta,
    TrackResult,
    TxHistoryItem,
    TxMeta,
)
from arena_wallet.features.transactions.tracker import (
    MAX_TOASTS,
    PhaseHelpers,
    TrackerEvent,
    TransactionTracker,
)

__all__ = [
    "ConfirmationError",
    "ConfirmationWaiter",
    "MAX_HISTORY_ITEMS",
    "MAX_TOASTS",
    "PhaseHelpers",
    "ToastItem",
    "TrackMeta",
    "TrackResult",
    "TrackerEvent",
    "TransactionError",
    "TransactionHistoryStore",
    "TransactionTracker",
    "TX_HISTORY_STORAGE_KEY",
    "TxHistoryItem",
    "TxMeta",
    "parse_horizon_failure",
    "sanitize_tx_error",
]
