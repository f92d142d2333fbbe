"""Persisted, bounded transaction history."""

from __future__ import annotations

from arena_wallet.features.transactions.models import TxHistoryItem
from arena_wallet.shared.logging import get_logger
from arena_wallet.shared.storage import KeyValueStorage, read_json, write_json

logger = get_logger(__name__)

TX_HISTORY_STORAGE_KEY = "arena_wallet_tx_history"
MAX_HISTORY_ITEMS = 50


class TransactionHistoryStore:
    """Newest-first history list mirrored into a single storage slot.

    The slot is read once on construction and rewritten in full on every
    mutation. Two processes sharing the slot overwrite each other (last write
    wins).
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = TX_HISTORY_STORAGE_KEY,
        max_items: int = MAX_HISTORY_ITEMS,
    ):
        self.storage = storage
        self.key = key
        self.max_items = max_items
        self._items: list[TxHistoryItem] = []
        self._load()

    def _load(self) -> None:
        data = read_json(self.storage, self.key)
        if not isinstance(data, list):
            if data is not None:
                logger.warning("Stored transaction history is not a list, starting fresh")
            self._items = []
            return

        items = []
        for raw in data:
            if not isinstance(raw, dict):
                continue
            try:
                items.append(TxHistoryItem.from_dict(raw))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed history entry: %s", e)
        self._items = items[: self.max_items]

    def _save(self) -> None:
        try:
            write_json(self.storage, self.key, [item.to_dict() for item in self._items])
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save transaction history: %s", e)

    def prepend(self, entry: TxHistoryItem) -> None:
        self._items = [entry, *self._items][: self.max_items]
        self._save()
        logger.info(
            "Recorded %s %s of %s %s (%s)",
            entry.status.value,
            entry.direction.value,
            entry.amount,
            entry.asset.value,
            entry.id,
        )

    def clear(self) -> int:
        count = len(self._items)
        self._items = []
        self._save()
        logger.info("Cleared transaction history (%d items)", count)
        return count

    def get_all(self) -> list[TxHistoryItem]:
        return self._items.copy()

    def is_empty(self) -> bool:
        return len(self._items) == 0
