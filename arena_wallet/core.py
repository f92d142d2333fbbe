"""Wiring for the wallet core services.

``WalletCore`` is built explicitly and passed to whatever needs it; nothing in
the package keeps a module-level instance.
"""

from __future__ import annotations

from dataclasses import dataclass

from arena_wallet.config import WalletConfig
from arena_wallet.features.balances.service import BalanceAggregator
from arena_wallet.features.explorer.service import ExplorerLinkBuilder
from arena_wallet.features.session.service import WalletSessionService, WalletSessionStore
from arena_wallet.features.transactions.confirmation import (
    ConfirmationWaiter,
    ConfirmationWaiterProtocol,
)
from arena_wallet.features.transactions.history import TransactionHistoryStore
from arena_wallet.features.transactions.tracker import TransactionTracker
from arena_wallet.shared.storage import JsonFileStorage, KeyValueStorage


@dataclass
class WalletCore:
    config: WalletConfig
    storage: KeyValueStorage
    links: ExplorerLinkBuilder
    sessions: WalletSessionService
    balances: BalanceAggregator
    tracker: TransactionTracker

    @classmethod
    def create(
        cls,
        config: WalletConfig | None = None,
        storage: KeyValueStorage | None = None,
        confirmation_waiter: ConfirmationWaiterProtocol | None = None,
    ) -> "WalletCore":
        config = config or WalletConfig.from_environment()
        storage = storage or JsonFileStorage(config.storage_dir)
        links = ExplorerLinkBuilder.from_config(config)

        return cls(
            config=config,
            storage=storage,
            links=links,
            sessions=WalletSessionService(WalletSessionStore(storage), config),
            balances=BalanceAggregator(config),
            tracker=TransactionTracker(
                history_store=TransactionHistoryStore(storage),
                confirmation_waiter=confirmation_waiter or ConfirmationWaiter(config),
                link_builder=links,
            ),
        )
