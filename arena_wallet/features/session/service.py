"""Wallet session persistence for the ArenaX wallet core."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from arena_wallet.config import WalletConfig
from arena_wallet.shared.logging import get_logger
from arena_wallet.shared.storage import KeyValueStorage, read_json, write_json
from arena_wallet.shared.validation import AddressValidator
from arena_wallet.types import SignerKind, StellarNetwork

logger = get_logger(__name__)

WALLET_SESSION_STORAGE_KEY = "arena_wallet_session"


@dataclass(frozen=True)
class WalletSession:
    public_identity: str
    signer_kind: SignerKind
    network: StellarNetwork
    connected_at: str

    def to_dict(self) -> dict[str, str]:
        return {
            "publicKey": self.public_identity,
            "walletType": self.signer_kind.value,
            "network": self.network.value,
            "connectedAt": self.connected_at,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "WalletSession | None":
        """Build a session from stored data, or ``None`` when the shape is wrong."""
        if not isinstance(data, dict):
            return None

        public_identity = data.get("publicKey")
        connected_at = data.get("connectedAt")
        if not isinstance(public_identity, str) or not isinstance(connected_at, str):
            return None

        try:
            signer_kind = SignerKind(data.get("walletType"))
            network = StellarNetwork(data.get("network"))
        except ValueError:
            return None

        return cls(
            public_identity=public_identity,
            signer_kind=signer_kind,
            network=network,
            connected_at=connected_at,
        )


class WalletSessionStore:
    def __init__(self, storage: KeyValueStorage, key: str = WALLET_SESSION_STORAGE_KEY):
        self.storage = storage
        self.key = key

    def read(self) -> WalletSession | None:
        session = WalletSession.from_dict(read_json(self.storage, self.key))
        if session is None and self.storage.get_item(self.key):
            logger.warning("Ignoring malformed wallet session in storage")
        return session

    def write(self, session: WalletSession | None) -> None:
        if session is None:
            self.storage.remove_item(self.key)
            return
        write_json(self.storage, self.key, session.to_dict())


class WalletSessionService:
    """Connect/disconnect bookkeeping on top of the session store.

    The signer adapter that produced ``public_identity`` is external; this only
    records the outcome for the configured network.
    """

    def __init__(self, store: WalletSessionStore, config: WalletConfig):
        self.store = store
        self.config = config

    def current(self) -> WalletSession | None:
        return self.store.read()

    def connect(self, public_identity: str, signer_kind: SignerKind) -> WalletSession:
        result = AddressValidator.validate(public_identity)
        if not result.is_valid:
            raise ValueError(result.error_message)

        session = WalletSession(
            public_identity=result.normalized_value,
            signer_kind=signer_kind,
            network=self.config.network,
            connected_at=datetime.now(timezone.utc).isoformat(),
        )
        self.store.write(session)
        logger.info(
            "Wallet connected via %s on %s",
            signer_kind.value,
            session.network.value,
        )
        return session

    def disconnect(self) -> None:
        self.store.write(None)
        logger.info("Wallet disconnected")
