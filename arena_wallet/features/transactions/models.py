"""Data classes describing tracked transactions, toasts and history entries."""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from arena_wallet.types import AssetCode, TxDirection, TxKind, TxPhase, TxStatus

DEFAULT_TOAST_TITLE = "Transaction Pending"


def build_id() -> str:
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class TxMeta:
    kind: TxKind
    direction: TxDirection
    asset: AssetCode
    amount: float


@dataclass(frozen=True)
class TrackMeta(TxMeta):
    title: str | None = None


@dataclass(frozen=True)
class TrackResult:
    hash: str
    kind: TxKind | None = None


@dataclass
class ToastItem:
    """Transient notification for one tracked transaction; updated in place."""

    id: str
    title: str
    kind: TxKind
    direction: TxDirection
    asset: AssetCode
    amount: float
    status: TxStatus
    timestamp: str
    phase: TxPhase | None = None
    hash: str | None = None
    explorer_url: str | None = None
    reason: str | None = None


@dataclass(frozen=True)
class TxHistoryItem:
    id: str
    kind: TxKind
    direction: TxDirection
    asset: AssetCode
    amount: float
    status: TxStatus
    timestamp: str
    phase: TxPhase | None = None
    hash: str | None = None
    explorer_url: str | None = None
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "direction": self.direction.value,
            "asset": self.asset.value,
            "amount": self.amount,
            "kind": self.kind.value,
            "status": self.status.value,
            "timestamp": self.timestamp,
        }
        if self.phase is not None:
            data["phase"] = self.phase.value
        if self.hash is not None:
            data["hash"] = self.hash
        if self.explorer_url is not None:
            data["explorerUrl"] = self.explorer_url
        if self.reason is not None:
            data["reason"] = self.reason
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TxHistoryItem":
        """Raises ``KeyError``/``ValueError``/``TypeError`` on malformed input."""
        amount = data["amount"]
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise TypeError(f"amount must be numeric, got {type(amount).__name__}")

        phase = data.get("phase")
        return cls(
            id=str(data["id"]),
            kind=TxKind(data["kind"]),
            direction=TxDirection(data["direction"]),
            asset=AssetCode(data["asset"]),
            amount=amount,
            status=TxStatus(data["status"]),
            timestamp=str(data["timestamp"]),
            phase=TxPhase(phase) if phase is not None else None,
            hash=data.get("hash"),
            explorer_url=data.get("explorerUrl"),
            reason=data.get("reason"),
        )
