"""Transaction lifecycle tracking for the ArenaX wallet core.

A tracked transaction moves through ``signing -> submitted -> confirmed``.
While it runs, a toast describes its progress; when it ends, exactly one
history entry records the outcome.
"""

from __future__ import annotations

import asyncio
import inspect
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Union

from arena_wallet.features.explorer.service import ExplorerLinkBuilder
from arena_wallet.features.transactions.confirmation import ConfirmationWaiterProtocol
from arena_wallet.features.transactions.errors import TransactionError, sanitize_tx_error
from arena_wallet.features.transactions.history import TransactionHistoryStore
from arena_wallet.features.transactions.models import (
    DEFAULT_TOAST_TITLE,
    ToastItem,
    TrackMeta,
    TrackResult,
    TxHistoryItem,
    TxMeta,
    build_id,
    utc_timestamp,
)
from arena_wallet.shared.logging import get_logger
from arena_wallet.types import AssetCode, TxDirection, TxKind, TxPhase, TxStatus

logger = get_logger(__name__)

MAX_TOASTS = 6
CANCELLED_REASON = "Transaction tracking was cancelled."

WorkResult = Union[str, TrackResult, Mapping[str, Any]]


class PhaseHelpers:
    """Capability handed to interactive work so it can report progress."""

    def __init__(self, set_phase: Callable[[TxPhase], None]):
        self.set_phase = set_phase


TrackWork = Union[
    str,
    Awaitable[WorkResult],
    Callable[[PhaseHelpers], Awaitable[WorkResult]],
]


class TrackerEvent(Enum):
    TOASTS_CHANGED = "toasts_changed"
    HISTORY_CHANGED = "history_changed"


def extract_hash(result: Any, kind: TxKind) -> tuple[str | None, TxKind]:
    if isinstance(result, str):
        return result, kind

    if isinstance(result, TrackResult):
        return result.hash, result.kind or kind

    if isinstance(result, Mapping):
        raw_kind = result.get("kind")
        if isinstance(raw_kind, str):
            raw_kind = TxKind(raw_kind)
        return result.get("hash"), raw_kind or kind

    return None, kind


class TransactionTracker:
    def __init__(
        self,
        history_store: TransactionHistoryStore,
        confirmation_waiter: ConfirmationWaiterProtocol,
        link_builder: ExplorerLinkBuilder,
        max_toasts: int = MAX_TOASTS,
    ):
        self.history_store = history_store
        self.confirmation_waiter = confirmation_waiter
        self.link_builder = link_builder
        self.max_toasts = max_toasts
        self._toasts: list[ToastItem] = []
        self._listeners: list[Callable[[TrackerEvent], None]] = []

    @property
    def toasts(self) -> list[ToastItem]:
        return self._toasts.copy()

    @property
    def history(self) -> list[TxHistoryItem]:
        return self.history_store.get_all()

    def subscribe(self, listener: Callable[[TrackerEvent], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    def _notify(self, event: TrackerEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error("Error in tracker listener for %s: %s", event.value, e)

    def _find_toast(self, toast_id: str) -> ToastItem | None:
        for toast in self._toasts:
            if toast.id == toast_id:
                return toast
        return None

    def _update_toast(self, toast_id: str, **changes: Any) -> None:
        toast = self._find_toast(toast_id)
        if toast is None:
            return
        for name, value in changes.items():
            setattr(toast, name, value)
        self._notify(TrackerEvent.TOASTS_CHANGED)

    def _push_toast(self, toast: ToastItem) -> None:
        self._toasts = [toast, *self._toasts][: self.max_toasts]
        self._notify(TrackerEvent.TOASTS_CHANGED)

    def _commit(self, entry: TxHistoryItem) -> None:
        self.history_store.prepend(entry)
        self._notify(TrackerEvent.HISTORY_CHANGED)

    def dismiss(self, toast_id: str) -> bool:
        remaining = [toast for toast in self._toasts if toast.id != toast_id]
        if len(remaining) == len(self._toasts):
            return False
        self._toasts = remaining
        self._notify(TrackerEvent.TOASTS_CHANGED)
        return True

    def append_history(
        self,
        direction: TxDirection,
        asset: AssetCode,
        amount: float,
        kind: TxKind = TxKind.CLASSIC,
        status: TxStatus = TxStatus.PENDING,
        hash: str | None = None,
        reason: str | None = None,
    ) -> TxHistoryItem:
        entry = TxHistoryItem(
            id=build_id(),
            kind=kind,
            direction=direction,
            asset=asset,
            amount=amount,
            status=status,
            timestamp=utc_timestamp(),
            hash=hash,
            explorer_url=self.link_builder.build_link(hash, kind) if hash else None,
            reason=reason,
        )
        self._commit(entry)
        return entry

    def clear_history(self) -> None:
        self.history_store.clear()
        self._notify(TrackerEvent.HISTORY_CHANGED)

    async def _resolve_work(self, work: TrackWork, helpers: PhaseHelpers) -> Any:
        if isinstance(work, str):
            return work
        if callable(work):
            result = work(helpers)
            return await result if inspect.isawaitable(result) else result
        return await work

    async def track(self, work: TrackWork, meta: TxMeta) -> str:
        """Drive ``work`` to a confirmed transaction and return its hash.

        The pending toast exists before the first suspension point, so a
        caller that schedules this coroutine sees it as soon as it starts.
        Any failure is recorded, then re-raised as ``TransactionError``.
        Cancellation is recorded as a failure and propagates unchanged.
        """
        toast_id = build_id()
        title = meta.title if isinstance(meta, TrackMeta) and meta.title else DEFAULT_TOAST_TITLE
        kind = meta.kind
        phase = TxPhase.SIGNING if meta.kind == TxKind.SOROBAN else TxPhase.SUBMITTED
        tx_hash: str | None = None
        explorer_url: str | None = None
        finished = False

        toast = ToastItem(
            id=toast_id,
            title=title,
            kind=meta.kind,
            direction=meta.direction,
            asset=meta.asset,
            amount=meta.amount,
            status=TxStatus.PENDING,
            timestamp=utc_timestamp(),
            phase=phase,
        )
        self._push_toast(toast)
        log = logger.with_context(toast_id=toast_id, asset=meta.asset.value)

        def set_phase(next_phase: TxPhase) -> None:
            nonlocal phase
            if finished or next_phase < phase:
                log.debug("Ignoring phase change %s -> %s", phase.value, next_phase.value)
                return
            phase = next_phase
            self._update_toast(toast_id, phase=next_phase)

        def record_failure(reason: str) -> None:
            self._update_toast(
                toast_id,
                status=TxStatus.FAILED,
                reason=reason,
                hash=tx_hash,
                kind=kind,
                explorer_url=explorer_url,
            )
            self._commit(
                TxHistoryItem(
                    id=toast_id,
                    kind=kind,
                    direction=meta.direction,
                    asset=meta.asset,
                    amount=meta.amount,
                    status=TxStatus.FAILED,
                    timestamp=toast.timestamp,
                    phase=phase,
                    hash=tx_hash,
                    explorer_url=explorer_url,
                    reason=reason,
                )
            )

        try:
            response = await self._resolve_work(work, PhaseHelpers(set_phase))
            tx_hash, kind = extract_hash(response, kind)

            if not tx_hash or not isinstance(tx_hash, str):
                tx_hash = None
                raise ValueError("Submitted transaction did not return a hash.")

            if phase == TxPhase.SIGNING:
                set_phase(TxPhase.SUBMITTED)

            explorer_url = self.link_builder.build_link(tx_hash, kind)
            self._update_toast(toast_id, hash=tx_hash, kind=kind, explorer_url=explorer_url)

            await self.confirmation_waiter(tx_hash, kind)

            set_phase(TxPhase.CONFIRMED)
            finished = True
            self._update_toast(toast_id, status=TxStatus.SUCCESS)
            self._commit(
                TxHistoryItem(
                    id=toast_id,
                    kind=kind,
                    direction=meta.direction,
                    asset=meta.asset,
                    amount=meta.amount,
                    status=TxStatus.SUCCESS,
                    timestamp=toast.timestamp,
                    phase=TxPhase.CONFIRMED,
                    hash=tx_hash,
                    explorer_url=explorer_url,
                )
            )
            log.info("Transaction %s confirmed", tx_hash)
            return tx_hash
        except asyncio.CancelledError:
            finished = True
            record_failure(CANCELLED_REASON)
            log.warning("Transaction tracking cancelled")
            raise
        except Exception as error:
            finished = True
            reason = sanitize_tx_error(error)
            record_failure(reason)
            log.warning("Transaction failed: %s", reason)
            raise TransactionError(reason) from error
