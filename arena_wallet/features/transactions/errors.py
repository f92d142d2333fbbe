"""Transaction error types and user-safe failure reasons."""

from __future__ import annotations

from typing import Any

from arena_wallet.shared.logging import find_error_mapping, sanitize_message
from arena_wallet.shared.network import NetworkError

DEFAULT_FAILURE_REASON = "Transaction failed."
DEFAULT_LEDGER_FAILURE = "Transaction failed on Stellar network."
MAX_REASON_LENGTH = 160


class TransactionError(Exception):
    """A tracked transaction failed; ``reason`` is safe to show to the user."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ConfirmationError(Exception):
    """The ledger reported a failure, or confirmation could not be established."""


def ledger_reason(message: str) -> str | None:
    """Explanation for wallet rejections and known operation codes, if any."""
    mapping = find_error_mapping(message)
    if mapping is not None and mapping.ledger_specific:
        return mapping.user_message
    return None


def parse_horizon_failure(payload: Any) -> str:
    if not isinstance(payload, dict):
        return DEFAULT_LEDGER_FAILURE

    title = payload.get("title") if isinstance(payload.get("title"), str) else ""
    extras = payload.get("extras") if isinstance(payload.get("extras"), dict) else {}
    result_codes = extras.get("result_codes")
    result_codes = result_codes if isinstance(result_codes, dict) else {}

    operations = result_codes.get("operations")
    if isinstance(operations, list) and operations:
        op_code = str(operations[0] or "")
        if op_code:
            return ledger_reason(op_code) or f"Operation failed: {op_code}."

    if title:
        return title

    return DEFAULT_LEDGER_FAILURE

def _shorten(message: str) -> str:
    first_line = message.strip().splitlines()[0] if message.strip() else ""
    first_line = sanitize_message(first_line, preserve_addresses=True)
    if len(first_line) > MAX_REASON_LENGTH:
        first_line = first_line[: MAX_REASON_LENGTH - 3].rstrip() + "..."
    return first_line


def sanitize_tx_error(error: Any) -> str:
    """Reduce any failure raised while tracking a transaction to one short line."""
    if not error:
        return DEFAULT_FAILURE_REASON

    if isinstance(error, TransactionError):
        return error.reason or DEFAULT_FAILURE_REASON

    if isinstance(error, NetworkError):
        mapping = find_error_mapping(error.message)
        if mapping is not None:
            return mapping.user_message
        return "A network error occurred while processing the transaction."

    if isinstance(error, BaseException):
        message = str(error).strip()
        return ledger_reason(message) or _shorten(message) or DEFAULT_FAILURE_REASON

    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return _shorten(message)
        if error.get("response"):
            return parse_horizon_failure(error["response"])

    return DEFAULT_FAILURE_REASON
